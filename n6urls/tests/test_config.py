# Copyright (c) 2025-2026 NASK. All rights reserved.

import os
import os.path as osp
import shutil
import tempfile
import unittest
from unittest.mock import (
    call,
    patch,
)

from unittest_expander import (
    expand,
    foreach,
    param,
)

from n6urls.config import (
    DEFAULT_CONFIG,
    ConfigError,
    UrlHelpersConfig,
    get_config_file_paths,
)


class _TempDirMixin:

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir)

    def write_file(self, rel_path, content):
        path = osp.join(self.tmp_dir, rel_path)
        os.makedirs(osp.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path


class Test__ConfigError(unittest.TestCase):

    def test_str(self):
        self.assertEqual(str(ConfigError('Some Message')),
                         '[configuration-related error] Some Message')


@expand
class Test__UrlHelpersConfig(unittest.TestCase):

    def test_defaults(self):
        config = UrlHelpersConfig()
        self.assertEqual(config.default_protocols, ('http', 'https'))
        self.assertEqual(config.default_scheme, 'http')
        self.assertEqual(config.query_depth, 5)
        self.assertEqual(config.query_array_limit, 20)
        self.assertEqual(config.query_parameter_limit, 1000)
        self.assertEqual(config.query_array_format, 'indices')
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_default_protocols_coerced_to_tuple(self):
        config = UrlHelpersConfig(default_protocols=['ftp', 'sftp'])
        self.assertEqual(config.default_protocols, ('ftp', 'sftp'))

    @foreach(
        param(default_protocols='http').label('str as protocols'),
        param(default_protocols=[]).label('empty protocols'),
        param(default_protocols=()).label('empty tuple of protocols'),
        param(default_protocols=['http', 42]).label('non-str protocol'),
        param(default_protocols=['ht tp']).label('illegal protocol'),
        param(default_scheme='').label('empty scheme'),
        param(default_scheme='1http').label('illegal scheme'),
        param(default_scheme=None).label('None as scheme'),
        param(query_depth=-1).label('negative depth'),
        param(query_depth='5').label('str depth'),
        param(query_array_limit=True).label('bool array limit'),
        param(query_parameter_limit=1.5).label('float parameter limit'),
        param(query_array_format='comma').label('illegal array format'),
    )
    def test_illegal(self, label, context_targets, **kwargs):
        with self.assertRaises(ConfigError):
            UrlHelpersConfig(**kwargs)

    def test_immutable(self):
        with self.assertRaises(AttributeError):
            DEFAULT_CONFIG.default_scheme = 'https'


@expand
class Test__UrlHelpersConfig__from_settings(unittest.TestCase):

    def test_all_options(self):
        config = UrlHelpersConfig.from_settings({
            'url_helpers.default_protocols': 'http, https, ftp',
            'url_helpers.default_scheme': ' https ',
            'url_helpers.query_depth': '3',
            'url_helpers.query_array_limit': '100',
            'url_helpers.query_parameter_limit': '50',
            'url_helpers.query_array_format': 'repeat',
            'other_section.foo': 'bar',
            'url_helpers_foo': 'bar',
        })
        self.assertEqual(config, UrlHelpersConfig(
            default_protocols=('http', 'https', 'ftp'),
            default_scheme='https',
            query_depth=3,
            query_array_limit=100,
            query_parameter_limit=50,
            query_array_format='repeat'))

    def test_no_options(self):
        self.assertEqual(UrlHelpersConfig.from_settings({}), DEFAULT_CONFIG)

    @foreach(
        param('').label('empty'),
        param(' , ').label('only delimiter'),
    )
    def test_empty_protocols(self, raw_value):
        with self.assertRaises(ConfigError):
            UrlHelpersConfig.from_settings({'url_helpers.default_protocols': raw_value})

    @foreach(
        param({'url_helpers.unknown_opt': 'x'}).label('unknown option'),
        param({'url_helpers.query_depth': 'five'}).label('not an int'),
        param({'url_helpers.query_depth': '-5'}).label('negative int'),
        param({'url_helpers.default_scheme': 'ht tp'}).label('illegal scheme'),
        param({'url_helpers.query_array_format': 'comma'}).label('illegal array format'),
    )
    def test_illegal(self, settings):
        with self.assertRaises(ConfigError):
            UrlHelpersConfig.from_settings(settings)


class Test__UrlHelpersConfig__from_config_files(_TempDirMixin, unittest.TestCase):

    def test_files_read_in_order(self):
        self.write_file('10_url_helpers.conf', (
            '[url_helpers]\n'
            'default_protocols = http, https, ftp,\n'
            'query_depth = 3\n'))
        self.write_file('sub/20_override.conf', (
            '[url_helpers]\n'
            'query_depth = 4\n'
            '\n'
            '[other_section]\n'
            'foo = bar\n'))
        self.write_file('30_ignored.txt', '[url_helpers]\nquery_depth = 99\n')
        self.write_file('logging-30.conf', '[url_helpers]\nquery_depth = 98\n')
        config = UrlHelpersConfig.from_config_files([self.tmp_dir])
        self.assertEqual(config, UrlHelpersConfig(
            default_protocols=('http', 'https', 'ftp'),
            query_depth=4))

    def test_later_dirs_override_earlier_ones(self):
        etc_dir = osp.dirname(self.write_file('etc/00_a.conf', (
            '[url_helpers]\n'
            'default_scheme = https\n'
            'query_array_limit = 10\n')))
        user_dir = osp.dirname(self.write_file('user/00_a.conf', (
            '[url_helpers]\n'
            'query_array_limit = 30\n')))
        config = UrlHelpersConfig.from_config_files([etc_dir, user_dir])
        self.assertEqual(config.default_scheme, 'https')
        self.assertEqual(config.query_array_limit, 30)

    def test_no_section(self):
        self.write_file('10_a.conf', '[other_section]\nfoo = bar\n')
        self.assertEqual(UrlHelpersConfig.from_config_files([self.tmp_dir]), DEFAULT_CONFIG)

    @patch('n6urls.config.LOGGER')
    def test_no_files(self, LOGGER):
        self.assertEqual(UrlHelpersConfig.from_config_files([self.tmp_dir]), DEFAULT_CONFIG)
        self.assertEqual(LOGGER.mock_calls, [call.warning('No config files to read')])

    def test_nonexistent_dir(self):
        config = UrlHelpersConfig.from_config_files([osp.join(self.tmp_dir, 'nonexistent')])
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_standard_dirs_used_by_default(self):
        with patch('n6urls.config.get_config_file_paths', return_value=[]) as get_paths:
            UrlHelpersConfig.from_config_files()
        self.assertEqual(get_paths.mock_calls, [
            call('/etc/n6', None, None),
            call(osp.expanduser('~/.n6'), None, None),
        ])

    def test_unknown_option(self):
        self.write_file('10_a.conf', '[url_helpers]\nfoo = bar\n')
        with self.assertRaises(ConfigError):
            UrlHelpersConfig.from_config_files([self.tmp_dir])

    def test_illegal_value(self):
        self.write_file('10_a.conf', '[url_helpers]\nquery_parameter_limit = many\n')
        with self.assertRaises(ConfigError):
            UrlHelpersConfig.from_config_files([self.tmp_dir])

    def test_malformed_file(self):
        self.write_file('10_a.conf', 'no section header here\n')
        with self.assertRaises(ConfigError):
            UrlHelpersConfig.from_config_files([self.tmp_dir])


class Test__get_config_file_paths(_TempDirMixin, unittest.TestCase):

    def test_matching_files_sorted(self):
        expected = [
            self.write_file('00_first.conf', ''),
            self.write_file('11_second.conf', ''),
            self.write_file('sub/05_nested.conf', ''),
        ]
        self.write_file('1_too_short.conf', '')
        self.write_file('22_no_conf_suffix.ini', '')
        self.write_file('logging.conf', '')
        self.assertEqual(get_config_file_paths(self.tmp_dir), sorted(expected))

    def test_custom_regexes(self):
        expected = [self.write_file('foo.ini', '')]
        self.write_file('foo-excluded.ini', '')
        self.write_file('00_a.conf', '')
        self.assertEqual(
            get_config_file_paths(self.tmp_dir, r'\.ini\Z', r'excluded'),
            expected)
