# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
Configuration of the *n6urls* public functions.

By default, i.e., when the `config` keyword argument of any of the
public functions of `n6urls.url_helpers` is not given (or is `None`),
`DEFAULT_CONFIG` is used. A custom `UrlHelpersConfig` instance can be:

* created directly (with keyword arguments being the actual values);

* obtained with `UrlHelpersConfig.from_settings()` -- from a
  Pyramid-like *settings* mapping (whose keys are `'url_helpers.<option
  name>'` and values are *raw* (string) option values);

* obtained with `UrlHelpersConfig.from_config_files()` -- from the
  `[url_helpers]` section of the `*.conf` files placed in the standard
  configuration directories (`/etc/n6` and `~/.n6`).

For example, such a configuration file (e.g., `~/.n6/70_url_helpers.conf`)
could contain:

    [url_helpers]
    default_protocols = http, https, ftp
    default_scheme = https
    query_depth = 3

>>> config = UrlHelpersConfig.from_settings({
...     'url_helpers.default_protocols': 'http, https, ftp,',
...     'url_helpers.query_depth': '3',
...     'some_other_section.foo': 'bar',
... })
>>> config.default_protocols
('http', 'https', 'ftp')
>>> config.query_depth
3
>>> config.default_scheme == DEFAULT_CONFIG.default_scheme == 'http'
True
"""

import configparser
import dataclasses
import os
import os.path as osp
import re

from n6urls.const import (
    DEFAULT_PROTOCOLS,
    DEFAULT_QUERY_ARRAY_FORMAT,
    DEFAULT_SCHEME,
    ETC_DIR,
    QUERY_ARRAY_FORMATS,
    QUERY_ARRAY_LIMIT,
    QUERY_DEPTH_LIMIT,
    QUERY_PARAMETER_LIMIT,
    USER_DIR,
)
from n6urls.log_helpers import get_logger
from n6urls.regexes import URL_SCHEME_AND_REST_REGEX


LOGGER = get_logger(__name__)



#
# Public constants
#

SECTION_NAME = 'url_helpers'

DEFAULT_CONFIG_FILENAME_REGEX = r'\A[0-9][0-9]_.*\.conf\Z'
DEFAULT_CONFIG_FILENAME_EXCLUDING_REGEX = r'\Alogging[-.]'



#
# Public classes
#

class ConfigError(Exception):

    """
    A generic, configuration-related, exception class.

    >>> print(ConfigError('Some Message'))
    [configuration-related error] Some Message
    """

    def __str__(self):
        return '[configuration-related error] ' + super().__str__()


@dataclasses.dataclass(frozen=True)
class UrlHelpersConfig:

    """
    Immutable configuration of the *n6urls* public functions.

    >>> UrlHelpersConfig(default_protocols=['ftp']).default_protocols
    ('ftp',)
    >>> UrlHelpersConfig(query_depth=-1)         # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    n6urls.config.ConfigError: ...
    """

    default_protocols: tuple = DEFAULT_PROTOCOLS
    default_scheme: str = DEFAULT_SCHEME
    query_depth: int = QUERY_DEPTH_LIMIT
    query_array_limit: int = QUERY_ARRAY_LIMIT
    query_parameter_limit: int = QUERY_PARAMETER_LIMIT
    query_array_format: str = DEFAULT_QUERY_ARRAY_FORMAT

    # option name -> name of converter (see: `OPT_CONVERTERS`)
    OPT_CONVERTER_SPECS = {
        'default_protocols': 'list_of_str',
        'default_scheme': 'str',
        'query_depth': 'int',
        'query_array_limit': 'int',
        'query_parameter_limit': 'int',
        'query_array_format': 'str',
    }

    def __post_init__(self):
        if isinstance(self.default_protocols, (str, bytes)):
            raise ConfigError(
                f'`default_protocols` should be a sequence of str, '
                f'not a single string ({self.default_protocols!a})')
        default_protocols = tuple(self.default_protocols)
        if not default_protocols:
            raise ConfigError(
                '`default_protocols` should contain at least one protocol '
                '(to accept any protocol, pass an empty sequence as the '
                '`protocols` argument of `is_url()`)')
        for protocol in default_protocols:
            self._verify_scheme('default_protocols', protocol)
        object.__setattr__(self, 'default_protocols', default_protocols)
        self._verify_scheme('default_scheme', self.default_scheme)
        for opt_name in ('query_depth', 'query_array_limit', 'query_parameter_limit'):
            value = getattr(self, opt_name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(
                    f'`{opt_name}` should be a non-negative int '
                    f'(got: {value!a})')
        if self.query_array_format not in QUERY_ARRAY_FORMATS:
            raise ConfigError(
                f'`query_array_format` should be one of: '
                f'{", ".join(QUERY_ARRAY_FORMATS)} (got: {self.query_array_format!a})')

    @classmethod
    def from_settings(cls, settings):
        """
        Create an instance from a Pyramid-like *settings* mapping.

        Only the `'url_helpers.<option name>'` keys are taken into
        account (any other keys are ignored).
        """
        prefix = SECTION_NAME + '.'
        raw_options = {
            key[len(prefix):]: value
            for key, value in settings.items()
            if key.startswith(prefix)}
        return cls._from_raw_options(raw_options, source_descr='the settings')

    @classmethod
    def from_config_files(cls,
                          config_dirs=None,
                          config_filename_regex=None,
                          config_filename_excluding_regex=None):
        """
        Create an instance from the `[url_helpers]` section of the
        configuration files.

        Args/kwargs:
            `config_dirs` (a sequence of `str`, or `None`; default: `None`):
                The directories to search (recursively) for configuration
                files in. `None` means: `/etc/n6` and then `~/.n6` (so
                that the user's files can override the system-wide ones).
            `config_filename_regex` (a `str` or `re.Pattern`, or `None`; default: `None`):
                Configuration may be loaded *only* from those files whose
                names match this regular expression. `None` is equivalent
                to the value of `DEFAULT_CONFIG_FILENAME_REGEX`.
            `config_filename_excluding_regex` (a `str` or `re.Pattern`, or `None`; default: `None`):
                Configuration will *never* be loaded from any files whose
                names match this regular expression. `None` is equivalent to
                the value of `DEFAULT_CONFIG_FILENAME_EXCLUDING_REGEX`.

        Raises:
            `ConfigError` -- if a file could not be parsed, or an unknown
            option is found, or an option value is illegal.
        """
        if config_dirs is None:
            config_dirs = (ETC_DIR, USER_DIR)
        config_files = []
        for path in config_dirs:
            config_files.extend(get_config_file_paths(
                path,
                config_filename_regex,
                config_filename_excluding_regex))
        if not config_files:
            LOGGER.warning('No config files to read')
            return cls()
        config_parser = configparser.ConfigParser()
        try:
            ok_config_files = config_parser.read(config_files, encoding='utf-8')
        except configparser.Error as exc:
            raise ConfigError(f'could not parse the config files: {exc}') from exc
        err_config_files = set(config_files).difference(ok_config_files)
        if err_config_files:
            LOGGER.warning(
                'Config files that could not be read '
                '(check their permission modes?): %s', ', '.join(
                    f'"{name}"' for name in sorted(
                        err_config_files,
                        key=config_files.index)))
        if ok_config_files:
            LOGGER.info('Config files read properly: %s', ', '.join(
                f'"{name}"' for name in ok_config_files))
        if not config_parser.has_section(SECTION_NAME):
            return cls()
        raw_options = dict(config_parser.items(SECTION_NAME))
        return cls._from_raw_options(raw_options, source_descr='the config files')

    @classmethod
    def _from_raw_options(cls, raw_options, source_descr):
        kwargs = {}
        for opt_name, raw_value in raw_options.items():
            converter_name = cls.OPT_CONVERTER_SPECS.get(opt_name)
            if converter_name is None:
                raise ConfigError(
                    f'unknown option {SECTION_NAME}.{opt_name} '
                    f'(in {source_descr})')
            converter = OPT_CONVERTERS[converter_name]
            try:
                kwargs[opt_name] = converter(raw_value)
            except ValueError as exc:
                raise ConfigError(
                    f'error when converting option {SECTION_NAME}.{opt_name} '
                    f'(in {source_descr}), raw value: {raw_value!a} ({exc})') from None
        return cls(**kwargs)

    @staticmethod
    def _verify_scheme(opt_name, value):
        if not (isinstance(value, str)
                and URL_SCHEME_AND_REST_REGEX.search(value + ':')):
            raise ConfigError(f'`{opt_name}` contains an illegal URL scheme: {value!a}')


DEFAULT_CONFIG = UrlHelpersConfig()



#
# Public helpers
#

def make_list_converter(item_converter, name=None, delimiter=','):
    """
    >>> conv = make_list_converter(int)
    >>> conv(' 1, 2 ,3, ')
    [1, 2, 3]
    >>> conv('')
    []
    """

    def converter(s):
        s = s.strip()
        if s.endswith(delimiter):
            # remove trailing delimiter
            s = s[:-len(delimiter)].rstrip()
        if s:
            return [item_converter(item.strip())
                    for item in s.split(delimiter)]
        else:
            return []

    if name is None:
        name = f'__{item_converter.__name__}__list__converter'
    converter.__name__ = name
    return converter


OPT_CONVERTERS = {
    'str': lambda s: s.strip(),
    'int': int,
    'list_of_str': make_list_converter(str, 'list_of_str'),
}


def get_config_file_paths(path,
                          config_filename_regex=None,
                          config_filename_excluding_regex=None):
    """
    Get the paths of configuration files from a given dir.

    (All files whose names match `config_filename_regex` except
    those whose names match `config_filename_excluding_regex`;
    see: `UrlHelpersConfig.from_config_files()`.)

    Returns:
        A sorted list of paths of configuration files.
    """
    if config_filename_regex is None:
        config_filename_regex = DEFAULT_CONFIG_FILENAME_REGEX
    if isinstance(config_filename_regex, str):
        config_filename_regex = re.compile(config_filename_regex)
    if config_filename_excluding_regex is None:
        config_filename_excluding_regex = DEFAULT_CONFIG_FILENAME_EXCLUDING_REGEX
    if isinstance(config_filename_excluding_regex, str):
        config_filename_excluding_regex = re.compile(config_filename_excluding_regex)
    config_files = []
    for directory, _, fnames in os.walk(path):
        for fname in fnames:
            if (config_filename_regex.search(fname)
                  and not config_filename_excluding_regex.search(fname)):
                config_files.append(osp.join(directory, fname))
    return sorted(config_files)
