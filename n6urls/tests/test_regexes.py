# Copyright (c) 2025-2026 NASK. All rights reserved.

import unittest

from n6urls.regexes import (
    ABSOLUTE_URL_PREFIX_REGEX,
    FORBIDDEN_DOMAIN_CODE_POINT_REGEX,
    FORBIDDEN_HOST_CODE_POINT_REGEX,
    QUERY_KEY_BRACKET_GROUP_REGEX,
    URL_SCHEME_AND_REST_REGEX,
)


class Test_URL_SCHEME_AND_REST_REGEX(unittest.TestCase):

    regex = URL_SCHEME_AND_REST_REGEX

    def test_valid(self):
        self.assertRegex('http://example.com', self.regex)
        self.assertRegex('HTTPS://example.com', self.regex)
        self.assertRegex('x:', self.regex)
        self.assertRegex('foo+bar.baz-1:spam', self.regex)
        self.assertRegex('mailto:someone@example.com', self.regex)
        self.assertRegex('localhost:8080', self.regex)

    def test_not_valid(self):
        self.assertNotRegex('example.com', self.regex)
        self.assertNotRegex('//example.com', self.regex)
        self.assertNotRegex(':foo', self.regex)
        self.assertNotRegex('1http://example.com', self.regex)
        self.assertNotRegex('ht tp://example.com', self.regex)
        self.assertNotRegex(' http://example.com', self.regex)
        self.assertNotRegex('ąę://example.com', self.regex)
        self.assertNotRegex('', self.regex)

    def test_groups(self):
        match = self.regex.search('HTTP://example.com/\nfoo')
        self.assertEqual(match.group('scheme'), 'HTTP')
        self.assertEqual(match.group('rest'), '://example.com/\nfoo')


class Test_ABSOLUTE_URL_PREFIX_REGEX(unittest.TestCase):

    regex = ABSOLUTE_URL_PREFIX_REGEX

    def test_valid(self):
        self.assertRegex('http://example.com', self.regex)
        self.assertRegex('ab:', self.regex)
        self.assertRegex('foo+bar.baz-1:spam', self.regex)

    def test_not_valid(self):
        self.assertNotRegex('c:\\Windows', self.regex)
        self.assertNotRegex('/foo:bar', self.regex)
        self.assertNotRegex('foo/bar:baz', self.regex)
        self.assertNotRegex('1ab:', self.regex)
        self.assertNotRegex('', self.regex)


class Test_FORBIDDEN_HOST_CODE_POINT_REGEX(unittest.TestCase):

    regex = FORBIDDEN_HOST_CODE_POINT_REGEX

    def test_allowed(self):
        self.assertNotRegex('example.com', self.regex)
        self.assertNotRegex('exa%20mple', self.regex)
        self.assertNotRegex('ex!$&\'()*+,;=ample', self.regex)
        self.assertNotRegex('zażółć', self.regex)

    def test_forbidden(self):
        for char in '\x00\t\n\r #/:<>?@[\\]^|':
            with self.subTest(char=char):
                self.assertRegex(f'exa{char}mple', self.regex)


class Test_FORBIDDEN_DOMAIN_CODE_POINT_REGEX(unittest.TestCase):

    regex = FORBIDDEN_DOMAIN_CODE_POINT_REGEX

    def test_allowed(self):
        self.assertNotRegex('example.com', self.regex)
        self.assertNotRegex('ex-ample_1.com', self.regex)
        self.assertNotRegex('zażółć.pl', self.regex)

    def test_forbidden(self):
        for char in '\x00\x01\x1f \x7f#%/:<>?@[\\]^|':
            with self.subTest(char=char):
                self.assertRegex(f'exa{char}mple', self.regex)


class Test_QUERY_KEY_BRACKET_GROUP_REGEX(unittest.TestCase):

    regex = QUERY_KEY_BRACKET_GROUP_REGEX

    def test_findall(self):
        self.assertEqual(self.regex.findall('a[b][]c[0]'), ['[b]', '[]', '[0]'])
        self.assertEqual(self.regex.findall('a[[b]]'), ['[b]'])
        self.assertEqual(self.regex.findall('a[b'), [])
        self.assertEqual(self.regex.findall('a'), [])
