# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
The public URL-related helpers: validation, classification,
normalization, comparison, host matching, query decoding/appending
and joining.

None of these functions raises `n6urls.exceptions.URLHelperError`
(nor any of its subclasses) -- instead, the predicates return `False`
and the other functions return `None` (such a conversion is always
logged, at the DEBUG level).

>>> is_url('https://example.com/foo')
True
>>> normalize('Example.COM/a/../b?')
'http://example.com/b'
>>> compare('HTTP://example.com', 'example.com')
True
>>> normalize_query('https://example.com/?foo[bar]=baz&x[]=1&x[]=2')
{'foo': {'bar': 'baz'}, 'x': ['1', '2']}
>>> append_query('https://example.com/home#about', {'foo': 'bar'})
'https://example.com/home?foo=bar#about'
>>> join('http://example.com/abc/', 'xyz')
'http://example.com/abc/xyz'
"""

import dataclasses
from collections.abc import (
    Mapping,
    Sequence,
    Set,
)

from n6urls.common_helpers import merge_query_structures
from n6urls.config import DEFAULT_CONFIG
from n6urls.exceptions import (
    InvalidInputError,
    URLHelperError,
)
from n6urls.log_helpers import get_logger
from n6urls.parsing import (
    ParsedURL,
    parse_url,
)
from n6urls.query_helpers import (
    decode_query,
    encode_query,
    verify_query_structure_limits,
)
from n6urls.regexes import ABSOLUTE_URL_PREFIX_REGEX


LOGGER = get_logger(__name__)



#
# Public functions
#

def is_url(value, protocols=None, *, config=None):
    """
    Determine whether the given value is a valid URL.

    Args:
        `value` (str or n6urls.parsing.ParsedURL):
            The value to check.
        `protocols` (a sequence/set of str, or None; default: None):
            URL schemes (without `:`) to be accepted. An *empty*
            sequence means that any scheme is accepted. `None` (or any
            other non-sequence, including a str) means the default
            ones (`'http'` and `'https'`, unless configured otherwise).

    Kwargs:
        `config` (n6urls.config.UrlHelpersConfig or None).

    Returns:
        `True` or `False`.

    >>> is_url('http://example.com'), is_url('ftp://example.com')
    (True, False)
    >>> is_url('ftp://example.com', ['ftp'])
    True
    >>> is_url('foo:bar', [])
    True
    >>> is_url('example.com', []), is_url(''), is_url(None)
    (False, False, False)
    """
    config = _get_config(config)
    if isinstance(value, ParsedURL):
        value = value.href
    try:
        _verify_non_empty_str(value, 'value')
        url = parse_url(value)
    except URLHelperError as exc:
        _log_failure('is_url', exc)
        return False
    if (not isinstance(protocols, (Sequence, Set))
          or isinstance(protocols, (str, bytes, bytearray))):
        protocols = config.default_protocols
    if not protocols:
        return True
    return url.scheme in protocols


def is_absolute(value):
    """
    Determine whether the given value is an absolute URL (i.e., starts
    with a URL scheme of at least two characters, followed by `:`).

    >>> is_absolute('http://example.com'), is_absolute('mailto:x@example.com')
    (True, True)
    >>> is_absolute('//example.com'), is_absolute('c:\\\\Windows'), is_absolute('')
    (False, False, False)
    """
    if not (value and isinstance(value, str)):
        return False
    return ABSOLUTE_URL_PREFIX_REGEX.search(value) is not None


def is_relative(value):
    """
    Determine whether the given value is a relative URL (i.e., a
    non-empty str that is not an absolute URL).

    >>> is_relative('/about'), is_relative('about'), is_relative('//example.com')
    (True, True, True)
    >>> is_relative('http://example.com'), is_relative(''), is_relative(None)
    (False, False, False)
    """
    if not (value and isinstance(value, str)):
        return False
    return not is_absolute(value)


def normalize(value, *, config=None):
    """
    Normalize the given URL.

    A relative URL is prefixed with the default scheme (`http`, unless
    configured otherwise) and `://` (after stripping any leading
    slashes). Then the URL is parsed and serialized back, and the
    trailing `#` and/or `?` (if not followed by anything) are removed.

    Returns:
        The normalized URL (str) or `None` if it is not valid.

    >>> normalize('http://example.com')
    'http://example.com/'
    >>> normalize('//example.com'), normalize('example.com')
    ('http://example.com/', 'http://example.com/')
    >>> normalize('https://example.com/?#')
    'https://example.com/'
    >>> normalize('https://example.com/?x=1#')
    'https://example.com/?x=1'
    >>> normalize('http://exa mple.com') is None
    True
    """
    config = _get_config(config)
    try:
        _verify_non_empty_str(value, 'value')
        if is_relative(value):
            value = f'{config.default_scheme}://' + value.lstrip('/')
        url = parse_url(value)
    except URLHelperError as exc:
        _log_failure('normalize', exc)
        return None
    # (the fragment first, so that `...?#` gets rid of both)
    if url.fragment == '':
        url = dataclasses.replace(url, fragment=None)
    if url.query == '' and url.fragment is None:
        url = dataclasses.replace(url, query=None)
    return url.href


def compare(left, right, *, config=None):
    """
    Compare two URLs, normalizing them first (see: `normalize()`).

    Returns:
        `True` if both are valid (for any scheme) and equal after
        normalization, otherwise `False`.

    >>> compare('http://EXAMPLE.COM', 'example.com')
    True
    >>> compare('http://example.com/a', 'http://example.com/b')
    False
    >>> compare(None, None)
    False
    """
    left = normalize(left, config=config)
    right = normalize(right, config=config)
    if not (is_url(left, [], config=config) and is_url(right, [], config=config)):
        return False
    return left == right


def matches_host(value, host, *, config=None):
    """
    Determine whether the given URL's host (including the port, if it
    is specified and non-default) is equal to `host`.

    >>> matches_host('http://example.com/abc', 'example.com')
    True
    >>> matches_host('http://example.com:1337/abc', 'example.com:1337')
    True
    >>> matches_host('http://example.com:80/abc', 'example.com')
    True
    >>> matches_host('http://example.com:1337/abc', 'example.com')
    False
    >>> matches_host('http://example.com/abc', '')
    False
    """
    if not is_url(value, config=config):
        return False
    if not (host and isinstance(host, str)):
        _log_failure('matches_host', InvalidInputError(
            f'host {host!a} is not a non-empty str', host))
        return False
    return parse_url(value).host == host


def normalize_query(value, *, config=None):
    """
    Extract the query of the given URL, as a *query structure*
    (see: `n6urls.query_helpers.decode_query()`).

    Returns:
        A dict (empty if there is no query) or `None` if `value` is
        not a valid URL (considering the default protocols).

    >>> normalize_query('http://example.com')
    {}
    >>> normalize_query('http://example.com/?abc=xyz&foo=bar')
    {'abc': 'xyz', 'foo': 'bar'}
    >>> normalize_query('ftp://example.com/?abc=xyz') is None
    True
    """
    config = _get_config(config)
    if not is_url(value, config=config):
        return None
    try:
        return _decode_query_of(parse_url(value), config)
    except URLHelperError as exc:
        _log_failure('normalize_query', exc)
        return None


def append_query(value, query, *, config=None):
    """
    Append query parameters to the given URL.

    The existing query (if any) is decoded, (deep-)merged with `query`
    (see: `n6urls.common_helpers.merge_query_structures()`), encoded
    back and the resultant URL is normalized (see: `normalize()`).
    Note that the URL's credentials (if any) are not kept.

    A merged structure exceeding the configured query limits (see:
    `n6urls.query_helpers.verify_query_structure_limits()`) is
    rejected, so that `normalize_query()` applied to the result
    gives back the merged structure.

    Args:
        `value` (str):
            A valid URL (considering the default protocols).
        `query` (a mapping):
            A *query structure* to be appended.

    Returns:
        The resultant URL (str) or `None` (if any argument is wrong).

    >>> append_query('https://example.com/test', {'foo': 'bar'})
    'https://example.com/test?foo=bar'
    >>> append_query('https://example.com/test?abc=xyz', {'foo': 'bar'})
    'https://example.com/test?abc=xyz&foo=bar'
    >>> append_query('https://example.com/', {})
    'https://example.com/'
    >>> append_query('https://example.com/', ['foo']) is None
    True
    >>> append_query('https://example.com/', {'a': list(range(22))}) is None
    True
    """
    config = _get_config(config)
    if not is_url(value, config=config):
        return None
    try:
        if not isinstance(query, Mapping):
            raise InvalidInputError(f'query {query!a} is not a mapping', query)
        # (rejecting cyclic or unencodable structures before merging)
        encode_query(query, array_format=config.query_array_format)
        url = parse_url(value)
        combined = merge_query_structures(_decode_query_of(url, config), query)
        verify_query_structure_limits(
            combined,
            depth=config.query_depth,
            array_limit=config.query_array_limit,
            parameter_limit=config.query_parameter_limit)
        encoded = encode_query(combined, array_format=config.query_array_format)
    except URLHelperError as exc:
        _log_failure('append_query', exc)
        return None
    if url.hostname is None:
        origin = url.protocol
    else:
        origin = f'{url.scheme}://{url.host}'
    return normalize(
        origin
        + url.pathname
        + ('?' + encoded if encoded else '')
        + url.hash,
        config=config)


def join(base, path, *, config=None):
    """
    Resolve the relative URL `path` against the URL `base`.

    Returns:
        The resultant URL (str) or `None` if `base` is not a valid
        URL (for any scheme) or `path` is not a relative URL.

    >>> join('http://example.com', '/test'), join('http://example.com', 'test')
    ('http://example.com/test', 'http://example.com/test')
    >>> join('http://example.com', 'https://example.org') is None
    True
    >>> join('/abc', '/xyz') is None
    True
    """
    if not is_url(base, [], config=config):
        return None
    if not is_relative(path):
        _log_failure('join', InvalidInputError(f'{path!a} is not a relative URL', path))
        return None
    try:
        return parse_url(base).resolve(path).href
    except URLHelperError as exc:
        _log_failure('join', exc)
        return None



#
# Non-public local helpers
#

def _get_config(config):
    return DEFAULT_CONFIG if config is None else config


def _verify_non_empty_str(value, arg_name):
    if not (value and isinstance(value, str)):
        raise InvalidInputError(f'{arg_name} {value!a} is not a non-empty str', value)


def _decode_query_of(url, config):
    return decode_query(
        url.search,
        depth=config.query_depth,
        array_limit=config.query_array_limit,
        parameter_limit=config.query_parameter_limit)


def _log_failure(func_name, exc):
    LOGGER.debug('%s() -> sentinel result because of %s: %s',
                 func_name, exc.__class__.__name__, exc)
