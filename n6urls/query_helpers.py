# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
Decoding query strings into *query structures* (nested dicts/lists of
strings) and encoding such structures back into query strings.

The bracket notation (`a[b][c]=x`, `a[]=x`, `a[0]=x`) is supported,
in the flavor popularized by the *qs* library (used by many web
frameworks), including its limits on nesting depth, array indices and
the number of parameters.

>>> decode_query('?abc=xyz&foo[bar]=baz&list[]=1&list[]=2')
{'abc': 'xyz', 'foo': {'bar': 'baz'}, 'list': ['1', '2']}
>>> encode_query({'abc': 'xyz', 'foo': {'bar': 'baz'}, 'list': ['1', '2']})
'abc=xyz&foo%5Bbar%5D=baz&list%5B0%5D=1&list%5B1%5D=2'
"""

import datetime
import re
from collections.abc import (
    Mapping,
    Sequence,
)
from urllib.parse import (
    quote,
    unquote,
)

from n6urls.const import (
    DEFAULT_QUERY_ARRAY_FORMAT,
    QUERY_ARRAY_FORMATS,
    QUERY_ARRAY_LIMIT,
    QUERY_DEPTH_LIMIT,
    QUERY_PARAMETER_LIMIT,
)
from n6urls.exceptions import (
    InvalidInputError,
    QueryStructureError,
)
from n6urls.log_helpers import get_logger
from n6urls.regexes import QUERY_KEY_BRACKET_GROUP_REGEX


LOGGER = get_logger(__name__)



#
# Public functions
#

def decode_query(query,
                 *,
                 depth=QUERY_DEPTH_LIMIT,
                 array_limit=QUERY_ARRAY_LIMIT,
                 parameter_limit=QUERY_PARAMETER_LIMIT):
    r"""
    Decode a query string into a *query structure*.

    Args:
        `query` (str or None):
            The query string; an optional leading `?` is ignored.

    Kwargs:
        `depth` (int):
            The maximum number of bracket groups in a key interpreted
            as nesting levels; the remaining part of the key (if any)
            becomes a single literal key (including its brackets).
        `array_limit` (int):
            The maximum index in `key[<index>]` which makes the value
            an array item (greater indices become dict keys).
        `parameter_limit` (int):
            The maximum number of `&`-separated parts taken into
            account (any further ones are ignored).

    Returns:
        A dict (possibly empty) whose keys are strings and values are
        strings, lists or dicts (nested accordingly).

    Raises:
        `InvalidInputError` -- if `query` is neither a str nor `None`.

    >>> decode_query('')
    {}
    >>> decode_query(None)
    {}
    >>> decode_query('?')
    {}
    >>> decode_query('a=1&b=2&a=3')
    {'a': ['1', '3'], 'b': '2'}
    >>> decode_query('a&b=&=c&&d=e=f')
    {'a': '', 'b': '', 'd': 'e=f'}
    >>> decode_query('a+b=c+d%20e&%C5%9B=%C4%87')
    {'a b': 'c d e', 'ś': 'ć'}
    >>> decode_query('bad=%C5&worse=%zz%41')
    {'bad': '%C5', 'worse': '%zz%41'}

    Nesting:

    >>> decode_query('a[b][c]=d&a[b][e]=f&a[g]=h')
    {'a': {'b': {'c': 'd', 'e': 'f'}, 'g': 'h'}}
    >>> decode_query('a[b][c][d][e][f][g][h]=i')
    {'a': {'b': {'c': {'d': {'e': {'f': {'[g][h]': 'i'}}}}}}}
    >>> decode_query('a[b][c]=d', depth=1)
    {'a': {'b': {'[c]': 'd'}}}
    >>> decode_query('a[b]=c', depth=0)
    {'a[b]': 'c'}

    Arrays (note that gaps are removed):

    >>> decode_query('a[]=b&a[]=c')
    {'a': ['b', 'c']}
    >>> decode_query('a[1]=c&a[0]=b')
    {'a': ['b', 'c']}
    >>> decode_query('a[1]=b&a[15]=c')
    {'a': ['b', 'c']}
    >>> decode_query('a[21]=b')
    {'a': {'21': 'b'}}
    >>> decode_query('a[0]=b&a[x]=c')
    {'a': {'0': 'b', 'x': 'c'}}
    >>> decode_query('a[0][b]=c&a[0][d]=e&a[1][b]=f')
    {'a': [{'b': 'c', 'd': 'e'}, {'b': 'f'}]}

    >>> decode_query('a=1&a=2&a=3', parameter_limit=2)
    {'a': ['1', '2']}

    >>> decode_query(b'a=1')                     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    n6urls.exceptions.InvalidInputError: ...
    """
    if query is None:
        return {}
    if not isinstance(query, str):
        raise InvalidInputError(f'query {query!a} is not a str', query)
    if query.startswith('?'):
        query = query[1:]
    parts = query.split('&')
    if len(parts) > parameter_limit:
        LOGGER.debug(
            'query string has %d parts, only the first %d are decoded',
            len(parts), parameter_limit)
        parts = parts[:max(parameter_limit, 0)]
    flat = {}
    for part in parts:
        if not part:
            continue
        key, value = _split_query_part(part)
        if not key:
            continue
        if key in flat:
            flat[key] = _SparseArray.concat(flat[key], value)
        else:
            flat[key] = value
    result = {}
    for key, value in flat.items():
        chain = _split_key(key, depth)
        result = _merge(result, _build_from_chain(chain, value, array_limit))
    return _compact(result)


def encode_query(structure, *, array_format=DEFAULT_QUERY_ARRAY_FORMAT):
    r"""
    Encode a *query structure* into a query string (without `?`).

    Args:
        `structure` (a mapping):
            Keys are converted to strings; values can be: strings,
            numbers, `bool` values (encoded as `true`/`false`),
            `None` (encoded as an empty string), `datetime.date`/
            `datetime.datetime` objects (ISO format), as well as lists/
            tuples and mappings (nested arbitrarily) of such values.

    Kwargs:
        `array_format` (str):
            One of: `'indices'` (the default: `a[0]=x&a[1]=y`),
            `'brackets'` (`a[]=x&a[]=y`), `'repeat'` (`a=x&a=y`).

    Returns:
        The query string (empty if there is nothing to encode). Keys
        and values are percent-encoded -- everything except the
        RFC 3986 *unreserved* characters (so also the brackets).

    Raises:
        `InvalidInputError` -- if `structure` is not a mapping.
        `QueryStructureError` -- if an unencodable value is found
        (or a container contains itself), or `array_format` is wrong.

    >>> encode_query({})
    ''
    >>> encode_query({'a': 'b c', 'ś': 'ć/&='})
    'a=b%20c&%C5%9B=%C4%87%2F%26%3D'
    >>> encode_query({'a': [1, 2.5, True, None], 'b': [], 'c': {}})
    'a%5B0%5D=1&a%5B1%5D=2.5&a%5B2%5D=true&a%5B3%5D='
    >>> encode_query({'a': {'b': ['c', {'d': 'e'}]}})
    'a%5Bb%5D%5B0%5D=c&a%5Bb%5D%5B1%5D%5Bd%5D=e'
    >>> encode_query({'a': ['x', 'y']}, array_format='brackets')
    'a%5B%5D=x&a%5B%5D=y'
    >>> encode_query({'a': ['x', 'y']}, array_format='repeat')
    'a=x&a=y'
    >>> encode_query({'d': datetime.date(2026, 1, 31)})
    'd=2026-01-31'

    >>> encode_query({'a': object()})            # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    n6urls.exceptions.QueryStructureError: ...
    >>> encode_query(['a', 'b'])                 # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    n6urls.exceptions.InvalidInputError: ...
    """
    if not isinstance(structure, Mapping):
        raise InvalidInputError(
            f'query structure {structure!a} is not a mapping',
            structure)
    if array_format not in QUERY_ARRAY_FORMATS:
        raise QueryStructureError(
            f'illegal array format {array_format!a} '
            f'(should be one of: {", ".join(QUERY_ARRAY_FORMATS)})',
            array_format)
    pairs = []
    active_container_ids = set()
    for key, value in structure.items():
        _encode_value(pairs, _key_to_str(key), value, array_format, active_container_ids)
    return '&'.join(f'{quote(k, safe="")}={quote(v, safe="")}' for k, v in pairs)


def verify_query_structure_limits(structure,
                                  *,
                                  depth=QUERY_DEPTH_LIMIT,
                                  array_limit=QUERY_ARRAY_LIMIT,
                                  parameter_limit=QUERY_PARAMETER_LIMIT):
    """
    Check that the given (encodable, see: `encode_query()`) *query
    structure* stays within the limits `decode_query()` applies, so
    that its encoded form can be decoded back into the same shape.

    Nesting is counted in bracket groups (`a[b][0]=x` is nested 2
    levels deep), array items are counted as if the `indices` array
    format was used (the highest index must not exceed `array_limit`)
    and each leaf value counts as one parameter.

    Raises:
        `QueryStructureError` -- if any of the limits is exceeded.

    >>> verify_query_structure_limits({'a': {'b': ['c']}}, depth=2)
    >>> verify_query_structure_limits({'a': {'b': ['c']}}, depth=1)   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    n6urls.exceptions.QueryStructureError: ...
    >>> verify_query_structure_limits({'a': ['x', 'y', 'z']}, array_limit=2)
    >>> verify_query_structure_limits({'a': ['w', 'x', 'y', 'z']}, array_limit=2)
    Traceback (most recent call last):
      ...
    n6urls.exceptions.QueryStructureError: array under key 'a' has 4 items (the limit is 3)
    >>> verify_query_structure_limits({'a': [], 'b': {}, 'c': 'd'}, depth=0, parameter_limit=1)
    """
    param_count = 0
    for key, value in structure.items():
        param_count += _count_params_within_limits(
            _key_to_str(key), value, 0, depth, array_limit)
    if param_count > parameter_limit:
        raise QueryStructureError(
            f'query structure has {param_count} leaf values '
            f'(the limit is {parameter_limit})',
            structure)



#
# Non-public local constants and helpers
#

_MALFORMED_PERCENT_ESCAPE_REGEX = re.compile(r'%(?![0-9a-fA-F]{2})')

_ARRAY_INDEX_REGEX = re.compile(r'\A(?:0|[1-9][0-9]*)\Z', re.ASCII)


class _SparseArray:

    """
    An array whose items may not be contiguous (as the ones produced
    by decoding `a[1]=x&a[15]=y`); see `_compact()`.
    """

    def __init__(self, items=()):
        self.index_to_item = dict(enumerate(items))

    @classmethod
    def concat(cls, *values):
        result = cls()
        for val in values:
            if isinstance(val, _SparseArray):
                for item in val.items():
                    result.push(item)
            else:
                result.push(val)
        return result

    @property
    def length(self):
        return max(self.index_to_item, default=-1) + 1

    def push(self, item):
        self.index_to_item[self.length] = item

    def items(self):
        return [item for _, item in sorted(self.index_to_item.items())]

    def to_dict(self):
        return {str(i): item for i, item in sorted(self.index_to_item.items())}

    def __repr__(self):
        return f'<{self.__class__.__qualname__} {self.index_to_item!r}>'


def _decode_component(s):
    s = s.replace('+', ' ')
    if _MALFORMED_PERCENT_ESCAPE_REGEX.search(s):
        return s
    try:
        return unquote(s, errors='strict')
    except UnicodeDecodeError:
        return s


def _split_query_part(part):
    bracket_equals_pos = part.find(']=')
    pos = part.find('=') if bracket_equals_pos == -1 else bracket_equals_pos + 1
    if pos == -1:
        return _decode_component(part), ''
    return _decode_component(part[:pos]), _decode_component(part[pos+1:])


def _split_key(key, depth):
    """
    >>> _split_key('a[b][c]', 5)
    ['a', '[b]', '[c]']
    >>> _split_key('[b]x[c]', 5)
    ['[b]', '[c]']
    >>> _split_key('a[b][c][d]', 2)
    ['a', '[b]', '[c]', '[[d]]']
    >>> _split_key('a[b]', 0)
    ['a[b]']
    """
    if depth <= 0:
        return [key]
    groups = list(QUERY_KEY_BRACKET_GROUP_REGEX.finditer(key))
    if not groups:
        return [key]
    chain = []
    parent = key[:groups[0].start()]
    if parent:
        chain.append(parent)
    chain.extend(m.group() for m in groups[:depth])
    if len(groups) > depth:
        chain.append('[' + key[groups[depth].start():] + ']')
    return chain


def _build_from_chain(chain, leaf, array_limit):
    for segment in reversed(chain):
        if segment == '[]':
            leaf = _SparseArray.concat(leaf)
            continue
        is_bracketed = segment.startswith('[') and segment.endswith(']')
        clean_segment = segment[1:-1] if is_bracketed else segment
        if (is_bracketed
              and _ARRAY_INDEX_REGEX.search(clean_segment)
              and len(clean_segment) <= len(str(array_limit))
              and int(clean_segment) <= array_limit):
            arr = _SparseArray()
            arr.index_to_item[int(clean_segment)] = leaf
            leaf = arr
        else:
            leaf = {clean_segment: leaf}
    return leaf


def _is_container(obj):
    return isinstance(obj, (dict, _SparseArray))


def _merge(target, source):
    # (note: `target` may be modified in place)
    if source is None or source == '':
        return target
    if not _is_container(source):
        if isinstance(target, _SparseArray):
            target.push(source)
        elif isinstance(target, dict):
            target[source] = True
        else:
            return _SparseArray([target, source])
        return target
    if not _is_container(target):
        return _SparseArray.concat(target, source)
    if isinstance(target, _SparseArray):
        if isinstance(source, _SparseArray):
            for i, item in sorted(source.index_to_item.items()):
                if i in target.index_to_item:
                    target_item = target.index_to_item[i]
                    if _is_container(target_item) and _is_container(item):
                        target.index_to_item[i] = _merge(target_item, item)
                    else:
                        target.push(item)
                else:
                    target.index_to_item[i] = item
            return target
        target = target.to_dict()
    if isinstance(source, _SparseArray):
        source = source.to_dict()
    for key, value in source.items():
        if key in target:
            target[key] = _merge(target[key], value)
        else:
            target[key] = value
    return target


def _compact(obj):
    if isinstance(obj, _SparseArray):
        return [_compact(item) for item in obj.items()]
    if isinstance(obj, dict):
        return {key: _compact(value) for key, value in obj.items()}
    return obj


def _key_to_str(key):
    if isinstance(key, str):
        return key
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return str(key)
    raise QueryStructureError(f'illegal query structure key {key!a}', key)


def _scalar_to_str(value):
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return None


def _encode_value(pairs, prefix, value, array_format, active_container_ids):
    scalar = _scalar_to_str(value)
    if scalar is not None:
        pairs.append((prefix, scalar))
        return
    if isinstance(value, Mapping):
        sub_items = [(f'{prefix}[{_key_to_str(k)}]', v) for k, v in value.items()]
    elif isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        sub_items = [(_get_array_item_key(prefix, i, array_format), v)
                     for i, v in enumerate(value)]
    else:
        raise QueryStructureError(
            f'value {value!a} (of key {prefix!a}) cannot be '
            f'encoded into a query string',
            value)
    if id(value) in active_container_ids:
        raise QueryStructureError(
            f'cyclic query structure (detected at key {prefix!a})',
            value)
    active_container_ids.add(id(value))
    try:
        for sub_prefix, sub_value in sub_items:
            _encode_value(pairs, sub_prefix, sub_value, array_format, active_container_ids)
    finally:
        active_container_ids.discard(id(value))


def _count_params_within_limits(key, value, level, depth, array_limit):
    if _scalar_to_str(value) is not None:
        return 1
    items = list(value.values()) if isinstance(value, Mapping) else list(value)
    if not items:
        return 0
    if level >= depth:
        raise QueryStructureError(
            f'value under key {key!a} is nested deeper '
            f'than {depth} level(s)',
            value)
    if not isinstance(value, Mapping) and len(items) > array_limit + 1:
        raise QueryStructureError(
            f'array under key {key!a} has {len(items)} items '
            f'(the limit is {array_limit + 1})',
            value)
    return sum(_count_params_within_limits(key, item, level + 1, depth, array_limit)
               for item in items)


def _get_array_item_key(prefix, index, array_format):
    if array_format == 'indices':
        return f'{prefix}[{index}]'
    if array_format == 'brackets':
        return f'{prefix}[]'
    assert array_format == 'repeat'
    return prefix
