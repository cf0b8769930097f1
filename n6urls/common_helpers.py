# Copyright (c) 2025-2026 NASK. All rights reserved.

import copy
from collections.abc import (
    Mapping,
    Sequence,
)


def merge_query_structures(*structures):
    """
    Create a new *query structure* being the result of deep-merging
    the given ones (from left to right).

    Args:
        <positional arguments>:
            The structures to be merged (typically, mappings, whose
            values are strings, lists or nested mappings).

    Returns:
        A new object that shares no (mutable) containers with any
        of the arguments. If no argument is given, an empty dict.

    The rules applied to each pair of values (*left*, *right*):

    * if both are lists/tuples -- the result is a list containing the
      items of *left* followed by the items of *right*;

    * if both are mappings -- the result is a dict containing the
      items of *left* (with values merged with the corresponding ones
      from *right*, if any) followed by the items whose keys exist
      only in *right*;

    * otherwise -- the result is (a deep copy of) *right*.

    >>> src0 = {'pq': 'nm', 'abc': ['foo'], 'a': {'b': 'c'}}
    >>> src1 = {'abc': ['bar'], 'a': {'d': 'e'}, 'x': 'y'}
    >>> merged = merge_query_structures(src0, src1)
    >>> merged == {
    ...     'pq': 'nm',
    ...     'abc': ['foo', 'bar'],
    ...     'a': {'b': 'c', 'd': 'e'},
    ...     'x': 'y',
    ... }
    True
    >>> list(merged)
    ['pq', 'abc', 'a', 'x']
    >>> # NOTE that the source data containers have *not* been changed:
    >>> src0 == {'pq': 'nm', 'abc': ['foo'], 'a': {'b': 'c'}}
    True
    >>> merged['a'] is src0['a'] or merged['abc'] is src1['abc']
    False

    >>> merge_query_structures({'a': 'b'}, {'a': ['c']}, {'a': {'d': 'e'}})
    {'a': {'d': 'e'}}
    >>> merge_query_structures({'a': ('b',)}, {'a': ['c']})
    {'a': ['b', 'c']}
    >>> merge_query_structures()
    {}
    >>> merge_query_structures({'a': 'b'})
    {'a': 'b'}
    """
    merged = {}
    for structure in structures:
        merged = _merge_two(merged, structure)
    return merged


def _is_array(obj):
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def _fresh_copy(obj):
    if isinstance(obj, Mapping):
        return {key: _fresh_copy(value) for key, value in obj.items()}
    if _is_array(obj):
        return [_fresh_copy(item) for item in obj]
    return copy.deepcopy(obj)


def _merge_two(left, right):
    if _is_array(left) and _is_array(right):
        return [_fresh_copy(item) for item in left] + [_fresh_copy(item) for item in right]
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = {}
        for key, value in left.items():
            merged[key] = (_merge_two(value, right[key]) if key in right
                           else _fresh_copy(value))
        for key, value in right.items():
            if key not in merged:
                merged[key] = _fresh_copy(value)
        return merged
    return _fresh_copy(right)
