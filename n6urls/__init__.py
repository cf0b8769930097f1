# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
*n6urls*: validating, normalizing, comparing and joining URLs, as
well as decoding/merging/appending their query parameters.
"""

from n6urls.exceptions import (
    InvalidInputError,
    QueryStructureError,
    URLHelperError,
    URLParseError,
)
from n6urls.parsing import (
    ParsedURL,
    parse_url,
)
from n6urls.url_helpers import (
    append_query,
    compare,
    is_absolute,
    is_relative,
    is_url,
    join,
    matches_host,
    normalize,
    normalize_query,
)

__all__ = [
    'append_query',
    'compare',
    'is_absolute',
    'is_relative',
    'is_url',
    'join',
    'matches_host',
    'normalize',
    'normalize_query',

    'ParsedURL',
    'parse_url',

    'URLHelperError',
    'InvalidInputError',
    'URLParseError',
    'QueryStructureError',
]
