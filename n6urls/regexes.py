# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
This module contains several regular expression objects (all of them
are used in other parts of the *n6urls* library).
"""


import re


#: URL *scheme* followed by `:` and anything else (based on RFC 3986).
#:
#: Used by :func:`n6urls.parsing.parse_url`.
URL_SCHEME_AND_REST_REGEX = re.compile(r'\A'
                                       r'(?P<scheme>[a-zA-Z][\-+.0-9a-zA-Z]*)'
                                       r'(?P<rest>:.*)',
                                       re.ASCII | re.DOTALL)


#: Prefix of an *absolute* URL: scheme of at least two characters plus `:`
#: (note: a one-letter "scheme" is rather a Windows drive letter...).
#:
#: Used by :func:`n6urls.url_helpers.is_absolute`.
ABSOLUTE_URL_PREFIX_REGEX = re.compile(r'\A[a-zA-Z][0-9a-zA-Z\-+.]+:', re.ASCII)


#: Leading and/or trailing *C0 control or space* characters
#: (to be stripped before parsing a URL).
C0_CONTROL_OR_SPACE_AFFIXES_REGEX = re.compile(r'\A[\x00-\x20]+|[\x00-\x20]+\Z')


#: ASCII tab or newline characters (to be removed before parsing a URL).
ASCII_TAB_OR_NEWLINE_REGEX = re.compile(r'[\t\n\r]')


#: A code point that is forbidden in any (also *opaque*) host.
FORBIDDEN_HOST_CODE_POINT_REGEX = re.compile(r'[\x00\t\n\r #/:<>?@\[\\\]^|]')


#: A code point that is forbidden in a *domain* (i.e., in a host of a
#: URL whose scheme is *special*; checked after percent-decoding).
FORBIDDEN_DOMAIN_CODE_POINT_REGEX = re.compile(r'[\x00-\x20#%/:<>?@\[\\\]^|\x7f]')


#: Single group of the bracket notation used in query keys, e.g.:
#: `[]`, `[0]`, `[sub]` (a group cannot contain nested brackets).
#:
#: Used by :func:`n6urls.query_helpers.decode_query`.
QUERY_KEY_BRACKET_GROUP_REGEX = re.compile(r'\[[^\[\]]*\]')
