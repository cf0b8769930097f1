# Copyright (c) 2025-2026 NASK. All rights reserved.

import os.path as osp


TOPLEVEL_N6URLS_PACKAGES = 'n6urls',

ETC_DIR = '/etc/n6'
USER_DIR = osp.expanduser('~/.n6')


# schemes for which a URL is, by default, considered valid
DEFAULT_PROTOCOLS = ('http', 'https')

# scheme prepended to relative URLs by `n6urls.url_helpers.normalize()`
DEFAULT_SCHEME = 'http'


# (based on the WHATWG URL Standard; for the `file` scheme there
# is no default port -- a port is not allowed at all)
SPECIAL_SCHEME_TO_DEFAULT_PORT = {
    'ftp': 21,
    'file': None,
    'http': 80,
    'https': 443,
    'ws': 80,
    'wss': 443,
}


# limits applied when decoding query strings (see: `n6urls.query_helpers`)
QUERY_DEPTH_LIMIT = 5
QUERY_ARRAY_LIMIT = 20
QUERY_PARAMETER_LIMIT = 1000

QUERY_ARRAY_FORMATS = ('indices', 'brackets', 'repeat')
DEFAULT_QUERY_ARRAY_FORMAT = 'indices'
