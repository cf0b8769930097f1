# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
Logging-related helpers.

*n6urls* only emits log records (via the loggers obtained with
`get_logger()`); it never configures logging by itself -- that is
left to the application which uses the library.
"""

import collections
import logging
import os.path
import sys

from n6urls.const import TOPLEVEL_N6URLS_PACKAGES


def get_logger(name=None):
    """
    Like logging.getLogger(...) but replacing '__main__' with a sensible name.

    For example, if the script path is '/whatever/n6urls/tools/foo.py'
    get_logger('__main__') is equivalent to logging.getLogger('n6urls.tools.foo').

    >>> get_logger('n6urls.url_helpers') is logging.getLogger('n6urls.url_helpers')
    True
    """
    if name == '__main__':
        script_path = getattr(sys.modules['__main__'], '__file__', None) or sys.argv[0]
        remaining = os.path.splitext(script_path)[0]
        # (collecting path segments from the end, up to the
        # top-level package directory or the filesystem root)
        segments = collections.deque()
        while True:
            remaining, segment = os.path.split(remaining)
            segments.appendleft(segment.replace('.', 'D'))
            if segment in TOPLEVEL_N6URLS_PACKAGES or remaining in ('', '/'):
                break
        name = '.'.join(segments)
    return logging.getLogger(name)
