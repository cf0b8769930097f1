# Copyright (c) 2025-2026 NASK. All rights reserved.

"""
Exception classes raised by the lower-level tools of *n6urls*
(`n6urls.parsing`, `n6urls.query_helpers`, `n6urls.common_helpers`).

Note that the public functions provided by `n6urls.url_helpers` never
let any of them propagate: they are converted to `False` (predicates)
or `None` (value-producing functions).
"""


class URLHelperError(ValueError):

    """
    The base class of *n6urls*-specific errors.

    >>> exc = URLHelperError('something is wrong', 'http://[::1')
    >>> str(exc)
    'something is wrong'
    >>> exc.offending_value
    'http://[::1'
    >>> URLHelperError('something is wrong').offending_value is None
    True
    """

    def __init__(self, msg, offending_value=None):
        super().__init__(msg)
        self.offending_value = offending_value

    def __str__(self):
        return str(self.args[0])


class InvalidInputError(URLHelperError):
    """Wrong type of a value, an empty string, `None`..."""


class URLParseError(URLHelperError):
    """A syntactically malformed URL."""


class QueryStructureError(InvalidInputError):
    """A value that cannot be encoded into (or decoded to) a query structure."""
