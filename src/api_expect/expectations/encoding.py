"""Percent-encoding of parameter names for URI template expressions."""

import re

# RFC 3986 unreserved characters that are not valid in an RFC 6570 varname
RESERVED_CHARS = "-~."

_RESERVED = re.compile("[" + re.escape(RESERVED_CHARS) + "]")


def percent_encode(char: str) -> str:
    """Return the %XX form of a single character, uppercase hex."""
    return f"%{ord(char):02X}"


def encode_parameter_name(name: str) -> str:
    """Encode every reserved character in ``name``, leaving the rest untouched.

    >>> encode_parameter_name("api-key")
    'api%2Dkey'
    """
    return _RESERVED.sub(lambda m: percent_encode(m.group()), name)
