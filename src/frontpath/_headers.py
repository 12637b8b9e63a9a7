"""Canonical HTTP header names.

Header maps on a Request always hold ``Dash-Separated-Capitalized`` keys:
``content_type``, ``CONTENT-TYPE`` and ``Content Type`` all become
``Content-Type``. Underscores are accepted because names extracted from
CGI-style environments (``HTTP_CONTENT_TYPE``) use them.

Token validation uses ``google-re2`` so the check stays linear-time on
hostile input.
"""

from __future__ import annotations

import re2

from frontpath._errors import InvalidHeaderNameError

# RFC 9110 token: 1*tchar
_TOKEN = re2.compile(r"^[!#$%&'*+.^`|~0-9A-Za-z-]+$")


def canonical_header_name(name: str) -> str:
    """Return the canonical form of a header name.

    Raises:
        InvalidHeaderNameError: If the result is not a valid HTTP token.
    """
    parts = name.strip().replace("_", "-").replace(" ", "-").split("-")
    canonical = "-".join(part.capitalize() for part in parts)
    if not _TOKEN.match(canonical):
        raise InvalidHeaderNameError(name)
    return canonical


def canonical_headers(headers: dict[str, str]) -> dict[str, str]:
    """Canonicalize every key of a header dict. Later duplicates win."""
    return {canonical_header_name(name): value for name, value in headers.items()}
