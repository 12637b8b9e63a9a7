"""Error types raised by frontpath.

Every error derives from RequestError. Errors that reject a caller-supplied
value also derive from ValueError so callers can catch them generically.

A base path that does not fit the request path is NOT an error: the
resolver drops the declared base/script pair instead (see frontpath._paths).
"""

from __future__ import annotations


class RequestError(Exception):
    """Base class for all frontpath errors."""


class InvalidSchemeError(RequestError, ValueError):
    """A scheme other than http or https was supplied."""

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f'unsupported scheme "{scheme}" (expected "http" or "https")')


class UrlParseError(RequestError, ValueError):
    """A URL string could not be decomposed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"cannot parse URL {url!r}: {reason}")


class InvalidHeaderNameError(RequestError, ValueError):
    """A header name is not a valid HTTP token."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid header name: {name!r}")


class OverridesParseError(RequestError):
    """Error parsing an override dict into RequestOverrides."""
