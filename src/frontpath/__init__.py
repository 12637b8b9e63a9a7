"""frontpath: HTTP request model with base path / script path resolution.

All public types are exported from this module for flat imports:

    from frontpath import Request, PathState, normalize_path
"""

__version__ = "0.1.0"

# Errors
from frontpath._errors import (
    InvalidHeaderNameError,
    InvalidSchemeError,
    OverridesParseError,
    RequestError,
    UrlParseError,
)

# Header names
from frontpath._headers import canonical_header_name, canonical_headers

# Override bag, see frontpath._overrides for the recognized keys
from frontpath._overrides import RequestOverrides, UploadedFile, parse_overrides

# Path resolution
from frontpath._paths import (
    PathState,
    compose_path,
    derive_from_path,
    fixup_pair,
    normalize_path,
)

# Request
from frontpath._request import DEFAULT_PORTS, Request
from frontpath._url import UrlParts, build_url, parse_url

__all__ = [
    # Request
    "Request",
    "DEFAULT_PORTS",
    # Path resolution
    "PathState",
    "normalize_path",
    "fixup_pair",
    "derive_from_path",
    "compose_path",
    # URLs
    "UrlParts",
    "parse_url",
    "build_url",
    # Override bag
    "RequestOverrides",
    "UploadedFile",
    "parse_overrides",
    # Header names
    "canonical_header_name",
    "canonical_headers",
    # Errors
    "RequestError",
    "InvalidSchemeError",
    "UrlParseError",
    "InvalidHeaderNameError",
    "OverridesParseError",
]
