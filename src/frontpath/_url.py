"""URL decomposition and composition.

parse_url() splits a URL into the components a Request understands without
touching any request state, so a URL that fails to parse changes nothing.
Components missing from the URL are None (an empty path counts as missing).

Both absolute URLs (``https://host:8443/app``) and request targets
(``/app/index.php?page=2``) are accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit

from frontpath._errors import UrlParseError


@dataclass(frozen=True, slots=True)
class UrlParts:
    """Components of a parsed URL. None marks a component the URL lacks."""

    scheme: str | None = None
    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None
    query: str | None = None
    fragment: str | None = None

    def search_vars(self) -> dict[str, str] | None:
        """Query string as a dict (last value wins), or None without a query."""
        if self.query is None:
            return None
        return dict(parse_qsl(self.query, keep_blank_values=True))


def parse_url(url: str) -> UrlParts:
    """Split a URL into its components.

    Raises:
        UrlParseError: If the URL is structurally invalid: unbalanced IPv6
            brackets, a bad port, or an authority without a host.
    """
    stripped = url.strip()
    try:
        parts = urlsplit(stripped)
        port = parts.port
    except ValueError as e:
        raise UrlParseError(url, str(e)) from e

    after_scheme = stripped[len(parts.scheme) + 1 :] if parts.scheme else stripped
    if after_scheme.startswith("//") and not parts.hostname:
        raise UrlParseError(url, "authority has no host")

    # "/x?" carries an empty query, "/x" carries none
    has_query = "?" in stripped.partition("#")[0]

    return UrlParts(
        scheme=parts.scheme or None,
        user=parts.username,
        password=parts.password,
        host=parts.hostname,
        port=port,
        path=parts.path or None,
        query=parts.query if has_query else None,
        fragment=parts.fragment or None,
    )


def build_url(
    scheme: str,
    host: str,
    port: int | None,
    path: str,
    search: dict[str, Any],
) -> str:
    """Compose ``scheme://host[:port]path[?query]``.

    The port is written whenever one is given, including the scheme default.
    IPv6 hosts are wrapped in brackets.
    """
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    url = f"{scheme}://{host}"
    if port is not None:
        url += f":{port}"
    url += path
    if search:
        url += "?" + urlencode(search, doseq=True)
    return url
