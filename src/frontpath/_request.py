"""Request: in-memory representation of one inbound HTTP request.

A Request is built from a URL and an optional override bag:

    >>> request = Request("http://localhost/app/index.php/users/5",
    ...                   {"basePath": "/app/index.php"})
    >>> request.base_path, request.script_path
    ('/app/index.php', '/users/5')

The (path, base_path, script_path) triple is held in a PathState and replaced
as a whole on every change, so it is consistent after each mutation. All
other fields are plain containers.

Mutators return the request itself so calls can be chained. A Request has a
single owner; it is not safe to mutate from several threads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from frontpath._errors import InvalidSchemeError
from frontpath._headers import canonical_header_name, canonical_headers
from frontpath._overrides import RequestOverrides, UploadedFile, parse_overrides
from frontpath._paths import PathState, normalize_path
from frontpath._url import build_url, parse_url

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


class Request:
    """HTTP request: method, URL parts, path triple, and request data maps.

    Args:
        url: Absolute URL or request target (``/app/index.php?page=2``).
        overrides: Values replacing those taken from the URL or the defaults,
            as a dict (see frontpath._overrides) or RequestOverrides.

    Raises:
        UrlParseError: If the URL cannot be parsed.
        InvalidSchemeError: If the URL or overrides carry an unsupported scheme.
        OverridesParseError: If the override dict is malformed.
    """

    __slots__ = (
        "_method",
        "_scheme",
        "_user",
        "_password",
        "_host",
        "_port",
        "_fragment",
        "_paths",
        "_search",
        "_headers",
        "_post",
        "_files",
        "_payload",
        "_params",
    )

    def __init__(
        self,
        url: str = "/",
        overrides: Mapping[str, Any] | RequestOverrides | None = None,
    ) -> None:
        self._method = "GET"
        self._scheme = "http"
        self._user: str | None = None
        self._password: str | None = None
        self._host = "localhost"
        self._port: int | None = None
        self._fragment: str | None = None
        self._paths = PathState()
        self._search: dict[str, Any] = {}
        self._headers: dict[str, str] = {}
        self._post: dict[str, Any] = {}
        self._files: dict[str, UploadedFile] = {}
        self._payload = b""
        self._params: dict[str, str] = {}

        self.set_url(url)

        if overrides is not None:
            if not isinstance(overrides, RequestOverrides):
                overrides = parse_overrides(overrides)
            self._apply(overrides)

    def _apply(self, overrides: RequestOverrides) -> None:
        if overrides.method is not None:
            self.set_method(overrides.method)
        if overrides.scheme is not None:
            self.set_scheme(overrides.scheme)
        if overrides.user is not None:
            self.set_user(overrides.user)
        if overrides.password is not None:
            self.set_password(overrides.password)
        if overrides.host is not None:
            self.set_host(overrides.host)
        if overrides.port is not None:
            self.set_port(overrides.port)
        if overrides.path is not None:
            self.set_path(overrides.path)
        if overrides.base_path is not None:
            self.set_base_path(overrides.base_path)
        if overrides.script_path is not None:
            self.set_script_path(overrides.script_path)
        if overrides.search is not None:
            self.set_search_vars(overrides.search)

        self.set_headers(overrides.headers or {})
        self.set_post_vars(overrides.post or {})
        self.set_files(overrides.files or {})
        self.set_payload(overrides.payload or b"")
        self.set_params(overrides.params or {})

    def __repr__(self) -> str:
        return (
            f"Request(method={self._method!r}, url={self.url!r}, "
            f"base_path={self.base_path!r}, script_path={self.script_path!r})"
        )

    # ─── URL ────────────────────────────────────────────────────────────────

    @property
    def url(self) -> str:
        """``scheme://host[:port]path[?query]``.

        The port appears whenever one was set explicitly, even the default.
        """
        return build_url(self._scheme, self._host, self._port, self.path, self._search)

    def get_url(self) -> str:
        return self.url

    def set_url(self, url: str) -> Request:
        """Apply every component present in ``url``; leave the others alone.

        The URL is parsed before anything is applied, so a URL that fails to
        parse leaves the request unchanged. A component rejected by its
        setter (an unsupported scheme) stops the update part way.

        Raises:
            UrlParseError: If the URL cannot be parsed.
            InvalidSchemeError: If the URL scheme is not http or https.
        """
        parts = parse_url(url)

        # Scheme before port: an explicit port in the URL is kept as given.
        if parts.scheme is not None:
            self.set_scheme(parts.scheme)
        if parts.user is not None:
            self.set_user(parts.user)
        if parts.password is not None:
            self.set_password(parts.password)
        if parts.host is not None:
            self.set_host(parts.host)
        if parts.port is not None:
            self.set_port(parts.port)
        if parts.path is not None:
            self.set_path(parts.path)
        search = parts.search_vars()
        if search is not None:
            self.set_search_vars(search)
        if parts.fragment is not None:
            self.set_fragment(parts.fragment)
        return self

    # ─── Method ─────────────────────────────────────────────────────────────

    @property
    def method(self) -> str:
        return self._method

    def set_method(self, method: str) -> Request:
        self._method = method.upper()
        return self

    # ─── Scheme and port ────────────────────────────────────────────────────

    @property
    def scheme(self) -> str:
        return self._scheme

    def set_scheme(self, scheme: str) -> Request:
        """Set the scheme (``http`` or ``https``).

        An explicit port of 80 follows the scheme to its default port; any
        other explicit port is kept.

        Raises:
            InvalidSchemeError: If the scheme is not http or https. The
                request is left unchanged.
        """
        if scheme not in DEFAULT_PORTS:
            raise InvalidSchemeError(scheme)
        self._scheme = scheme
        if self._port == DEFAULT_PORTS["http"]:
            self._port = self.default_port
        return self

    @property
    def default_port(self) -> int:
        """443 for https, 80 otherwise."""
        return DEFAULT_PORTS["https"] if self._scheme == "https" else DEFAULT_PORTS["http"]

    @property
    def port(self) -> int:
        """The explicit port, or the scheme's default port."""
        return self.default_port if self._port is None else self._port

    def has_port(self) -> bool:
        return self._port is not None

    def get_port(self, default: int | None = None) -> int | None:
        """The explicit port, or ``default`` when none was set."""
        return default if self._port is None else self._port

    def set_port(self, port: int) -> Request:
        self._port = port
        return self

    def remove_port(self) -> Request:
        self._port = None
        return self

    # ─── Credentials, host, fragment ────────────────────────────────────────

    @property
    def user(self) -> str | None:
        return self._user

    def has_user(self) -> bool:
        return self._user is not None

    def get_user(self, default: str | None = None) -> str | None:
        return default if self._user is None else self._user

    def set_user(self, user: str) -> Request:
        self._user = user
        return self

    def remove_user(self) -> Request:
        self._user = None
        return self

    @property
    def password(self) -> str | None:
        return self._password

    def has_password(self) -> bool:
        return self._password is not None

    def get_password(self, default: str | None = None) -> str | None:
        return default if self._password is None else self._password

    def set_password(self, password: str) -> Request:
        self._password = password
        return self

    def remove_password(self) -> Request:
        self._password = None
        return self

    @property
    def host(self) -> str:
        return self._host

    def set_host(self, host: str) -> Request:
        self._host = host
        return self

    @property
    def fragment(self) -> str | None:
        return self._fragment

    def set_fragment(self, fragment: str) -> Request:
        self._fragment = fragment
        return self

    def remove_fragment(self) -> Request:
        self._fragment = None
        return self

    # ─── Path, base path, script path ───────────────────────────────────────

    @property
    def path(self) -> str:
        """Full request path: absolute, no trailing slash unless it is ``/``."""
        return self._paths.path

    @property
    def base_path(self) -> str | None:
        """Deployment prefix; ``""`` is the root, None means not declared."""
        return self._paths.base_path

    @property
    def script_path(self) -> str | None:
        """Path below the base path; None means not declared."""
        return self._paths.script_path

    def has_base_path(self) -> bool:
        return self._paths.base_path is not None

    def has_script_path(self) -> bool:
        return self._paths.script_path is not None

    def get_base_path(self, default: str | None = None) -> str | None:
        return default if self.base_path is None else self.base_path

    def get_script_path(self, default: str | None = None) -> str | None:
        return default if self.script_path is None else self.script_path

    def set_path(self, path: str) -> Request:
        """Set the path and re-split it against the declared base path."""
        paths = self._paths
        return self._resolve(paths.with_path(path), paths.base_path, paths.script_path)

    def remove_path(self) -> Request:
        """Reset the path to ``/`` and re-split it."""
        paths = self._paths
        return self._resolve(paths.without_path(), paths.base_path, paths.script_path)

    def set_base_path(self, base_path: str) -> Request:
        """Declare the base path, re-split the current path, recompose it."""
        paths = self._paths
        return self._resolve(
            paths.with_base_path(base_path), normalize_path(base_path), paths.script_path
        )

    def remove_base_path(self) -> Request:
        paths = self._paths
        return self._resolve(paths.without_base_path(), None, paths.script_path)

    def set_script_path(self, script_path: str) -> Request:
        """Declare the script path, re-split the current path, recompose it."""
        paths = self._paths
        return self._resolve(
            paths.with_script_path(script_path), paths.base_path, normalize_path(script_path)
        )

    def remove_script_path(self) -> Request:
        paths = self._paths
        return self._resolve(paths.without_script_path(), paths.base_path, None)

    def _resolve(
        self, state: PathState, base_path: str | None, script_path: str | None
    ) -> Request:
        """Install ``state``, resolved from the given base/script pair."""
        # A declared pair that comes back empty did not fit the path.
        if (base_path is not None or script_path is not None) and not state.is_declared:
            logger.debug(
                "base_path_discarded",
                extra={
                    "request_path": state.path,
                    "discarded_base_path": base_path,
                    "discarded_script_path": script_path,
                },
            )
        self._paths = state
        return self

    # ─── Search (query) parameters ──────────────────────────────────────────

    @property
    def search_vars(self) -> dict[str, Any]:
        return dict(self._search)

    def set_search_vars(self, search: Mapping[str, Any]) -> Request:
        self._search = dict(search)
        return self

    def clear_search_vars(self) -> Request:
        self._search = {}
        return self

    def get_search(self, name: str, default: Any = None) -> Any:
        return self._search.get(name, default)

    def set_search(self, name: str, value: Any) -> Request:
        self._search[name] = value
        return self

    def remove_search(self, name: str) -> Request:
        self._search.pop(name, None)
        return self

    # ─── Headers ────────────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        """Headers keyed by canonical name (``Content-Type``)."""
        return dict(self._headers)

    def set_headers(self, headers: Mapping[str, str]) -> Request:
        """Replace all headers.

        Raises:
            InvalidHeaderNameError: If a name is not a valid HTTP token.
        """
        self._headers = canonical_headers(dict(headers))
        return self

    def clear_headers(self) -> Request:
        self._headers = {}
        return self

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Header value by name, in any spelling (``content_type`` works)."""
        return self._headers.get(canonical_header_name(name), default)

    def set_header(self, name: str, value: str) -> Request:
        self._headers[canonical_header_name(name)] = value
        return self

    def remove_header(self, name: str) -> Request:
        self._headers.pop(canonical_header_name(name), None)
        return self

    # ─── Form fields ────────────────────────────────────────────────────────

    @property
    def post_vars(self) -> dict[str, Any]:
        return dict(self._post)

    def set_post_vars(self, post: Mapping[str, Any]) -> Request:
        self._post = dict(post)
        return self

    def clear_post_vars(self) -> Request:
        self._post = {}
        return self

    def get_post(self, name: str, default: Any = None) -> Any:
        return self._post.get(name, default)

    def set_post(self, name: str, value: Any) -> Request:
        self._post[name] = value
        return self

    def remove_post(self, name: str) -> Request:
        self._post.pop(name, None)
        return self

    # ─── Uploaded files ─────────────────────────────────────────────────────

    @property
    def files(self) -> dict[str, UploadedFile]:
        return dict(self._files)

    def set_files(self, files: Mapping[str, UploadedFile]) -> Request:
        self._files = dict(files)
        return self

    def clear_files(self) -> Request:
        self._files = {}
        return self

    def get_file(
        self, name: str, default: UploadedFile | None = None
    ) -> UploadedFile | None:
        return self._files.get(name, default)

    def set_file(self, name: str, value: UploadedFile) -> Request:
        self._files[name] = value
        return self

    def remove_file(self, name: str) -> Request:
        self._files.pop(name, None)
        return self

    # ─── Payload ────────────────────────────────────────────────────────────

    @property
    def payload(self) -> bytes:
        """Raw request body."""
        return self._payload

    def set_payload(self, payload: bytes) -> Request:
        self._payload = payload
        return self

    def clear_payload(self) -> Request:
        self._payload = b""
        return self

    # ─── Route parameters ───────────────────────────────────────────────────

    @property
    def params(self) -> dict[str, str]:
        return dict(self._params)

    def set_params(self, params: Mapping[str, str]) -> Request:
        self._params = dict(params)
        return self

    def clear_params(self) -> Request:
        self._params = {}
        return self

    def get_param(self, name: str, default: str | None = None) -> str | None:
        return self._params.get(name, default)

    def set_param(self, name: str, value: str) -> Request:
        self._params[name] = value
        return self

    def remove_param(self, name: str) -> Request:
        self._params.pop(name, None)
        return self
