"""Path resolution: reconciles a request path with its base and script paths.

A request path is split into a base path (the deployment prefix, e.g. a
front controller such as ``/app/index.php``) and a script path (what the
application routes, e.g. ``/users/5``):

    path == base_path + script_path

with one exception: a script path of ``"/"`` is not appended, so a path that
has been stripped of its trailing slash never gets it back.

Absent values are ``None``. The empty string is a real value: it is the root
base path.

All comparisons work on whole segments, never on raw string offsets:
``/app/index.phpx`` does not start with the ``index.php`` entry.
"""

from __future__ import annotations

from dataclasses import dataclass

Segments = tuple[str, ...]


# ═══════════════════════════════════════════════════════════════════════════════
# Segment model
# ═══════════════════════════════════════════════════════════════════════════════


def _segments(path: str) -> Segments:
    """Split a normalized path (or the root base path ``""``) into segments."""
    if path in ("", "/"):
        return ()
    return tuple(path[1:].split("/"))


def _join(segments: Segments) -> str:
    """Inverse of _segments. No segments joins to the root base path ``""``."""
    return "".join(f"/{segment}" for segment in segments)


# ═══════════════════════════════════════════════════════════════════════════════
# Pure operations
# ═══════════════════════════════════════════════════════════════════════════════


def normalize_path(raw: str) -> str:
    """Strip trailing slashes and make the path absolute.

    >>> normalize_path("app/")
    '/app'
    >>> normalize_path("///")
    '/'
    """
    path = raw.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return path


def fixup_pair(
    base_path: str | None, script_path: str | None
) -> tuple[str | None, str | None]:
    """Fill in the missing half of a base/script pair.

    The root base path is ``""`` rather than ``"/"`` so the leading slash is
    only counted once, in the script path.
    """
    if base_path == "/":
        base_path = ""
    if base_path is not None and script_path is None:
        script_path = "/"
    elif script_path is not None and base_path is None:
        base_path = ""
    return base_path, script_path


def derive_from_path(
    path: str, base_path: str | None, script_path: str | None
) -> tuple[str | None, str | None]:
    """Re-split ``path`` against a declared base path.

    The base path's last segment is its entry (``index.php`` in
    ``/app/index.php``) and the segments before it are its folder (``/app``).

    - If ``path`` is not under the folder, the declared pair is dropped and
      ``(None, None)`` is returned.
    - If the segment after the folder is the entry, the base path is kept
      and the script path is whatever follows it.
    - Otherwise the base path moves up to the folder and the script path is
      whatever follows the folder.

    An empty remainder is the script path ``"/"``. When neither half is
    declared there is nothing to reconcile and ``(None, None)`` comes back.
    """
    base_path, script_path = fixup_pair(base_path, script_path)
    if base_path is None or script_path is None:
        return base_path, script_path

    path_segments = _segments(path)
    base_segments = _segments(base_path)
    if not base_segments:
        return "", _join(path_segments) or "/"

    folder, entry = base_segments[:-1], base_segments[-1]
    depth = len(folder)
    if path_segments[:depth] != folder:
        return None, None

    if path_segments[depth : depth + 1] == (entry,):
        rest = path_segments[depth + 1 :]
    else:
        base_path = _join(folder)
        rest = path_segments[depth:]
        if base_path == "/":
            # A folder of one empty segment is the root base
            return "", _join(path_segments) or "/"

    return base_path, _join(rest) or "/"


def compose_path(base_path: str | None, script_path: str | None) -> str | None:
    """Build the full path from a base/script pair.

    Returns None when neither half is declared.
    """
    base_path, script_path = fixup_pair(base_path, script_path)
    if base_path is None or script_path is None:
        return None
    if script_path == "/":
        return base_path or "/"
    return base_path + script_path


# ═══════════════════════════════════════════════════════════════════════════════
# State
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PathState:
    """A consistent (path, base_path, script_path) triple.

    Each ``with_*``/``without_*`` method returns the next consistent state:

    - changing the path re-derives the base/script pair from it;
    - changing either half of the pair first re-derives the pair against the
      current path, then recomposes the path from the pair.

    Because the pair is re-derived from the current path, setting a script
    path under an existing base path does not rewrite the path; it only
    declares a pair when none was declared yet.
    """

    path: str = "/"
    base_path: str | None = None
    script_path: str | None = None

    @property
    def is_declared(self) -> bool:
        """True when a base/script pair is present."""
        return self.base_path is not None

    def with_path(self, raw: str) -> PathState:
        return self._derived(normalize_path(raw), self.base_path, self.script_path)

    def without_path(self) -> PathState:
        return self._derived("/", self.base_path, self.script_path)

    def with_base_path(self, raw: str) -> PathState:
        return self._recomposed(normalize_path(raw), self.script_path)

    def without_base_path(self) -> PathState:
        return self._recomposed(None, self.script_path)

    def with_script_path(self, raw: str) -> PathState:
        return self._recomposed(self.base_path, normalize_path(raw))

    def without_script_path(self) -> PathState:
        return self._recomposed(self.base_path, None)

    def _derived(
        self, path: str, base_path: str | None, script_path: str | None
    ) -> PathState:
        base_path, script_path = derive_from_path(path, base_path, script_path)
        return PathState(path, base_path, script_path)

    def _recomposed(self, base_path: str | None, script_path: str | None) -> PathState:
        state = self._derived(self.path, base_path, script_path)
        path = compose_path(state.base_path, state.script_path)
        if path is None:
            return state
        return PathState(path, state.base_path, state.script_path)
