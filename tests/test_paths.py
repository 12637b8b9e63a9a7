"""Tests for path resolution (frontpath._paths)."""

import random

import pytest

from frontpath import (
    PathState,
    compose_path,
    derive_from_path,
    fixup_pair,
    normalize_path,
)

RAW_PATHS = ["", "/", "//", "///", "a", "a/", "/a", "/a/", "/a/b//", "a/b", "//a", "/a//b/"]


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", "/"),
            ("/", "/"),
            ("////", "/"),
            ("app", "/app"),
            ("app/", "/app"),
            ("/app/index.php/", "/app/index.php"),
            ("/a//b", "/a//b"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_path(raw) == expected

    @pytest.mark.parametrize("raw", RAW_PATHS)
    def test_idempotent(self, raw: str) -> None:
        once = normalize_path(raw)
        assert normalize_path(once) == once

    @pytest.mark.parametrize("raw", RAW_PATHS)
    def test_shape(self, raw: str) -> None:
        path = normalize_path(raw)
        assert path.startswith("/")
        assert path == "/" or not path.endswith("/")


class TestFixupPair:
    def test_both_absent(self) -> None:
        assert fixup_pair(None, None) == (None, None)

    def test_slash_base_is_root(self) -> None:
        assert fixup_pair("/", "/a") == ("", "/a")

    def test_base_only(self) -> None:
        assert fixup_pair("/app", None) == ("/app", "/")

    def test_script_only(self) -> None:
        assert fixup_pair(None, "/users") == ("", "/users")

    def test_both_present(self) -> None:
        assert fixup_pair("/app", "/users") == ("/app", "/users")

    def test_slash_base_alone(self) -> None:
        assert fixup_pair("/", None) == ("", "/")


class TestDeriveFromPath:
    def test_nothing_declared(self) -> None:
        assert derive_from_path("/app/x", None, None) == (None, None)

    def test_entry_matches(self) -> None:
        assert derive_from_path("/app/index.php/users/5", "/app/index.php", None) == (
            "/app/index.php",
            "/users/5",
        )

    def test_path_equals_base(self) -> None:
        assert derive_from_path("/app/index.php", "/app/index.php", "/x") == (
            "/app/index.php",
            "/",
        )

    def test_entry_mismatch_moves_up(self) -> None:
        assert derive_from_path("/app/other.php", "/app/index.php", None) == (
            "/app",
            "/other.php",
        )

    def test_folder_mismatch_drops_pair(self) -> None:
        assert derive_from_path("/x/y", "/a/index.php", "/") == (None, None)

    def test_root_base_takes_whole_path(self) -> None:
        assert derive_from_path("/a/b", "", "/zzz") == ("", "/a/b")

    def test_root_base_root_path(self) -> None:
        assert derive_from_path("/", "/", None) == ("", "/")

    def test_script_path_ignored_in_favor_of_path(self) -> None:
        assert derive_from_path("/app/index.php/a", "/app/index.php", "/b") == (
            "/app/index.php",
            "/a",
        )

    def test_empty_segments_preserved(self) -> None:
        assert derive_from_path("/app//x", "/app", None) == ("/app", "//x")

    def test_empty_folder_segment_is_root(self) -> None:
        assert derive_from_path("//users", "//index.php", None) == ("", "//users")

    def test_entry_below_empty_folder_segment(self) -> None:
        assert derive_from_path("//index.php/a", "//index.php", None) == (
            "//index.php",
            "/a",
        )


class TestComposePath:
    def test_nothing_declared(self) -> None:
        assert compose_path(None, None) is None

    def test_concatenates(self) -> None:
        assert compose_path("/app/index.php", "/users/5") == "/app/index.php/users/5"

    def test_root_script_not_appended(self) -> None:
        assert compose_path("/app/index.php", "/") == "/app/index.php"

    def test_root_base_and_root_script(self) -> None:
        assert compose_path("", "/") == "/"
        assert compose_path("/", None) == "/"

    def test_script_only(self) -> None:
        assert compose_path(None, "/users") == "/users"


class TestRoundTrip:
    @pytest.mark.parametrize(
        ("base_path", "script_path"),
        [
            ("/app/index.php", "/users/5"),
            ("/app/index.php", "/"),
            ("/app", "/app"),
            ("/a/b/c", "/c/b/a"),
            ("", "/users"),
            ("", "/"),
            ("/index.php", "/index.php/x"),
        ],
    )
    def test_derive_inverts_compose(self, base_path: str, script_path: str) -> None:
        path = compose_path(base_path, script_path)
        assert path is not None
        assert derive_from_path(path, base_path, script_path) == (base_path, script_path)


class TestPathState:
    def test_defaults(self) -> None:
        state = PathState()
        assert state.path == "/"
        assert state.base_path is None
        assert state.script_path is None
        assert not state.is_declared

    def test_transitions_return_new_state(self) -> None:
        state = PathState()
        moved = state.with_path("/a")
        assert state.path == "/"
        assert moved.path == "/a"

    def test_frozen(self) -> None:
        state = PathState()
        with pytest.raises(AttributeError):
            state.path = "/x"  # type: ignore[misc]

    def test_base_then_path(self) -> None:
        state = PathState("/app/index.php").with_base_path("/app/index.php")
        assert state == PathState("/app/index.php", "/app/index.php", "/")
        state = state.with_path("/app/index.php/a")
        assert state == PathState("/app/index.php/a", "/app/index.php", "/a")

    def test_base_declared_on_root_path_drops(self) -> None:
        state = PathState().with_base_path("/app/index.php")
        assert state == PathState("/", None, None)

    def test_without_path(self) -> None:
        state = PathState("/a/b", "", "/a/b").without_path()
        assert state == PathState("/", "", "/")

    def test_without_base_path(self) -> None:
        state = PathState("/app/x", "/app", "/x").without_base_path()
        assert state == PathState("/app/x", "", "/app/x")

    def test_without_script_path(self) -> None:
        state = PathState("/app/x", "/app", "/x").without_script_path()
        assert state == PathState("/app/x", "/app", "/x")

    def test_with_script_path_declares_root_base(self) -> None:
        state = PathState("/users").with_script_path("/other")
        assert state == PathState("/users", "", "/users")


# ═══════════════════════════════════════════════════════════════════════════════
# Random mutation sequences
# ═══════════════════════════════════════════════════════════════════════════════

_SEGMENT_POOL = ["", "", "app", "index.php", "a", "x", "users"]


def _random_path(rng: random.Random) -> str:
    segments = [rng.choice(_SEGMENT_POOL) for _ in range(rng.randint(0, 4))]
    lead = "/" * rng.randint(0, 2)
    trail = "/" * rng.randint(0, 1)
    return lead + "/".join(segments) + trail


def _random_step(rng: random.Random, state: PathState) -> PathState:
    match rng.randrange(6):
        case 0:
            return state.with_path(_random_path(rng))
        case 1:
            return state.without_path()
        case 2:
            return state.with_base_path(_random_path(rng))
        case 3:
            return state.without_base_path()
        case 4:
            return state.with_script_path(_random_path(rng))
        case _:
            return state.without_script_path()


def _assert_consistent(state: PathState) -> None:
    assert normalize_path(state.path) == state.path
    assert (state.base_path is None) == (state.script_path is None)
    if state.base_path is None:
        return
    assert state.base_path != "/"
    assert state.script_path.startswith("/")
    assert compose_path(state.base_path, state.script_path) == state.path


class TestRandomSequences:
    @pytest.mark.parametrize("seed", range(8))
    def test_every_step_consistent(self, seed: int) -> None:
        rng = random.Random(seed)
        for _ in range(250):
            state = PathState(normalize_path(_random_path(rng)))
            for _ in range(rng.randint(1, 8)):
                state = _random_step(rng, state)
                _assert_consistent(state)

    @pytest.mark.parametrize("seed", range(4))
    def test_normalize_idempotent(self, seed: int) -> None:
        rng = random.Random(seed)
        for _ in range(500):
            once = normalize_path(_random_path(rng))
            assert normalize_path(once) == once
