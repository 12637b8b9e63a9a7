"""Shared fixtures for frontpath tests."""

from __future__ import annotations

import pytest

from frontpath import Request


@pytest.fixture
def front_controller() -> Request:
    """A request routed through /app/index.php, as a front-controller deployment sees it."""
    return Request(
        "http://example.com/app/index.php/users/5?page=2",
        {
            "method": "post",
            "basePath": "/app/index.php",
            "headers": {"content_type": "application/json", "HOST": "example.com"},
            "payload": '{"name": "ada"}',
        },
    )
