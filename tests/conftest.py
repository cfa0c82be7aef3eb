"""Shared pytest fixtures for dragboard tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dragboard.api import clear_api_cache

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer env vars and cached clients out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith(("API__", "APP__", "BOARD__", "DEV__")):
            monkeypatch.delenv(key, raising=False)
    clear_api_cache()
    yield
    clear_api_cache()
