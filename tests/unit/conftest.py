"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from dragboard.api.mock import MockBoardApi
from dragboard.models import Board
from tests.helpers.boards import build_sample_board


@pytest.fixture
def sample_board() -> Board:
    return build_sample_board()


@pytest.fixture
def mock_api() -> MockBoardApi:
    """Mock API holding a fresh copy of the sample board."""
    return MockBoardApi([build_sample_board()])
