"""Board REST API access for dragboard.

Provides an httpx-based client for the board API and an in-memory mock
with the same interface.

Usage:
    from dragboard.api import get_board_api

    api = get_board_api()
    board = await api.get_board(1)
    await api.update_cards(1, [CardUpdate(card_id=7, position=0, list_id=2)])
"""

from __future__ import annotations

from dragboard.api.activity import RequestTracker
from dragboard.api.errors import BoardApiError
from dragboard.api.factory import clear_api_cache, get_board_api, get_request_tracker
from dragboard.api.models import BoardSummary
from dragboard.api.protocol import BoardApiProtocol

__all__ = [
    "BoardApiError",
    "BoardApiProtocol",
    "BoardSummary",
    "RequestTracker",
    "clear_api_cache",
    "get_board_api",
    "get_request_tracker",
]
