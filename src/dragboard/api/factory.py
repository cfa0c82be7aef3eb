"""Board API client factory.

Provides a factory function to get the appropriate API client based on
configuration (real HTTP API or in-memory mock).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dragboard.api.activity import RequestTracker
from dragboard.config import get_settings

if TYPE_CHECKING:
    from dragboard.api.protocol import BoardApiProtocol


# Cached mock instance so board state survives across page loads
_mock_api_instance: BoardApiProtocol | None = None
_tracker: RequestTracker | None = None


def get_request_tracker() -> RequestTracker:
    """Return the process-wide in-flight request counter."""
    global _tracker  # noqa: PLW0603
    if _tracker is None:
        _tracker = RequestTracker()
    return _tracker


def get_board_api() -> BoardApiProtocol:
    """Get the appropriate board API client based on configuration.

    If DEV__API_MOCK=true, returns MockBoardApi (singleton, seeded with the
    demo board when DEV__SEED_DEMO_BOARD=true). Otherwise returns a new
    HttpBoardApi for API__BASE_URL; the caller owns it and must aclose() it.

    Raises:
        ValueError: If api.base_url is empty and mock mode is disabled.
    """
    global _mock_api_instance  # noqa: PLW0603
    settings = get_settings()

    if settings.dev.api_mock:
        if _mock_api_instance is None:
            from dragboard.api.mock import MockBoardApi, demo_board

            boards = [demo_board()] if settings.dev.seed_demo_board else []
            _mock_api_instance = MockBoardApi(boards, tracker=get_request_tracker())
        return _mock_api_instance

    api = settings.api
    if not api.base_url:
        msg = (
            "API__BASE_URL is required when DEV__API_MOCK is not enabled. "
            "Set API__BASE_URL (and API__TOKEN) in your .env file."
        )
        raise ValueError(msg)

    from dragboard.api.client import HttpBoardApi

    return HttpBoardApi(
        base_url=api.base_url,
        token=api.token.get_secret_value(),
        timeout=api.timeout,
        tracker=get_request_tracker(),
    )


def clear_api_cache() -> None:
    """Clear the configuration, mock API and tracker caches.

    Useful for testing when you need to reload configuration
    or reset mock board state.
    """
    global _mock_api_instance, _tracker  # noqa: PLW0603
    get_settings.cache_clear()
    _mock_api_instance = None
    _tracker = None
