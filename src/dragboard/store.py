"""Holder for the last fetched board snapshot.

The snapshot is only ever replaced, never edited: after each mutation the
whole board is re-fetched and swapped in, and subscribers re-render from it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from dragboard.api.protocol import BoardApiProtocol
    from dragboard.models import Board

logger = logging.getLogger(__name__)


class BoardStore:
    """Last known state of one board, with change notification."""

    def __init__(self, board_id: int, board: Board | None = None) -> None:
        self.board_id = board_id
        self._board = board
        self._subscribers: list[Callable[[Board], None]] = []

    @property
    def board(self) -> Board | None:
        return self._board

    def require_board(self) -> Board:
        """Return the snapshot, failing if nothing has been loaded yet."""
        if self._board is None:
            msg = f"Board {self.board_id} has not been loaded"
            raise RuntimeError(msg)
        return self._board

    def subscribe(self, callback: Callable[[Board], None]) -> Callable[[], None]:
        """Call ``callback`` with every new snapshot; returns an unsubscriber."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def replace(self, board: Board) -> None:
        """Swap in a new snapshot and notify subscribers."""
        if board.id != self.board_id:
            msg = f"Store for board {self.board_id} cannot hold board {board.id}"
            raise ValueError(msg)
        self._board = board
        for callback in list(self._subscribers):
            callback(board)

    async def refresh(self, api: BoardApiProtocol) -> Board:
        """Fetch the board and replace the snapshot.

        Raises:
            BoardApiError: If the fetch fails; the old snapshot is kept.
        """
        board = await api.get_board(self.board_id)
        logger.debug("Board %s refreshed", self.board_id)
        self.replace(board)
        return board
