"""Protocol defining the board API interface.

Both HttpBoardApi and MockBoardApi implement this protocol, so the
sequencer, controller and pages work against either.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dragboard.api.models import BoardSummary
    from dragboard.models import Board, CardUpdate


@runtime_checkable
class BoardApiProtocol(Protocol):
    """Operations the board REST API offers.

    Failures raise BoardApiError.
    """

    async def get_boards(self) -> list[BoardSummary]:
        """List the boards visible to the caller."""
        ...

    async def get_board(self, board_id: int) -> Board:
        """Fetch a full board with nested lists and cards."""
        ...

    async def update_cards(
        self, board_id: int, updates: Sequence[CardUpdate]
    ) -> None:
        """Apply a batch of position/list reassignments.

        Each element is applied independently; success or failure is
        reported for the batch as a whole.
        """
        ...

    async def create_card(
        self, board_id: int, list_id: int, title: str, position: int
    ) -> int:
        """Create a card at ``position`` in a list and return its id."""
        ...

    async def delete_card(self, board_id: int, card_id: int) -> None:
        """Delete a card."""
        ...

    async def create_board(self, title: str) -> int:
        """Create an empty board and return its id."""
        ...

    async def rename_board(self, board_id: int, title: str) -> None:
        ...

    async def delete_board(self, board_id: int) -> None:
        """Delete a board with all of its lists and cards."""
        ...

    async def create_list(self, board_id: int, title: str, position: int) -> int:
        """Create a list at ``position`` among the board's lists and return its id."""
        ...

    async def rename_list(self, board_id: int, list_id: int, title: str) -> None:
        ...

    async def delete_list(self, board_id: int, list_id: int) -> None:
        """Delete a list with all of its cards."""
        ...

    async def aclose(self) -> None:
        """Release any underlying connections."""
        ...
