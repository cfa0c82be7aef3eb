"""In-memory board API for tests and offline development.

Implements BoardApiProtocol without a server. Card updates are applied the
way the real endpoint applies them: each element independently, with no
check that the resulting positions are contiguous. That lets tests observe
the transient states a partially failed sequence leaves behind.
"""

from __future__ import annotations

import copy
from collections import Counter
from typing import TYPE_CHECKING

from dragboard.api.activity import RequestTracker
from dragboard.api.errors import BoardApiError
from dragboard.api.models import BoardSummary
from dragboard.models import Board, Card, CardList, UnknownCardError, UnknownListError
from dragboard.reorder.engine import apply_updates

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dragboard.models import CardUpdate

DEMO_BOARD_ID = 1


def demo_board() -> Board:
    """A small three-list board used to seed the mock API."""
    lists = [
        CardList(id=1, title="To do", position=0),
        CardList(id=2, title="In progress", position=1),
        CardList(id=3, title="Done", position=2),
    ]
    titles = {
        1: ["Write release notes", "Review open issues", "Plan sprint"],
        2: ["Fix login redirect"],
        3: [],
    }
    card_id = 1
    for card_list in lists:
        for position, title in enumerate(titles[card_list.id]):
            card_list.cards.append(Card(card_id, title, position, card_list.id))
            card_id += 1
    return Board(id=DEMO_BOARD_ID, title="Demo board", lists=lists)


class MockBoardApi:
    """BoardApiProtocol implementation backed by a dict of boards.

    Failure injection: ``fail_next("update_cards")`` makes the next call to
    that method raise BoardApiError without changing any state;
    ``fail_next("update_cards", after=1)`` lets one call through first.
    """

    def __init__(
        self,
        boards: Sequence[Board] = (),
        *,
        tracker: RequestTracker | None = None,
    ) -> None:
        self.tracker = tracker or RequestTracker()
        self._boards: dict[int, Board] = {
            board.id: copy.deepcopy(board) for board in boards
        }
        self._call_counts: Counter[str] = Counter()
        self._failing_calls: dict[str, set[int]] = {}
        # (method, board_id, payload) for test assertions
        self.calls: list[tuple[str, int | None, object]] = []

    def fail_next(self, method: str, count: int = 1, *, after: int = 0) -> None:
        """Make ``count`` calls to ``method`` fail, starting ``after`` calls from now."""
        first = self._call_counts[method] + after + 1
        self._failing_calls.setdefault(method, set()).update(
            range(first, first + count)
        )

    def get_calls(self, method: str | None = None) -> list[tuple[str, int | None, object]]:
        if method is None:
            return list(self.calls)
        return [call for call in self.calls if call[0] == method]

    def clear_calls(self) -> None:
        self.calls.clear()

    def _begin(self, method: str, board_id: int | None, payload: object = None) -> None:
        self.calls.append((method, board_id, payload))
        self._call_counts[method] += 1
        failing = self._failing_calls.get(method, set())
        if self._call_counts[method] in failing:
            failing.discard(self._call_counts[method])
            raise BoardApiError(method, "Injected failure", 500)

    def _board(self, method: str, board_id: int) -> Board:
        try:
            return self._boards[board_id]
        except KeyError:
            raise BoardApiError(method, f"Board {board_id} not found", 404) from None

    async def get_boards(self) -> list[BoardSummary]:
        self.tracker.start()
        try:
            self._begin("get_boards", None)
            return [BoardSummary(b.id, b.title) for b in self._boards.values()]
        finally:
            self.tracker.finish()

    async def get_board(self, board_id: int) -> Board:
        self.tracker.start()
        try:
            self._begin("get_board", board_id)
            return copy.deepcopy(self._board("get_board", board_id))
        finally:
            self.tracker.finish()

    def _list(self, method: str, board: Board, list_id: int) -> CardList:
        try:
            return board.get_list(list_id)
        except UnknownListError:
            raise BoardApiError(method, f"List {list_id} not found", 404) from None

    async def update_cards(
        self, board_id: int, updates: Sequence[CardUpdate]
    ) -> None:
        self.tracker.start()
        try:
            self._begin("update_cards", board_id, tuple(updates))
            board = self._board("update_cards", board_id)
            try:
                self._boards[board_id] = apply_updates(board, updates)
            except UnknownCardError as exc:
                raise BoardApiError(
                    "update_cards", f"Card {exc.args[0]} not found", 404
                ) from exc
            except UnknownListError as exc:
                raise BoardApiError(
                    "update_cards", f"List {exc.args[0]} not found", 404
                ) from exc
        finally:
            self.tracker.finish()

    async def create_card(
        self, board_id: int, list_id: int, title: str, position: int
    ) -> int:
        self.tracker.start()
        try:
            self._begin("create_card", board_id, (list_id, title, position))
            board = self._board("create_card", board_id)
            card_list = self._list("create_card", board, list_id)
            existing = [card.id for cl in board.lists for card in cl.cards]
            new_id = max(existing, default=0) + 1
            card_list.cards.append(Card(new_id, title, position, list_id))
            card_list.cards.sort(key=lambda card: card.position)
            return new_id
        finally:
            self.tracker.finish()

    async def delete_card(self, board_id: int, card_id: int) -> None:
        self.tracker.start()
        try:
            self._begin("delete_card", board_id, card_id)
            board = self._board("delete_card", board_id)
            for card_list in board.lists:
                card_list.cards = [c for c in card_list.cards if c.id != card_id]
        finally:
            self.tracker.finish()

    async def create_board(self, title: str) -> int:
        self.tracker.start()
        try:
            self._begin("create_board", None, title)
            new_id = max(self._boards, default=0) + 1
            self._boards[new_id] = Board(id=new_id, title=title)
            return new_id
        finally:
            self.tracker.finish()

    async def rename_board(self, board_id: int, title: str) -> None:
        self.tracker.start()
        try:
            self._begin("rename_board", board_id, title)
            self._board("rename_board", board_id).title = title
        finally:
            self.tracker.finish()

    async def delete_board(self, board_id: int) -> None:
        self.tracker.start()
        try:
            self._begin("delete_board", board_id)
            self._board("delete_board", board_id)
            del self._boards[board_id]
        finally:
            self.tracker.finish()

    async def create_list(self, board_id: int, title: str, position: int) -> int:
        self.tracker.start()
        try:
            self._begin("create_list", board_id, (title, position))
            board = self._board("create_list", board_id)
            # List ids are unique across boards, as on the server.
            existing = [cl.id for b in self._boards.values() for cl in b.lists]
            new_id = max(existing, default=0) + 1
            board.lists.append(CardList(id=new_id, title=title, position=position))
            board.lists.sort(key=lambda card_list: card_list.position)
            return new_id
        finally:
            self.tracker.finish()

    async def rename_list(self, board_id: int, list_id: int, title: str) -> None:
        self.tracker.start()
        try:
            self._begin("rename_list", board_id, (list_id, title))
            board = self._board("rename_list", board_id)
            self._list("rename_list", board, list_id).title = title
        finally:
            self.tracker.finish()

    async def delete_list(self, board_id: int, list_id: int) -> None:
        """Remove a list together with its cards."""
        self.tracker.start()
        try:
            self._begin("delete_list", board_id, list_id)
            board = self._board("delete_list", board_id)
            board.lists.remove(self._list("delete_list", board, list_id))
        finally:
            self.tracker.finish()

    async def aclose(self) -> None:
        pass
