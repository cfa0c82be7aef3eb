"""Drag-and-drop controller: the interface the view layer talks to.

The view reports pointer events (drag start, hover over a card or an empty
list, leaving a list, drop, cancel) and the controller turns them into
reorder plans, runs them through the PersistenceSequencer and swaps the
refetched board into the BoardStore. All state lives on the controller
instance; each client gets its own.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

from dragboard.api.errors import BoardApiError
from dragboard.models import (
    CardUpdate,
    DragPayload,
    DropTarget,
    UnknownCardError,
    UnknownListError,
)
from dragboard.reorder.drop_target import DropTargetResolver
from dragboard.reorder.engine import apply_updates, plan_drop
from dragboard.reorder.sequencer import PersistenceSequencer, SequenceResult

if TYPE_CHECKING:
    from dragboard.api.protocol import BoardApiProtocol
    from dragboard.models import Board
    from dragboard.reorder.drop_target import Rect, SlotIndicator
    from dragboard.store import BoardStore

logger = logging.getLogger(__name__)

MOVE_OK_MESSAGE = "Card successfully moved"
MOVE_FAILED_MESSAGE = "Error! Failed to move card"
REFETCH_FAILED_MESSAGE = "Error! Failed to reload board"


class Notifier(Protocol):
    """Transient user notifications (toasts)."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class NullNotifier:
    def success(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


class DragDropController:
    """Per-client drag-and-drop flow for one board.

    Drops are serialised: a second drop waits until the first one's writes
    and refetch have finished. Its payload is then re-captured from the
    fresh snapshot if the dragged card or its list changed meanwhile, so
    both the source and destination sides are planned on current positions.
    """

    def __init__(
        self,
        store: BoardStore,
        api: BoardApiProtocol,
        *,
        indicator: SlotIndicator | None = None,
        notifier: Notifier | None = None,
        atomic_moves: bool = False,
        optimistic_updates: bool = False,
    ) -> None:
        self.store = store
        self.api = api
        self.resolver = DropTargetResolver(indicator)
        self.notifier: Notifier = notifier or NullNotifier()
        self.atomic_moves = atomic_moves
        self.optimistic_updates = optimistic_updates
        self._sequencer = PersistenceSequencer(api, store.board_id)
        self._payload: DragPayload | None = None
        self._drop_lock = asyncio.Lock()

    @property
    def payload(self) -> DragPayload | None:
        """The drag in progress, if any."""
        return self._payload

    # -------------------- pointer events --------------------
    def on_drag_start(self, card_id: int) -> DragPayload:
        """Capture the dragged card and a copy of its list."""
        board = self.store.require_board()
        card = board.find_card(card_id)
        card_list = board.get_list(card.list_id)
        self._payload = DragPayload.capture(card, card_list.cards)
        self.resolver.reset()
        logger.debug(
            "Drag start: card=%s list=%s position=%s",
            card_id,
            card.list_id,
            card.position,
        )
        return self._payload

    def on_hover_card(
        self, list_id: int, card_id: int, pointer_y: float, card_rect: Rect
    ) -> DropTarget:
        """Resolve the slot for the pointer over a card in ``list_id``."""
        card = self.store.require_board().get_list(list_id).find_card(card_id)
        if card is None:
            raise UnknownCardError(card_id)
        return self.resolver.hover_card(list_id, card.position, pointer_y, card_rect)

    def on_hover_empty_list(self, list_id: int) -> DropTarget:
        return self.resolver.hover_empty_list(list_id)

    def on_leave_list(
        self, list_id: int, pointer_x: float, pointer_y: float, list_rect: Rect
    ) -> bool:
        return self.resolver.leave_list(list_id, pointer_x, pointer_y, list_rect)

    def cancel(self) -> None:
        """Abandon the drag: clear indicators, send nothing."""
        if self._payload is not None:
            logger.debug("Drag of card %s abandoned", self._payload.card_id)
        self._payload = None
        self.resolver.reset()

    async def on_drop(
        self, list_id: int, payload: DragPayload | None = None
    ) -> SequenceResult:
        """Finish a drag over ``list_id``.

        Uses the slot the resolver last selected in that list. A drop with no
        drag in progress or no resolved slot is treated as a cancel.
        """
        payload = payload or self._payload
        target = self.resolver.finalize(list_id)
        self.cancel()
        if payload is None or target is None:
            logger.debug("Drop on list %s without payload or slot, ignored", list_id)
            return SequenceResult()
        return await self.drop_at(payload, target)

    # -------------------- persistence --------------------
    async def drop_at(self, payload: DragPayload, target: DropTarget) -> SequenceResult:
        """Plan and persist a drop at an explicit target, then refresh the store."""
        async with self._drop_lock:
            board = self.store.require_board()
            payload = self._current_payload(board, payload)
            if payload is None:
                return SequenceResult()
            destination = board.get_list(target.list_id).cards
            plan = plan_drop(payload, target, destination, atomic=self.atomic_moves)
            if plan.is_noop:
                return SequenceResult()

            logger.info(
                "Drop: card=%s %s list=%s position=%s (%d step(s))",
                payload.card_id,
                plan.kind,
                target.list_id,
                target.position,
                len(plan.steps),
            )
            if self.optimistic_updates:
                self._show_optimistic(plan.updates)

            result = await self._sequencer.run(plan)
            if result.board is not None:
                self.store.replace(result.board)

        self._report(result)
        return result

    def _current_payload(self, board: Board, payload: DragPayload) -> DragPayload | None:
        """Re-capture ``payload`` if the snapshot moved on since drag start."""
        try:
            card = board.find_card(payload.card_id)
        except UnknownCardError:
            logger.warning("Card %s is gone from the board, drop ignored", payload.card_id)
            return None
        fresh = DragPayload.capture(card, board.get_list(card.list_id).cards)
        if fresh != payload:
            logger.debug("Card %s moved since drag start, re-captured", payload.card_id)
        return fresh

    def _show_optimistic(self, updates: tuple[CardUpdate, ...]) -> None:
        try:
            self.store.replace(apply_updates(self.store.require_board(), updates))
        except (UnknownCardError, UnknownListError):
            logger.warning("Snapshot out of date, skipping optimistic update")

    def _report(self, result: SequenceResult) -> None:
        if result.ok:
            self.notifier.success(MOVE_OK_MESSAGE)
        else:
            self.notifier.error(MOVE_FAILED_MESSAGE)
        if result.refetch_error is not None:
            self.notifier.error(REFETCH_FAILED_MESSAGE)

    # -------------------- card lifecycle --------------------
    async def add_card(self, list_id: int, title: str) -> int | None:
        """Append a card to a list and reload the board."""
        title = title.strip()
        if not title:
            self.notifier.error("Error! Failed to create card")
            return None
        position = len(self.store.require_board().get_list(list_id).cards)
        try:
            card_id = await self.api.create_card(
                self.store.board_id, list_id, title, position
            )
            await self.store.refresh(self.api)
        except BoardApiError as exc:
            logger.error("Creating card in list %s failed: %s", list_id, exc)
            self.notifier.error("Error! Failed to create card")
            return None
        self.notifier.success("Card successfully created")
        return card_id

    async def remove_card(self, card_id: int) -> bool:
        """Delete a card, close the gap it leaves, and reload the board."""
        board = self.store.require_board()
        card = board.find_card(card_id)
        gap_close = [
            sibling
            for sibling in board.get_list(card.list_id).cards
            if sibling.position > card.position
        ]
        try:
            await self.api.delete_card(self.store.board_id, card_id)
            if gap_close:
                await self.api.update_cards(
                    self.store.board_id,
                    [CardUpdate(c.id, c.position - 1, c.list_id) for c in gap_close],
                )
            await self.store.refresh(self.api)
        except BoardApiError as exc:
            logger.error("Deleting card %s failed: %s", card_id, exc)
            self.notifier.error("Error! Failed to delete card")
            return False
        self.notifier.success("Card successfully deleted")
        return True

    # -------------------- list and board lifecycle --------------------
    async def add_list(self, title: str) -> int | None:
        """Append a list after the board's last list and reload the board."""
        title = title.strip()
        if not title:
            self.notifier.error("Error! Failed to create list")
            return None
        position = len(self.store.require_board().lists)
        try:
            list_id = await self.api.create_list(self.store.board_id, title, position)
            await self.store.refresh(self.api)
        except BoardApiError as exc:
            logger.error("Creating list on board %s failed: %s", self.store.board_id, exc)
            self.notifier.error("Error! Failed to create list")
            return None
        self.notifier.success("List successfully created")
        return list_id

    async def rename_list(self, list_id: int, title: str) -> bool:
        title = title.strip()
        if not title:
            self.notifier.error("Error! List name is invalid")
            return False
        if self.store.require_board().get_list(list_id).title == title:
            return True
        try:
            await self.api.rename_list(self.store.board_id, list_id, title)
            await self.store.refresh(self.api)
        except BoardApiError as exc:
            logger.error("Renaming list %s failed: %s", list_id, exc)
            self.notifier.error("Error! List name hasn't been changed")
            return False
        self.notifier.success("List name successfully changed")
        return True

    async def remove_list(self, list_id: int) -> bool:
        """Delete a list with its cards and reload the board."""
        try:
            await self.api.delete_list(self.store.board_id, list_id)
            await self.store.refresh(self.api)
        except BoardApiError as exc:
            logger.error("Deleting list %s failed: %s", list_id, exc)
            self.notifier.error("Error! Failed to delete list")
            return False
        self.notifier.success("List successfully deleted")
        return True

    async def rename_board(self, title: str) -> bool:
        title = title.strip()
        if not title:
            self.notifier.error("Error! Board name is invalid")
            return False
        if self.store.require_board().title == title:
            return True
        try:
            await self.api.rename_board(self.store.board_id, title)
            await self.store.refresh(self.api)
        except BoardApiError as exc:
            logger.error("Renaming board %s failed: %s", self.store.board_id, exc)
            self.notifier.error("Error! Board name hasn't been changed")
            return False
        self.notifier.success("Board name successfully changed")
        return True

    async def remove_board(self) -> bool:
        """Delete the board. The store keeps its last snapshot; callers navigate away."""
        try:
            await self.api.delete_board(self.store.board_id)
        except BoardApiError as exc:
            logger.error("Deleting board %s failed: %s", self.store.board_id, exc)
            self.notifier.error("Error! Failed to delete board")
            return False
        self.notifier.success("Board successfully deleted")
        return True


async def create_board(
    api: BoardApiProtocol, title: str, notifier: Notifier | None = None
) -> int | None:
    """Create an empty board; returns its id, or None on failure."""
    notifier = notifier or NullNotifier()
    title = title.strip()
    if not title:
        notifier.error("Error! Board not created")
        return None
    try:
        board_id = await api.create_board(title)
    except BoardApiError as exc:
        logger.error("Creating board %r failed: %s", title, exc)
        notifier.error("Error! Board not created")
        return None
    notifier.success("The board was created successfully!")
    return board_id
