"""Position reconciliation for drag-and-drop card moves.

Pure functions: they take card snapshots and return the updates needed to
keep every list's positions contiguous (``0..n-1``). Nothing here touches the
network or mutates its inputs.

Two cases, chosen by comparing source and destination list ids:

- reorder: the card stays in its list. One write carries the moved card
  and the siblings between its old and new slot.
- move: the card changes lists. Three dependent writes, in order:
  destination-insert, source-gap-close, destination-gap-open.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from dragboard.models.board import Board, UnknownCardError, UnknownListError
from dragboard.models.drag import CardUpdate

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dragboard.models.board import Card
    from dragboard.models.drag import DragPayload, DropTarget

logger = logging.getLogger(__name__)


class StepName(StrEnum):
    """Names of the write steps a plan can contain."""

    REORDER = "reorder"
    DESTINATION_INSERT = "destination-insert"
    SOURCE_GAP_CLOSE = "source-gap-close"
    DESTINATION_GAP_OPEN = "destination-gap-open"
    ATOMIC_BATCH = "atomic-batch"


class MoveKind(StrEnum):
    NONE = "none"
    REORDER = "reorder"
    MOVE = "move"


@dataclass(frozen=True)
class UpdateStep:
    """One write call's worth of card updates."""

    name: StepName
    updates: tuple[CardUpdate, ...]


@dataclass(frozen=True)
class MoveUpdates:
    """The three update sets of a cross-list move, in write order."""

    destination_insert: tuple[CardUpdate, ...]
    source_gap_close: tuple[CardUpdate, ...]
    destination_gap_open: tuple[CardUpdate, ...]

    @property
    def destination_updates(self) -> tuple[CardUpdate, ...]:
        """All updates landing in the destination list."""
        return self.destination_insert + self.destination_gap_open


@dataclass(frozen=True)
class ReorderPlan:
    """Ordered write steps for a single drop.

    An empty plan means the drop is an identity move and nothing is sent.
    """

    kind: MoveKind
    steps: tuple[UpdateStep, ...] = ()

    @property
    def is_noop(self) -> bool:
        return not self.steps

    @property
    def updates(self) -> tuple[CardUpdate, ...]:
        """Every update in the plan, flattened in write order."""
        return tuple(update for step in self.steps for update in step.updates)

    def as_single_batch(self) -> ReorderPlan:
        """Fold all steps into one write.

        Each card appears once, carrying its last update in write order.
        """
        if len(self.steps) <= 1:
            return self
        merged: dict[int, CardUpdate] = {}
        for update in self.updates:
            merged[update.card_id] = update
        step = UpdateStep(StepName.ATOMIC_BATCH, tuple(merged.values()))
        return ReorderPlan(kind=self.kind, steps=(step,))


def _ordered(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda card: card.position)


def _check_target(target_pos: int, length: int) -> None:
    if not 0 <= target_pos <= length:
        msg = f"Target position {target_pos} outside list bounds [0, {length}]"
        raise ValueError(msg)


def is_identity_drop(old_pos: int, new_pos: int) -> bool:
    """True when dropping at ``new_pos`` leaves a card where it was.

    The slots directly above and directly below a card both resolve to its
    current place in the list.
    """
    return new_pos in (old_pos, old_pos + 1)


def reorder(
    card_id: int,
    old_pos: int,
    new_pos: int,
    list_id: int,
    list_cards: Sequence[Card],
) -> tuple[CardUpdate, ...]:
    """Compute updates for moving a card to another slot in the same list.

    Args:
        card_id: The dragged card.
        old_pos: The card's position at drag start.
        new_pos: The insertion slot, in ``[0, len(list_cards)]``.
        list_id: The list both slots belong to.
        list_cards: The list's cards at drag start (the dragged card included).

    Returns:
        The moved card's update first, then shifted siblings in list order.
        Empty for an identity drop.
    """
    _check_target(new_pos, len(list_cards))
    if is_identity_drop(old_pos, new_pos):
        return ()

    siblings = [card for card in _ordered(list_cards) if card.id != card_id]

    if old_pos < new_pos:
        final_pos = new_pos - 1
        shifted = [
            CardUpdate(card.id, card.position - 1, list_id)
            for card in siblings
            if old_pos < card.position <= final_pos
        ]
    else:
        final_pos = new_pos
        shifted = [
            CardUpdate(card.id, card.position + 1, list_id)
            for card in siblings
            if new_pos <= card.position < old_pos
        ]

    return (CardUpdate(card_id, final_pos, list_id), *shifted)


def move(
    card_id: int,
    old_pos: int,
    target_pos: int,
    source_list_id: int,
    source_cards: Sequence[Card],
    destination_list_id: int,
    destination_cards: Sequence[Card],
) -> MoveUpdates:
    """Compute the three update sets for moving a card to another list.

    ``destination_cards`` is the destination list before insertion; the
    gap-open set is computed from it, so a stale snapshot gives stale
    shifts. The reconciliation refetch is what surfaces that.
    """
    if source_list_id == destination_list_id:
        msg = "move() needs two different lists; use reorder() within a list"
        raise ValueError(msg)
    destination = [card for card in _ordered(destination_cards) if card.id != card_id]
    _check_target(target_pos, len(destination))

    insert = (CardUpdate(card_id, target_pos, destination_list_id),)
    gap_close = tuple(
        CardUpdate(card.id, card.position - 1, source_list_id)
        for card in _ordered(source_cards)
        if card.id != card_id and card.position > old_pos
    )
    gap_open = tuple(
        CardUpdate(card.id, card.position + 1, destination_list_id)
        for card in destination
        if card.position >= target_pos
    )
    return MoveUpdates(insert, gap_close, gap_open)


def plan_drop(
    payload: DragPayload,
    target: DropTarget,
    destination_cards: Sequence[Card],
    *,
    atomic: bool = False,
) -> ReorderPlan:
    """Turn a finished drag into an ordered plan of write steps.

    Args:
        payload: Snapshot taken at drag start.
        target: The resolved drop target.
        destination_cards: The target list's cards as currently displayed.
            Ignored for a same-list drop, where the payload's copy is used.
        atomic: Fold every step into a single write.

    Returns:
        A ReorderPlan. Empty steps are left out; an identity drop gives a
        plan with no steps.
    """
    if payload.source_list_id == target.list_id:
        updates = reorder(
            payload.card_id,
            payload.position,
            target.position,
            target.list_id,
            payload.source_cards,
        )
        if not updates:
            logger.debug("Identity drop for card %s, nothing to send", payload.card_id)
            return ReorderPlan(kind=MoveKind.NONE)
        return ReorderPlan(
            kind=MoveKind.REORDER,
            steps=(UpdateStep(StepName.REORDER, updates),),
        )

    sets = move(
        payload.card_id,
        payload.position,
        target.position,
        payload.source_list_id,
        payload.source_cards,
        target.list_id,
        destination_cards,
    )
    steps = tuple(
        UpdateStep(name, updates)
        for name, updates in (
            (StepName.DESTINATION_INSERT, sets.destination_insert),
            (StepName.SOURCE_GAP_CLOSE, sets.source_gap_close),
            (StepName.DESTINATION_GAP_OPEN, sets.destination_gap_open),
        )
        if updates
    )
    plan = ReorderPlan(kind=MoveKind.MOVE, steps=steps)
    return plan.as_single_batch() if atomic else plan


def apply_updates(board: Board, updates: Iterable[CardUpdate]) -> Board:
    """Return a copy of ``board`` with the updates applied.

    Cards are reassigned to their update's list and each list is re-sorted
    by position. The input board is left untouched.

    Raises:
        UnknownCardError: If an update names a card not on the board.
        UnknownListError: If an update names a list not on the board.
    """
    cards = {
        card.id: card for card_list in board.lists for card in card_list.cards
    }
    list_ids = {card_list.id for card_list in board.lists}
    for update in updates:
        if update.card_id not in cards:
            raise UnknownCardError(update.card_id)
        if update.list_id not in list_ids:
            raise UnknownListError(update.list_id)
        cards[update.card_id] = dataclasses.replace(
            cards[update.card_id], position=update.position, list_id=update.list_id
        )

    lists = [
        dataclasses.replace(
            card_list,
            cards=_ordered(card for card in cards.values() if card.list_id == card_list.id),
        )
        for card_list in board.lists
    ]
    return dataclasses.replace(board, lists=lists)
