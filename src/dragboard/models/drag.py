"""Transient value objects for a drag-and-drop gesture.

A DragPayload is captured when the drag starts and consumed at drop. A
DropTarget is resolved while the pointer moves. CardUpdate is the unit the
REST API accepts for position/list reassignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dragboard.models.board import Card


@dataclass(frozen=True)
class DragPayload:
    """Snapshot of the dragged card and its origin list at drag start.

    Attributes:
        card_id: Id of the dragged card.
        position: Position of the card in its source list at drag start.
        source_list_id: Id of the list the card was dragged from.
        source_cards: Copy of the source list's cards at drag start, ordered
            by position. Siblings are re-indexed from this copy.
    """

    card_id: int
    position: int
    source_list_id: int
    source_cards: tuple[Card, ...]

    @classmethod
    def capture(cls, card: Card, list_cards: list[Card]) -> DragPayload:
        """Capture a payload from a card and the cards of its list."""
        return cls(
            card_id=card.id,
            position=card.position,
            source_list_id=card.list_id,
            source_cards=tuple(sorted(list_cards, key=lambda c: c.position)),
        )


@dataclass(frozen=True)
class DropTarget:
    """Insertion point under the pointer: a list and a slot index."""

    list_id: int
    position: int


@dataclass(frozen=True)
class CardUpdate:
    """A single card's new position and owning list."""

    card_id: int
    position: int
    list_id: int

    def to_api(self) -> dict[str, Any]:
        """Serialise to the wire object the bulk card endpoint expects."""
        return {"id": self.card_id, "position": self.position, "list_id": self.list_id}
