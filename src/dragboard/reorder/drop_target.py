"""Resolve the insertion slot under the pointer while a card is dragged.

Geometry only: which slot the pointer is over, plus bookkeeping so that each
list shows at most one insertion indicator. Drawing the indicator is left to
a SlotIndicator supplied by the view layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from dragboard.models.drag import DropTarget

logger = logging.getLogger(__name__)


class SlotIndicator(Protocol):
    """Renderer hook for the visual insertion slot."""

    def show_indicator(self, list_id: int, index: int) -> None:
        """Draw the insertion slot in ``list_id`` before card ``index``."""
        ...

    def clear_indicator(self, list_id: int) -> None:
        """Remove any insertion slot drawn in ``list_id``."""
        ...


class NullIndicator:
    """SlotIndicator that draws nothing (CLI and tests)."""

    def show_indicator(self, list_id: int, index: int) -> None:
        pass

    def clear_indicator(self, list_id: int) -> None:
        pass


@dataclass(frozen=True)
class Rect:
    """An element's bounding box in client coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float, *, bottom_inset: float = 0.0) -> bool:
        """True if the point lies inside the box, edges included.

        ``bottom_inset`` pulls the bottom edge up, so a pointer resting on
        the last few pixels of a list already counts as having left it.
        """
        return (
            self.left <= x <= self.right
            and self.top <= y <= self.bottom - bottom_inset
        )


def slot_for_card(pointer_y: float, card_rect: Rect, position: int) -> int:
    """Slot index for a pointer hovering a card at ``position``.

    Upper half gives ``position`` (insert before the card), lower half gives
    ``position + 1`` (insert after it). The midpoint belongs to the lower half.
    """
    if pointer_y - card_rect.top < card_rect.height / 2:
        return position
    return position + 1


def slot_for_empty_list() -> int:
    return 0


class DropTargetResolver:
    """Per-client tracker of the current drop slot in each list.

    Re-evaluated on every pointer move. Entering a new slot replaces the
    list's indicator; hovering the same slot again is a no-op for the
    renderer. Leaving a list's box clears that list.
    """

    # Pixels at the bottom of a list that count as outside it.
    LIST_BOTTOM_INSET = 5.0

    def __init__(self, indicator: SlotIndicator | None = None) -> None:
        self._indicator: SlotIndicator = indicator or NullIndicator()
        self._slots: dict[int, int] = {}

    @property
    def active_slots(self) -> dict[int, int]:
        """Current slot per list, for inspection."""
        return dict(self._slots)

    def _select(self, list_id: int, index: int) -> DropTarget:
        if self._slots.get(list_id) != index:
            if list_id in self._slots:
                self._indicator.clear_indicator(list_id)
            self._indicator.show_indicator(list_id, index)
            self._slots[list_id] = index
        return DropTarget(list_id=list_id, position=index)

    def hover_card(
        self, list_id: int, position: int, pointer_y: float, card_rect: Rect
    ) -> DropTarget:
        """Resolve the slot for a pointer over a card."""
        return self._select(list_id, slot_for_card(pointer_y, card_rect, position))

    def hover_empty_list(self, list_id: int) -> DropTarget:
        """Resolve the slot for a pointer over a list with no cards."""
        return self._select(list_id, slot_for_empty_list())

    def leave_list(
        self, list_id: int, pointer_x: float, pointer_y: float, list_rect: Rect
    ) -> bool:
        """Handle the pointer leaving a child element of a list.

        Leave events fire when moving between children too, so the slot is
        kept while the pointer is still inside the list's box.

        Returns:
            True if the list's slot was cleared.
        """
        if list_rect.contains(
            pointer_x, pointer_y, bottom_inset=self.LIST_BOTTOM_INSET
        ):
            return False
        return self.clear_list(list_id)

    def clear_list(self, list_id: int) -> bool:
        if self._slots.pop(list_id, None) is None:
            return False
        self._indicator.clear_indicator(list_id)
        return True

    def current(self, list_id: int) -> DropTarget | None:
        """The slot currently selected in ``list_id``, if any."""
        index = self._slots.get(list_id)
        if index is None:
            return None
        return DropTarget(list_id=list_id, position=index)

    def finalize(self, list_id: int) -> DropTarget | None:
        """Take the final target for a drop on ``list_id`` and clear it."""
        target = self.current(list_id)
        self.clear_list(list_id)
        return target

    def reset(self) -> None:
        """Clear every list, e.g. when a drag is abandoned."""
        for list_id in list(self._slots):
            self.clear_list(list_id)
