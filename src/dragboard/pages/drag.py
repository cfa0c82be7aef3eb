"""Drag-and-drop wiring between NiceGUI elements and the controller.

Cards use native HTML5 drag events. The browser reports pointer and
bounding-box geometry through small ``js_handler`` snippets; everything
else (slot choice, indicator bookkeeping, persistence) happens in Python
through DragDropController.

Notes:
- Geometry arrives as plain dicts and is turned into Rect on the server.
- Card dragover is throttled; the list's own ``dragover.prevent``
  listener keeps it a valid drop target.
- On drop the controller refetches the board and the page re-renders from
  the store; elements are never moved by hand.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from nicegui import ui

from dragboard.reorder.drop_target import Rect

if TYPE_CHECKING:
    from nicegui.events import GenericEventArguments

    from dragboard.controller import DragDropController

logger = logging.getLogger(__name__)

# Emits pointer position plus the bounding box of the listening element.
_GEOMETRY_JS = """(e) => {
    e.preventDefault();
    const r = e.currentTarget.getBoundingClientRect();
    emit({x: e.clientX, y: e.clientY,
          left: r.left, top: r.top, width: r.width, height: r.height});
}"""

HOVER_THROTTLE = 0.05


def rect_from_args(args: dict[str, Any]) -> Rect:
    """Build a Rect from the geometry dict the browser emits."""
    return Rect(
        left=float(args["left"]),
        top=float(args["top"]),
        width=float(args["width"]),
        height=float(args["height"]),
    )


def pointer_from_args(args: dict[str, Any]) -> tuple[float, float]:
    return float(args["x"]), float(args["y"])


class ColumnSlotIndicator:
    """SlotIndicator drawing a placeholder element inside list columns.

    Columns are registered on every render; a slot is a plain div moved to
    the requested index among the column's children.
    """

    def __init__(self) -> None:
        self._columns: dict[int, ui.column] = {}
        self._slots: dict[int, ui.element] = {}

    def register_column(self, list_id: int, column: ui.column) -> None:
        self._columns[list_id] = column
        self._slots.pop(list_id, None)

    def reset_columns(self) -> None:
        self._columns.clear()
        self._slots.clear()

    def show_indicator(self, list_id: int, index: int) -> None:
        column = self._columns.get(list_id)
        if column is None:
            logger.debug("No column registered for list %s", list_id)
            return
        self.clear_indicator(list_id)
        with column:
            slot = ui.element("div").classes("drop-slot")
        slot.move(target_container=column, target_index=index)
        self._slots[list_id] = slot

    def clear_indicator(self, list_id: int) -> None:
        slot = self._slots.pop(list_id, None)
        if slot is not None and not slot.is_deleted:
            slot.delete()


def make_draggable_card(
    card: ui.card,
    card_id: int,
    list_id: int,
    controller: DragDropController,
) -> ui.card:
    """Add drag attributes and events to a card element.

    Args:
        card: The NiceGUI card element to make draggable.
        card_id: Id of the card it renders.
        list_id: Id of the list the card sits in.
        controller: Per-client controller receiving the events.

    Returns:
        The card (for chaining).
    """
    card.props("draggable")
    card.classes("cursor-grab")

    def on_dragstart() -> None:
        controller.on_drag_start(card_id)

    def on_dragover(e: GenericEventArguments) -> None:
        if controller.payload is None:
            return
        _, y = pointer_from_args(e.args)
        controller.on_hover_card(list_id, card_id, y, rect_from_args(e.args))

    def on_dragend() -> None:
        # Fires after drop as well; by then the payload is already consumed.
        if controller.payload is not None:
            controller.cancel()

    card.on("dragstart", on_dragstart)
    card.on("dragover", on_dragover, js_handler=_GEOMETRY_JS, throttle=HOVER_THROTTLE)
    card.on("dragend", on_dragend)

    return card


def make_drop_list(
    column: ui.column,
    list_id: int,
    controller: DragDropController,
    *,
    empty: bool,
) -> ui.column:
    """Make a list column a valid drop target.

    Args:
        column: The NiceGUI column holding the list's cards.
        list_id: Id of the list.
        controller: Per-client controller receiving the events.
        empty: Whether the list currently has no cards; empty lists
            resolve their single slot on dragenter.

    Returns:
        The column (for chaining).
    """
    # dragover.prevent marks a valid drop target; the handler itself is a no-op.
    column.on("dragover.prevent", lambda: None, throttle=HOVER_THROTTLE)

    if empty:

        def on_dragenter() -> None:
            if controller.payload is not None:
                controller.on_hover_empty_list(list_id)

        column.on("dragenter.prevent", on_dragenter)

    def on_dragleave(e: GenericEventArguments) -> None:
        x, y = pointer_from_args(e.args)
        controller.on_leave_list(list_id, x, y, rect_from_args(e.args))

    async def on_drop() -> None:
        payload = controller.payload
        if payload is None:
            logger.warning("Drop event with no dragged card")
            return
        logger.info("Drop: card=%s onto list=%s", payload.card_id, list_id)
        await controller.on_drop(list_id)

    column.on("dragleave", on_dragleave, js_handler=_GEOMETRY_JS)
    column.on("drop.prevent", on_drop)

    return column
