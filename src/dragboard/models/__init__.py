"""Data models for boards and drag-and-drop gestures."""

from dragboard.models.board import (
    Board,
    Card,
    CardList,
    UnknownCardError,
    UnknownListError,
    positions_contiguous,
)
from dragboard.models.drag import CardUpdate, DragPayload, DropTarget

__all__ = [
    "Board",
    "Card",
    "CardList",
    "CardUpdate",
    "DragPayload",
    "DropTarget",
    "UnknownCardError",
    "UnknownListError",
    "positions_contiguous",
]
