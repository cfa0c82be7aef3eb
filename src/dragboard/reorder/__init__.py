"""Drag-and-drop card reordering: slot resolution, planning and persistence."""

from dragboard.reorder.drop_target import (
    DropTargetResolver,
    NullIndicator,
    Rect,
    SlotIndicator,
    slot_for_card,
    slot_for_empty_list,
)
from dragboard.reorder.engine import (
    MoveKind,
    MoveUpdates,
    ReorderPlan,
    StepName,
    UpdateStep,
    apply_updates,
    is_identity_drop,
    move,
    plan_drop,
    reorder,
)
from dragboard.reorder.sequencer import PersistenceSequencer, SequenceResult, StepResult

__all__ = [
    "DropTargetResolver",
    "MoveKind",
    "MoveUpdates",
    "NullIndicator",
    "PersistenceSequencer",
    "Rect",
    "ReorderPlan",
    "SequenceResult",
    "SlotIndicator",
    "StepName",
    "StepResult",
    "UpdateStep",
    "apply_updates",
    "is_identity_drop",
    "move",
    "plan_drop",
    "reorder",
    "slot_for_card",
    "slot_for_empty_list",
]
