"""Sequenced persistence of a reorder plan.

Runs a plan's steps one write at a time, each awaiting the previous
response, then re-fetches the board. The writes are not transactional:
a failure stops the sequence where it is, nothing already written is
undone, and nothing is retried. The refetch still runs so the caller
sees what the server actually holds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dragboard.api.errors import BoardApiError

if TYPE_CHECKING:
    from dragboard.api.protocol import BoardApiProtocol
    from dragboard.models import Board, CardUpdate
    from dragboard.reorder.engine import ReorderPlan, StepName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one write step.

    Attributes:
        name: The step's name.
        updates: The updates the step carried.
        attempted: False when an earlier step failed and this one was skipped.
        error: The failure, if the write was attempted and failed.
    """

    name: StepName
    updates: tuple[CardUpdate, ...]
    attempted: bool = True
    error: BoardApiError | None = None

    @property
    def ok(self) -> bool:
        return self.attempted and self.error is None


@dataclass(frozen=True)
class SequenceResult:
    """Outcome of a whole plan: per-step results plus the refetch.

    Attributes:
        steps: One result per plan step, in order.
        board: The refetched board, or None if there was nothing to send or
            the refetch failed.
        refetch_error: The refetch failure, if any.
    """

    steps: tuple[StepResult, ...] = ()
    board: Board | None = None
    refetch_error: BoardApiError | None = None

    @property
    def ok(self) -> bool:
        """True when every step was written."""
        return all(step.ok for step in self.steps)

    @property
    def failed_step(self) -> StepResult | None:
        return next(
            (step for step in self.steps if step.attempted and not step.ok), None
        )

    @property
    def skipped_steps(self) -> tuple[StepResult, ...]:
        return tuple(step for step in self.steps if not step.attempted)

    @property
    def refreshed(self) -> bool:
        return self.board is not None

    @property
    def noop(self) -> bool:
        return not self.steps


class PersistenceSequencer:
    """Applies reorder plans to one board through a BoardApiProtocol."""

    def __init__(self, api: BoardApiProtocol, board_id: int) -> None:
        self._api = api
        self._board_id = board_id

    @property
    def board_id(self) -> int:
        return self._board_id

    async def run(self, plan: ReorderPlan) -> SequenceResult:
        """Write each step in order, stop at the first failure, then refetch.

        An empty plan issues no calls at all.
        """
        if plan.is_noop:
            return SequenceResult()

        results: list[StepResult] = []
        failed = False
        for step in plan.steps:
            if failed:
                results.append(StepResult(step.name, step.updates, attempted=False))
                continue
            try:
                await self._api.update_cards(self._board_id, step.updates)
            except BoardApiError as exc:
                logger.error(
                    "Board %s: step %s failed (%d update(s)): %s",
                    self._board_id,
                    step.name,
                    len(step.updates),
                    exc,
                )
                results.append(StepResult(step.name, step.updates, error=exc))
                failed = True
                continue
            logger.debug(
                "Board %s: step %s wrote %d update(s)",
                self._board_id,
                step.name,
                len(step.updates),
            )
            results.append(StepResult(step.name, step.updates))

        if failed:
            skipped = [r.name for r in results if not r.attempted]
            if skipped:
                logger.warning(
                    "Board %s: skipped steps after failure: %s",
                    self._board_id,
                    ", ".join(skipped),
                )

        board, refetch_error = await self.refetch()
        return SequenceResult(
            steps=tuple(results), board=board, refetch_error=refetch_error
        )

    async def refetch(self) -> tuple[Board | None, BoardApiError | None]:
        """Reload the board; returns ``(board, None)`` or ``(None, error)``."""
        try:
            board = await self._api.get_board(self._board_id)
        except BoardApiError as exc:
            logger.error("Board %s: reconciliation refetch failed: %s", self._board_id, exc)
            return None, exc
        logger.info("Board %s: reconciled from server", self._board_id)
        return board, None
