"""Errors raised by board API clients."""

from __future__ import annotations


class BoardApiError(Exception):
    """A board API call failed at the transport or HTTP level.

    Attributes:
        operation: Short label of the failed call, e.g. ``"PUT board/1/card/"``.
        status_code: HTTP status when the server answered, else None.
    """

    def __init__(
        self, operation: str, message: str, status_code: int | None = None
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        status = f" [{self.status_code}]" if self.status_code is not None else ""
        return f"{self.operation}{status}: {self.args[0]}"
