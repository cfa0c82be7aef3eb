"""Result types returned by board API clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BoardSummary:
    """A board as listed on the home page: id and title only."""

    id: int
    title: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> BoardSummary:
        return cls(id=int(data["id"]), title=str(data.get("title", "")))
