"""Board snapshot models.

These are plain dataclasses built from the REST API's JSON. A Board is a
snapshot: it is never patched in place after a mutation, the whole object is
replaced by a fresh fetch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class UnknownCardError(KeyError):
    """Raised when a card id is not present in a board snapshot."""


class UnknownListError(KeyError):
    """Raised when a list id is not present in a board snapshot."""


@dataclass
class Card:
    """A single card on a board.

    Attributes:
        id: Server-assigned card id.
        title: Card title.
        position: Ordering value, unique and contiguous within its list.
        list_id: Id of the list that owns the card.
        description: Optional free-text description.
    """

    id: int
    title: str
    position: int
    list_id: int
    description: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any], list_id: int) -> Card:
        """Build a card from its API representation.

        The API nests cards inside lists, so the owning list id is passed in.
        """
        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            position=int(data["position"]),
            list_id=list_id,
            description=data.get("description"),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "position": self.position,
            "description": self.description,
        }


@dataclass
class CardList:
    """An ordered list of cards on a board."""

    id: int
    title: str
    position: int = 0
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CardList:
        list_id = int(data["id"])
        cards = [Card.from_api(raw, list_id) for raw in data.get("cards") or []]
        cards.sort(key=lambda card: card.position)
        return cls(
            id=list_id,
            title=str(data.get("title", "")),
            position=int(data.get("position", 0)),
            cards=cards,
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "position": self.position,
            "cards": [card.to_api() for card in self.cards],
        }

    def find_card(self, card_id: int) -> Card | None:
        return next((card for card in self.cards if card.id == card_id), None)


@dataclass
class Board:
    """A board: a title and its lists, each holding ordered cards."""

    id: int
    title: str
    lists: list[CardList] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any], board_id: int | None = None) -> Board:
        """Build a board from the ``GET /board/{id}`` response body.

        Args:
            data: Decoded JSON body.
            board_id: Fallback id, used when the body does not carry one.

        Returns:
            A Board with lists sorted by list position and cards sorted by
            card position.
        """
        raw_id = data.get("id", board_id)
        if raw_id is None:
            msg = "Board payload has no id and no fallback id was given"
            raise ValueError(msg)
        lists = [CardList.from_api(raw) for raw in data.get("lists") or []]
        lists.sort(key=lambda card_list: card_list.position)
        return cls(id=int(raw_id), title=str(data.get("title", "")), lists=lists)

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "lists": [card_list.to_api() for card_list in self.lists],
        }

    def get_list(self, list_id: int) -> CardList:
        """Return the list with the given id.

        Raises:
            UnknownListError: If the board has no such list.
        """
        for card_list in self.lists:
            if card_list.id == list_id:
                return card_list
        raise UnknownListError(list_id)

    def find_card(self, card_id: int) -> Card:
        """Return the card with the given id from whichever list holds it.

        Raises:
            UnknownCardError: If no list holds the card.
        """
        for card_list in self.lists:
            card = card_list.find_card(card_id)
            if card is not None:
                return card
        raise UnknownCardError(card_id)


def positions_contiguous(cards: list[Card] | tuple[Card, ...]) -> bool:
    """Check that card positions are exactly ``{0, ..., n-1}``."""
    return sorted(card.position for card in cards) == list(range(len(cards)))
