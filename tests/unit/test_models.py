"""Tests for board snapshot and drag value models."""

from __future__ import annotations

import pytest

from dragboard.models import (
    Board,
    Card,
    CardUpdate,
    DragPayload,
    UnknownCardError,
    UnknownListError,
    positions_contiguous,
)
from tests.helpers.boards import A, B, C, DONE, TODO, X, make_cards


class TestBoardFromApi:
    def test_lists_and_cards_sorted(self) -> None:
        data = {
            "id": 1,
            "title": "T",
            "lists": [
                {"id": 2, "title": "second", "position": 1, "cards": []},
                {
                    "id": 1,
                    "title": "first",
                    "position": 0,
                    "cards": [
                        {"id": 11, "title": "b", "position": 1},
                        {"id": 10, "title": "a", "position": 0},
                    ],
                },
            ],
        }

        board = Board.from_api(data)

        assert [cl.id for cl in board.lists] == [1, 2]
        assert [c.id for c in board.lists[0].cards] == [10, 11]
        assert board.lists[0].cards[0].list_id == 1

    def test_null_cards_treated_as_empty(self) -> None:
        board = Board.from_api({"id": 1, "lists": [{"id": 3, "cards": None}]})

        assert board.get_list(3).cards == []

    def test_missing_id_without_fallback(self) -> None:
        with pytest.raises(ValueError, match="no id"):
            Board.from_api({"title": "T", "lists": []})

    def test_to_api_round_trips_structure(self, sample_board: Board) -> None:
        again = Board.from_api(sample_board.to_api())

        assert again == sample_board


class TestBoardLookups:
    def test_get_list(self, sample_board: Board) -> None:
        assert sample_board.get_list(DONE).title == "Done"

    def test_get_unknown_list(self, sample_board: Board) -> None:
        with pytest.raises(UnknownListError):
            sample_board.get_list(999)

    def test_find_card_across_lists(self, sample_board: Board) -> None:
        assert sample_board.find_card(X).title == "X"

    def test_find_unknown_card(self, sample_board: Board) -> None:
        with pytest.raises(UnknownCardError):
            sample_board.find_card(999)

    def test_lookup_errors_are_key_errors(self, sample_board: Board) -> None:
        with pytest.raises(KeyError):
            sample_board.find_card(999)


class TestPositionsContiguous:
    def test_contiguous(self) -> None:
        assert positions_contiguous(make_cards(TODO, [(A, "A"), (B, "B")]))

    def test_empty(self) -> None:
        assert positions_contiguous([])

    def test_gap(self) -> None:
        cards = [Card(A, "A", 0, TODO), Card(B, "B", 2, TODO)]
        assert not positions_contiguous(cards)

    def test_duplicate(self) -> None:
        cards = [Card(A, "A", 0, TODO), Card(B, "B", 0, TODO)]
        assert not positions_contiguous(cards)


class TestDragModels:
    def test_capture_sorts_and_copies(self) -> None:
        cards = [Card(C, "C", 2, TODO), Card(A, "A", 0, TODO), Card(B, "B", 1, TODO)]

        payload = DragPayload.capture(cards[2], cards)
        cards.clear()

        assert payload.card_id == B
        assert payload.position == 1
        assert payload.source_list_id == TODO
        assert [c.id for c in payload.source_cards] == [A, B, C]

    def test_card_update_wire_format(self) -> None:
        assert CardUpdate(A, 3, DONE).to_api() == {
            "id": A,
            "position": 3,
            "list_id": DONE,
        }
