"""Unit tests for the position reconciliation engine.

Covers same-list reorders, cross-list moves, drop planning and applying
updates to a board snapshot.
"""

from __future__ import annotations

import itertools

import pytest

from dragboard.models import (
    Board,
    CardList,
    CardUpdate,
    DragPayload,
    DropTarget,
    UnknownCardError,
    UnknownListError,
)
from dragboard.models.board import positions_contiguous
from dragboard.reorder.engine import (
    MoveKind,
    StepName,
    apply_updates,
    is_identity_drop,
    move,
    plan_drop,
    reorder,
)
from tests.helpers.boards import (
    A,
    B,
    BOARD_ID,
    C,
    DOING,
    DONE,
    TODO,
    X,
    Y,
    build_sample_board,
    make_cards,
    numbered_cards,
    positions_by_title,
)


def _result_positions(cards, updates) -> dict[int, int]:
    """Positions after applying ``updates`` to ``cards`` (card id -> position)."""
    positions = {card.id: card.position for card in cards}
    for update in updates:
        positions[update.card_id] = update.position
    return positions


class TestReorderDown:
    """Moving a card towards the end of its list."""

    def test_first_card_past_last(self) -> None:
        """[A,B,C] dropping A after C gives B:0, C:1, A:2."""
        cards = make_cards(TODO, [(A, "A"), (B, "B"), (C, "C")])

        updates = reorder(A, 0, 3, TODO, cards)

        assert updates == (
            CardUpdate(A, 2, TODO),
            CardUpdate(B, 0, TODO),
            CardUpdate(C, 1, TODO),
        )

    def test_moved_card_comes_first(self) -> None:
        """The dragged card's update leads the batch."""
        cards = numbered_cards(TODO, 5)

        updates = reorder(cards[1].id, 1, 4, TODO, cards)

        assert updates[0] == CardUpdate(cards[1].id, 3, TODO)

    def test_only_cards_between_slots_shift(self) -> None:
        """Cards outside (old, new-1] keep their positions."""
        cards = numbered_cards(TODO, 6)

        updates = reorder(cards[1].id, 1, 4, TODO, cards)

        shifted = {u.card_id: u.position for u in updates[1:]}
        assert shifted == {cards[2].id: 1, cards[3].id: 2}


class TestReorderUp:
    """Moving a card towards the start of its list."""

    def test_last_card_to_front(self) -> None:
        """[A,B,C] dropping C before A gives C:0, A:1, B:2."""
        cards = make_cards(TODO, [(A, "A"), (B, "B"), (C, "C")])

        updates = reorder(C, 2, 0, TODO, cards)

        assert _result_positions(cards, updates) == {C: 0, A: 1, B: 2}
        assert updates[0] == CardUpdate(C, 0, TODO)

    def test_adjacent_swap_up(self) -> None:
        """Dropping B above A swaps the two."""
        cards = make_cards(TODO, [(A, "A"), (B, "B"), (C, "C")])

        updates = reorder(B, 1, 0, TODO, cards)

        assert updates == (CardUpdate(B, 0, TODO), CardUpdate(A, 1, TODO))

    def test_cards_below_old_slot_untouched(self) -> None:
        """Cards after the dragged card's old slot are not sent."""
        cards = numbered_cards(TODO, 6)

        updates = reorder(cards[3].id, 3, 1, TODO, cards)

        assert {u.card_id for u in updates} == {cards[1].id, cards[2].id, cards[3].id}


class TestReorderIdentity:
    """Drops that leave the card where it was."""

    def test_same_slot_yields_nothing(self) -> None:
        cards = make_cards(TODO, [(A, "A"), (B, "B"), (C, "C")])

        assert reorder(B, 1, 1, TODO, cards) == ()

    def test_slot_just_below_yields_nothing(self) -> None:
        """The slot directly after the card is its own place too."""
        cards = make_cards(TODO, [(A, "A"), (B, "B"), (C, "C")])

        assert reorder(B, 1, 2, TODO, cards) == ()

    def test_single_card_list(self) -> None:
        """A lone card has nowhere to go within its list."""
        cards = make_cards(TODO, [(A, "A")])

        assert reorder(A, 0, 0, TODO, cards) == ()
        assert reorder(A, 0, 1, TODO, cards) == ()

    @pytest.mark.parametrize(
        ("old", "new", "expected"),
        [(2, 2, True), (2, 3, True), (2, 1, False), (2, 4, False), (0, 0, True)],
    )
    def test_is_identity_drop(self, old: int, new: int, expected: bool) -> None:
        assert is_identity_drop(old, new) is expected


class TestReorderContiguity:
    """Every reorder leaves positions exactly 0..n-1."""

    @pytest.mark.parametrize("length", [1, 2, 3, 4, 7])
    def test_all_moves_keep_positions_contiguous(self, length: int) -> None:
        cards = numbered_cards(TODO, length)
        for old, new in itertools.product(range(length), range(length + 1)):
            moved = cards[old]
            updates = reorder(moved.id, old, new, TODO, cards)
            result = _result_positions(cards, updates)

            assert sorted(result.values()) == list(range(length)), (old, new)

    def test_final_order_matches_slot(self) -> None:
        """The moved card lands where the slot was, relative to its neighbours."""
        cards = numbered_cards(TODO, 5)
        moved = cards[0]

        updates = reorder(moved.id, 0, 3, TODO, cards)
        result = _result_positions(cards, updates)
        order = sorted(result, key=result.__getitem__)

        assert order == [cards[1].id, cards[2].id, moved.id, cards[3].id, cards[4].id]

    def test_target_out_of_bounds_rejected(self) -> None:
        cards = make_cards(TODO, [(A, "A"), (B, "B")])

        with pytest.raises(ValueError, match="outside list bounds"):
            reorder(A, 0, 3, TODO, cards)
        with pytest.raises(ValueError, match="outside list bounds"):
            reorder(A, 0, -1, TODO, cards)


class TestMove:
    """Cross-list moves."""

    def test_into_middle_of_destination(self) -> None:
        """A from [A,B] into [X,Y] at 1: destination X:0, A:1, Y:2; source B:0."""
        source = make_cards(TODO, [(A, "A"), (B, "B")])
        destination = make_cards(DOING, [(X, "X"), (Y, "Y")])

        sets = move(A, 0, 1, TODO, source, DOING, destination)

        assert sets.destination_insert == (CardUpdate(A, 1, DOING),)
        assert sets.source_gap_close == (CardUpdate(B, 0, TODO),)
        assert sets.destination_gap_open == (CardUpdate(Y, 2, DOING),)

    def test_only_card_in_source(self) -> None:
        """Moving a lone card leaves nothing to close and shifts all of the destination."""
        source = make_cards(TODO, [(A, "A")])
        destination = make_cards(DOING, [(X, "X"), (Y, "Y")])

        sets = move(A, 0, 0, TODO, source, DOING, destination)

        assert sets.source_gap_close == ()
        assert len(sets.destination_updates) == len(destination) + 1

    def test_to_end_of_destination(self) -> None:
        """Target equal to the destination length appends without shifting."""
        source = make_cards(TODO, [(A, "A"), (B, "B"), (C, "C")])
        destination = make_cards(DOING, [(X, "X"), (Y, "Y")])

        sets = move(B, 1, 2, TODO, source, DOING, destination)

        assert sets.destination_insert == (CardUpdate(B, 2, DOING),)
        assert sets.destination_gap_open == ()
        assert sets.source_gap_close == (CardUpdate(C, 1, TODO),)

    def test_into_empty_list(self) -> None:
        source = make_cards(TODO, [(A, "A"), (B, "B")])

        sets = move(B, 1, 0, TODO, source, DONE, [])

        assert sets.destination_insert == (CardUpdate(B, 0, DONE),)
        assert sets.source_gap_close == ()
        assert sets.destination_gap_open == ()

    def test_same_list_rejected(self) -> None:
        cards = make_cards(TODO, [(A, "A"), (B, "B")])

        with pytest.raises(ValueError, match="two different lists"):
            move(A, 0, 1, TODO, cards, TODO, cards)

    def test_target_past_destination_end_rejected(self) -> None:
        source = make_cards(TODO, [(A, "A")])
        destination = make_cards(DOING, [(X, "X")])

        with pytest.raises(ValueError, match="outside list bounds"):
            move(A, 0, 2, TODO, source, DOING, destination)

    @pytest.mark.parametrize(
        ("source_len", "destination_len"),
        list(itertools.product(range(1, 5), range(5))),
    )
    def test_every_move_keeps_both_lists_contiguous(
        self, source_len: int, destination_len: int
    ) -> None:
        for old_pos, target in itertools.product(
            range(source_len), range(destination_len + 1)
        ):
            source = numbered_cards(TODO, source_len, first_id=100)
            destination = numbered_cards(DOING, destination_len, first_id=200)
            board = Board(
                id=BOARD_ID,
                title="Grid",
                lists=[
                    CardList(TODO, "To do", 0, source),
                    CardList(DOING, "Doing", 1, destination),
                ],
            )
            card_id = source[old_pos].id

            sets = move(card_id, old_pos, target, TODO, source, DOING, destination)
            updates = (
                sets.destination_insert
                + sets.source_gap_close
                + sets.destination_gap_open
            )
            result = apply_updates(board, updates)

            moved_from = result.get_list(TODO).cards
            moved_to = result.get_list(DOING).cards
            assert len(moved_from) == source_len - 1
            assert len(moved_to) == destination_len + 1
            assert positions_contiguous(moved_from), (old_pos, target)
            assert positions_contiguous(moved_to), (old_pos, target)
            assert moved_to[target].id == card_id


class TestPlanDrop:
    """Turning a payload plus target into ordered write steps."""

    @pytest.fixture
    def board(self):
        return build_sample_board()

    def _payload(self, board, card_id: int) -> DragPayload:
        card = board.find_card(card_id)
        return DragPayload.capture(card, board.get_list(card.list_id).cards)

    def test_same_list_is_single_reorder_step(self, board) -> None:
        plan = plan_drop(
            self._payload(board, A), DropTarget(TODO, 3), board.get_list(TODO).cards
        )

        assert plan.kind is MoveKind.REORDER
        assert [step.name for step in plan.steps] == [StepName.REORDER]
        assert plan.steps[0].updates[0] == CardUpdate(A, 2, TODO)

    def test_identity_drop_is_empty_plan(self, board) -> None:
        plan = plan_drop(
            self._payload(board, B), DropTarget(TODO, 2), board.get_list(TODO).cards
        )

        assert plan.is_noop
        assert plan.kind is MoveKind.NONE
        assert plan.updates == ()

    def test_cross_list_steps_in_dependency_order(self, board) -> None:
        plan = plan_drop(
            self._payload(board, A), DropTarget(DOING, 1), board.get_list(DOING).cards
        )

        assert plan.kind is MoveKind.MOVE
        assert [step.name for step in plan.steps] == [
            StepName.DESTINATION_INSERT,
            StepName.SOURCE_GAP_CLOSE,
            StepName.DESTINATION_GAP_OPEN,
        ]

    def test_empty_steps_are_left_out(self, board) -> None:
        """Dropping C (last in source) at the end of Doing needs only the insert."""
        plan = plan_drop(
            self._payload(board, C), DropTarget(DOING, 2), board.get_list(DOING).cards
        )

        assert [step.name for step in plan.steps] == [StepName.DESTINATION_INSERT]

    def test_atomic_folds_into_one_step(self, board) -> None:
        plan = plan_drop(
            self._payload(board, A),
            DropTarget(DOING, 0),
            board.get_list(DOING).cards,
            atomic=True,
        )

        assert [step.name for step in plan.steps] == [StepName.ATOMIC_BATCH]
        assert {u.card_id for u in plan.steps[0].updates} == {A, B, C, X, Y}

    def test_atomic_same_list_unchanged(self, board) -> None:
        """A reorder is already a single write; atomic mode leaves it alone."""
        plan = plan_drop(
            self._payload(board, C),
            DropTarget(TODO, 0),
            board.get_list(TODO).cards,
            atomic=True,
        )

        assert [step.name for step in plan.steps] == [StepName.REORDER]

    def test_same_list_uses_payload_snapshot(self, board) -> None:
        """Sibling shifts come from the drag-start copy, not the live list."""
        payload = self._payload(board, C)
        board.get_list(TODO).cards.clear()

        plan = plan_drop(payload, DropTarget(TODO, 0), board.get_list(TODO).cards)

        assert {u.card_id for u in plan.updates} == {A, B, C}


class TestApplyUpdates:
    """Applying updates to a board snapshot."""

    def test_cross_list_plan_restores_contiguity(self, sample_board) -> None:
        payload = DragPayload.capture(
            sample_board.find_card(A), sample_board.get_list(TODO).cards
        )
        plan = plan_drop(payload, DropTarget(DOING, 1), sample_board.get_list(DOING).cards)

        result = apply_updates(sample_board, plan.updates)

        assert positions_by_title(result, DOING) == {"X": 0, "A": 1, "Y": 2}
        assert positions_by_title(result, TODO) == {"B": 0, "C": 1}
        for card_list in result.lists:
            assert positions_contiguous(card_list.cards)

    def test_input_board_untouched(self, sample_board) -> None:
        apply_updates(sample_board, [CardUpdate(A, 0, DONE)])

        assert sample_board.find_card(A).list_id == TODO
        assert len(sample_board.get_list(DONE).cards) == 0

    def test_lists_sorted_by_position(self, sample_board) -> None:
        result = apply_updates(
            sample_board, [CardUpdate(A, 2, TODO), CardUpdate(C, 0, TODO)]
        )

        assert [card.title for card in result.get_list(TODO).cards] == ["C", "B", "A"]

    def test_unknown_card_raises(self, sample_board) -> None:
        with pytest.raises(UnknownCardError):
            apply_updates(sample_board, [CardUpdate(999, 0, TODO)])

    def test_unknown_list_raises(self, sample_board) -> None:
        """A card sent to a list the board lacks is an error, not a silent drop."""
        with pytest.raises(UnknownListError):
            apply_updates(sample_board, [CardUpdate(A, 0, 999)])

        assert sample_board.find_card(A).list_id == TODO

    def test_board_id_preserved(self, sample_board) -> None:
        assert apply_updates(sample_board, []).id == BOARD_ID
