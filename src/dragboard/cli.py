"""Command-line utilities for inspecting boards and moving cards.

``dragboard-show`` prints a board as a table, one column per list.
``dragboard-move`` drops a card at an explicit list/slot through the same
planner and sequencer the web UI uses, then prints what each write did.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from dragboard.api import BoardApiError, get_board_api
from dragboard.config import get_settings
from dragboard.controller import DragDropController
from dragboard.models import DropTarget
from dragboard.store import BoardStore

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dragboard.models import Board
    from dragboard.reorder.sequencer import SequenceResult

console = Console()


def board_table(board: Board) -> Table:
    """Render a board as a rich Table, one column per list."""
    table = Table(title=f"{board.title} (#{board.id})", show_lines=False)
    for card_list in board.lists:
        table.add_column(f"{card_list.title} (#{card_list.id})")
    depth = max((len(cl.cards) for cl in board.lists), default=0)
    for row in range(depth):
        cells = []
        for card_list in board.lists:
            if row < len(card_list.cards):
                card = card_list.cards[row]
                cells.append(f"[dim]{card.position}[/] {card.title} [dim]#{card.id}[/]")
            else:
                cells.append("")
        table.add_row(*cells)
    return table


def print_sequence_result(result: SequenceResult, con: Console = console) -> None:
    """Print one line per write step plus the refetch outcome."""
    if result.noop:
        con.print("[yellow]Nothing to do:[/] card is already in that slot")
        return
    for step in result.steps:
        if not step.attempted:
            status = "[dim]skipped[/]"
        elif step.ok:
            status = "[green]ok[/]"
        else:
            status = f"[red]failed[/] ({step.error})"
        con.print(f"  {step.name:<22} {len(step.updates):>3} update(s)  {status}")
    if result.refetch_error is not None:
        con.print(f"[red]Refetch failed:[/] {result.refetch_error}")


async def _show(board_id: int) -> int:
    api = get_board_api()
    try:
        board = await api.get_board(board_id)
    except BoardApiError as exc:
        console.print(f"[red]Error:[/] {exc}")
        return 1
    finally:
        await api.aclose()
    console.print(board_table(board))
    return 0


async def _move(
    board_id: int, card_id: int, list_id: int, position: int, *, atomic: bool
) -> int:
    api = get_board_api()
    store = BoardStore(board_id)
    controller = DragDropController(store, api, atomic_moves=atomic)
    try:
        await store.refresh(api)
        payload = controller.on_drag_start(card_id)
        result = await controller.drop_at(payload, DropTarget(list_id, position))
    except BoardApiError as exc:
        console.print(f"[red]Error:[/] {exc}")
        return 1
    except (KeyError, ValueError) as exc:
        console.print(f"[red]Error:[/] invalid move: {exc}")
        return 2
    finally:
        await api.aclose()

    print_sequence_result(result)
    if result.board is not None:
        console.print(board_table(result.board))
    return 0 if result.ok and result.refetch_error is None else 1


def _build_show_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dragboard-show", description="Print a board's lists and cards."
    )
    parser.add_argument("board_id", type=int, help="Board id")
    return parser


def _build_move_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dragboard-move",
        description="Drop a card into a list slot and persist the new order.",
    )
    parser.add_argument("board_id", type=int, help="Board id")
    parser.add_argument("card_id", type=int, help="Card to move")
    parser.add_argument("list_id", type=int, help="Destination list id")
    parser.add_argument(
        "position",
        type=int,
        help="Insertion slot: 0 = before the first card, N = after the last",
    )
    parser.add_argument(
        "--atomic",
        action="store_true",
        default=None,
        help="Send a cross-list move as one write (default: BOARD__ATOMIC_MOVES)",
    )
    return parser


def show_board(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: print a board."""
    args = _build_show_parser().parse_args(argv)
    sys.exit(asyncio.run(_show(args.board_id)))


def move_card(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: move a card."""
    args = _build_move_parser().parse_args(argv)
    atomic = args.atomic if args.atomic is not None else get_settings().board.atomic_moves
    sys.exit(
        asyncio.run(
            _move(args.board_id, args.card_id, args.list_id, args.position, atomic=atomic)
        )
    )
