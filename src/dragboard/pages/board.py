"""Board page: lists of draggable cards.

Each client gets its own BoardStore and DragDropController. The page
renders from the store and re-renders whenever a new snapshot lands, which
after a drop is always the refetched board.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nicegui import ui

from dragboard.api import BoardApiError, get_board_api
from dragboard.config import get_settings
from dragboard.controller import DragDropController
from dragboard.pages.drag import ColumnSlotIndicator, make_draggable_card, make_drop_list
from dragboard.pages.layout import NotifyToasts, page_layout
from dragboard.pages.registry import page_route
from dragboard.store import BoardStore

if TYPE_CHECKING:
    from dragboard.models import Board, Card, CardList

logger = logging.getLogger(__name__)

_BOARD_CSS = """
.drop-slot {
    height: 30px;
    border-radius: 4px;
    border: 1px dotted white;
    background: rgba(120, 120, 193, 0.355);
    margin: 10px 0 20px 0;
}
.board-list { min-width: 260px; min-height: 80px; }
"""


def _render_card(card: Card, controller: DragDropController) -> None:
    with ui.card().classes("w-full q-pa-sm") as element:
        with ui.row().classes("w-full items-center no-wrap"):
            ui.label(card.title).classes("text-body1 flex-grow")

            async def remove(card_id: int = card.id) -> None:
                await controller.remove_card(card_id)

            ui.button("x", on_click=remove).props("flat dense size=sm")
        if card.description:
            ui.label(card.description).classes("text-caption text-grey-7")
    make_draggable_card(element, card.id, card.list_id, controller)


def _render_list(
    card_list: CardList,
    controller: DragDropController,
    indicator: ColumnSlotIndicator,
) -> None:
    with ui.card().classes("board-list bg-grey-3"):
        with ui.row().classes("w-full items-center no-wrap"):
            list_title = ui.input(value=card_list.title).props("dense borderless")
            list_title.classes("text-h6 flex-grow")

            async def rename(list_id: int = card_list.id) -> None:
                await controller.rename_list(list_id, list_title.value or "")

            async def remove_list(list_id: int = card_list.id) -> None:
                await controller.remove_list(list_id)

            list_title.on("keydown.enter", rename)
            list_title.on("blur", rename)
            ui.button(icon="delete", on_click=remove_list).props("flat dense size=sm")
        with ui.column().classes("w-full gap-2 min-h-[40px]") as column:
            for card in card_list.cards:
                _render_card(card, controller)
        indicator.register_column(card_list.id, column)
        make_drop_list(column, card_list.id, controller, empty=not card_list.cards)

        title_input = ui.input(placeholder="+ Add card").props("dense")

        async def add(list_id: int = card_list.id) -> None:
            await controller.add_card(list_id, title_input.value or "")
            title_input.value = ""

        title_input.on("keydown.enter", add)


def _render_new_list(controller: DragDropController) -> None:
    with ui.card().classes("board-list bg-grey-2"):
        new_title = ui.input(placeholder="+ Add list").props("dense")

        async def add() -> None:
            await controller.add_list(new_title.value or "")
            new_title.value = ""

        new_title.on("keydown.enter", add)


@page_route("/board/{board_id}", title="Board", icon="view_kanban", in_nav=False)
async def board_page(board_id: int) -> None:
    """Render one board with drag-and-drop between its lists."""
    ui.add_css(_BOARD_CSS)
    settings = get_settings()
    api = get_board_api()
    store = BoardStore(board_id)
    indicator = ColumnSlotIndicator()
    controller = DragDropController(
        store,
        api,
        indicator=indicator,
        notifier=NotifyToasts(),
        atomic_moves=settings.board.atomic_moves,
        optimistic_updates=settings.board.optimistic_updates,
    )

    @ui.refreshable
    def lists_view(board: Board | None) -> None:
        indicator.reset_columns()
        if board is None:
            ui.label("Loading board...").classes("text-grey-7")
            return
        with ui.row().classes("items-start gap-4 no-wrap overflow-auto"):
            for card_list in board.lists:
                _render_list(card_list, controller, indicator)
            _render_new_list(controller)

    async def rename_board() -> None:
        if store.board is None:
            return
        await controller.rename_board(title.value or "")

    async def remove_board() -> None:
        if await controller.remove_board():
            ui.navigate.to("/")

    with page_layout("Board"):
        with ui.row().classes("items-center q-mb-md"):
            title = ui.input().props("dense borderless").classes("text-h5")
            title.on("keydown.enter", rename_board)
            title.on("blur", rename_board)
            ui.button("Delete board", icon="delete", on_click=remove_board).props(
                "flat color=negative"
            )
        lists_view(None)

    def on_snapshot(board: Board) -> None:
        title.set_value(board.title)
        lists_view.refresh(board)

    store.subscribe(on_snapshot)
    ui.context.client.on_disconnect(api.aclose)

    try:
        await store.refresh(api)
    except BoardApiError as exc:
        logger.error("Loading board %s failed: %s", board_id, exc)
        ui.notify("Error! Failed to load board", type="negative")
