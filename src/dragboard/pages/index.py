"""Index page listing the available boards."""

import logging

from nicegui import ui

from dragboard.api import BoardApiError, get_board_api
from dragboard.controller import create_board
from dragboard.pages.layout import NotifyToasts, page_layout
from dragboard.pages.registry import page_route

logger = logging.getLogger(__name__)


@page_route("/", title="Boards", icon="dashboard", order=10)
async def index_page() -> None:
    """Home page with one link per board and a form for a new one."""
    api = get_board_api()
    ui.context.client.on_disconnect(api.aclose)

    @ui.refreshable
    async def board_cards() -> None:
        try:
            boards = await api.get_boards()
        except BoardApiError as exc:
            logger.error("Loading boards failed: %s", exc)
            ui.label("Could not load boards").classes("text-red-500")
            return

        if not boards:
            ui.label("No boards yet").classes("text-grey-7")
            return

        with ui.row().classes("gap-4"):
            for board in boards:
                with ui.card().classes("p-4 cursor-pointer min-w-[200px]").on(
                    "click", lambda _, b=board.id: ui.navigate.to(f"/board/{b}")
                ):
                    ui.label(board.title).classes("text-lg font-semibold")

    async def add_board() -> None:
        board_id = await create_board(api, new_title.value or "", NotifyToasts())
        new_title.value = ""
        if board_id is not None:
            board_cards.refresh()

    with page_layout("Boards"):
        ui.label("My boards").classes("text-2xl font-bold mb-4")
        with ui.row().classes("items-center mb-4"):
            new_title = ui.input(placeholder="New board title").props("dense")
            new_title.on("keydown.enter", add_board)
            ui.button("Create", icon="add", on_click=add_board)
        await board_cards()
