"""Shared layout components for dragboard.

Provides consistent header, navigation drawer, request progress bar and
page structure.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from nicegui import ui

from dragboard.api import get_request_tracker
from dragboard.pages.registry import get_nav_pages

if TYPE_CHECKING:
    from collections.abc import Iterator


class NotifyToasts:
    """Notifier that shows NiceGUI toasts in the current client."""

    def success(self, message: str) -> None:
        ui.notify(message, type="positive")

    def error(self, message: str) -> None:
        ui.notify(message, type="negative")


def _nav_item(label: str, route: str, icon: str | None = None) -> None:
    """Create a navigation item in the drawer."""
    with ui.item(on_click=lambda: ui.navigate.to(route)).classes("w-full"):
        if icon:
            with ui.item_section().props("avatar"):
                ui.icon(icon)
        with ui.item_section():
            ui.item_label(label)


def _progress_bar() -> None:
    """Indeterminate bar shown while any API request is in flight."""
    tracker = get_request_tracker()
    bar = ui.linear_progress(show_value=False).props("indeterminate color=white")
    bar.classes("absolute-bottom")
    bar.set_visibility(tracker.busy)

    def on_change(count: int) -> None:
        if not bar.is_deleted:
            bar.set_visibility(count > 0)

    unsubscribe = tracker.subscribe(on_change)
    ui.context.client.on_disconnect(unsubscribe)


@contextmanager
def page_layout(title: str = "dragboard") -> Iterator[None]:
    """Context manager for consistent page layout with header and nav drawer.

    Usage:
        @ui.page("/my-page")
        async def my_page():
            with page_layout("My Page"):
                ui.label("Page content here")

    Args:
        title: Page title shown in header.

    Yields:
        Context for page content.
    """
    with ui.header().classes("bg-primary items-center q-py-xs"):
        menu_btn = ui.button(icon="menu").props("flat color=white")
        ui.label(title).classes("text-h6 text-white q-ml-sm")
        _progress_bar()

    with ui.left_drawer(value=False).classes("bg-grey-2") as drawer:
        ui.label("Navigation").classes("text-h6 q-pa-md")
        ui.separator()
        with ui.list().props("padding"):
            for page in get_nav_pages():
                _nav_item(page.title, page.route, page.icon)

    menu_btn.on("click", drawer.toggle)

    with ui.element("div").classes("q-pa-md w-full"):
        yield
