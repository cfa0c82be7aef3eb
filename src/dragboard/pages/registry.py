"""Route registry feeding the navigation drawer.

Pages register through ``page_route`` instead of ``ui.page`` directly, so
the layout can list them without importing each page module by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nicegui import ui

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class PageMeta:
    """Navigation entry for one route."""

    route: str
    title: str
    icon: str
    in_nav: bool = True
    order: int = 100


_pages: dict[str, PageMeta] = {}


def page_route(
    route: str,
    *,
    title: str,
    icon: str,
    in_nav: bool = True,
    order: int = 100,
) -> Callable[[Callable], Callable]:
    """Register ``route`` with NiceGUI and record it for the drawer.

    Routes with path parameters (``/board/{board_id}``) cannot be linked
    from the drawer and should pass ``in_nav=False``. Lower ``order`` sorts
    first.
    """

    def register(func: Callable) -> Callable:
        _pages[route] = PageMeta(route, title, icon, in_nav=in_nav, order=order)
        return ui.page(route, title=title)(func)

    return register


def get_nav_pages() -> list[PageMeta]:
    """Drawer entries, lowest ``order`` first."""
    entries = [meta for meta in _pages.values() if meta.in_nav]
    return sorted(entries, key=lambda meta: meta.order)
