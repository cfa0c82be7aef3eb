"""Tests for browser geometry parsing and page registration."""

from __future__ import annotations

import pytest

from dragboard.pages.drag import pointer_from_args, rect_from_args
from dragboard.pages.registry import PageMeta, get_nav_pages, page_route
from dragboard.reorder.drop_target import Rect

EVENT_ARGS = {"x": 12, "y": 130.5, "left": 0, "top": 100, "width": 200.0, "height": 40}


class TestGeometryArgs:
    def test_rect_from_args(self) -> None:
        assert rect_from_args(EVENT_ARGS) == Rect(0.0, 100.0, 200.0, 40.0)

    def test_pointer_from_args(self) -> None:
        assert pointer_from_args(EVENT_ARGS) == (12.0, 130.5)

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            rect_from_args({"x": 1, "y": 2})


class TestPageRegistry:
    def test_hidden_pages_left_out_of_nav(self) -> None:
        @page_route("/_test/visible", title="Visible", icon="star", order=1)
        async def visible() -> None:
            pass

        @page_route("/_test/{item_id}", title="Hidden", icon="star", in_nav=False)
        async def hidden(item_id: int) -> None:
            pass

        routes = [meta.route for meta in get_nav_pages()]

        assert "/_test/visible" in routes
        assert "/_test/{item_id}" not in routes

    def test_nav_sorted_by_order(self) -> None:
        orders = [meta.order for meta in get_nav_pages()]
        assert orders == sorted(orders)

    def test_page_meta_defaults(self) -> None:
        meta = PageMeta(route="/x", title="X", icon="star")
        assert meta.in_nav is True
        assert meta.order == 100
