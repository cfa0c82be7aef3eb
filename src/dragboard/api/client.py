"""HTTP client for the board REST API.

Wraps an ``httpx.AsyncClient`` and implements BoardApiProtocol. Every
request carries the JSON content type and bearer token headers, and is
counted by a RequestTracker so the UI can show activity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from dragboard.api.activity import RequestTracker
from dragboard.api.errors import BoardApiError
from dragboard.api.models import BoardSummary
from dragboard.models import Board

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dragboard.models import CardUpdate

logger = logging.getLogger(__name__)


async def _log_request(request: httpx.Request) -> None:
    logger.debug("-> %s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    logger.debug(
        "<- %s %s %d",
        response.request.method,
        response.request.url,
        response.status_code,
    )


class HttpBoardApi:
    """Board API client over HTTP.

    Paths are relative to ``base_url``; the API serves boards under
    ``board/`` and cards under ``board/{id}/card/``.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float | None = 10.0,
        tracker: RequestTracker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000/api/v1``.
            token: Bearer token sent with every request.
            timeout: Per-request timeout in seconds; None waits forever.
            tracker: Shared in-flight counter. A private one is made if omitted.
            transport: Custom httpx transport (tests pass ``httpx.MockTransport``).
        """
        self.tracker = tracker or RequestTracker()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {token}",
            },
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [_log_request], "response": [_log_response]},
        )

    async def _request(
        self, method: str, path: str, *, json: Any = None
    ) -> httpx.Response:
        operation = f"{method} {path}"
        self.tracker.start()
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise BoardApiError(
                operation, exc.response.reason_phrase or "HTTP error", status
            ) from exc
        except httpx.HTTPError as exc:
            raise BoardApiError(operation, str(exc) or type(exc).__name__) from exc
        finally:
            self.tracker.finish()
        return response

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise BoardApiError(
                operation, "Response body is not valid JSON", response.status_code
            ) from exc

    @classmethod
    def _created_id(cls, response: httpx.Response, operation: str) -> int:
        data = cls._json(response, operation)
        try:
            return int(data["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise BoardApiError(operation, "Response carries no created id") from exc

    async def get_boards(self) -> list[BoardSummary]:
        response = await self._request("GET", "board")
        data = self._json(response, "GET board")
        return [BoardSummary.from_api(raw) for raw in data.get("boards", [])]

    async def get_board(self, board_id: int) -> Board:
        path = f"board/{board_id}"
        response = await self._request("GET", path)
        data = self._json(response, f"GET {path}")
        try:
            return Board.from_api(data, board_id=board_id)
        except (KeyError, TypeError, ValueError) as exc:
            raise BoardApiError(f"GET {path}", f"Malformed board payload: {exc}") from exc

    async def update_cards(
        self, board_id: int, updates: Sequence[CardUpdate]
    ) -> None:
        body = [update.to_api() for update in updates]
        logger.debug("Updating %d card(s) on board %s", len(body), board_id)
        await self._request("PUT", f"board/{board_id}/card/", json=body)

    async def create_card(
        self, board_id: int, list_id: int, title: str, position: int
    ) -> int:
        path = f"board/{board_id}/card/"
        response = await self._request(
            "POST",
            path,
            json={"title": title, "list_id": list_id, "position": position},
        )
        return self._created_id(response, f"POST {path}")

    async def delete_card(self, board_id: int, card_id: int) -> None:
        await self._request("DELETE", f"board/{board_id}/card/{card_id}")

    async def create_board(self, title: str) -> int:
        response = await self._request("POST", "board", json={"title": title})
        return self._created_id(response, "POST board")

    async def rename_board(self, board_id: int, title: str) -> None:
        await self._request("PUT", f"board/{board_id}", json={"title": title})

    async def delete_board(self, board_id: int) -> None:
        await self._request("DELETE", f"board/{board_id}")

    async def create_list(self, board_id: int, title: str, position: int) -> int:
        path = f"board/{board_id}/list"
        response = await self._request(
            "POST", path, json={"title": title, "position": position}
        )
        return self._created_id(response, f"POST {path}")

    async def rename_list(self, board_id: int, list_id: int, title: str) -> None:
        await self._request(
            "PUT", f"board/{board_id}/list/{list_id}", json={"title": title}
        )

    async def delete_list(self, board_id: int, list_id: int) -> None:
        await self._request("DELETE", f"board/{board_id}/list/{list_id}")

    async def aclose(self) -> None:
        await self._client.aclose()
