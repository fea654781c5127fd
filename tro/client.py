"""Trello REST client for boards, lists and cards."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

import httpx

from tro.config import TroConfig
from tro.errors import TrelloAPIError
from tro.models import (
    Board,
    BoardList,
    Card,
    CardFields,
    board_from_json,
    card_from_json,
    list_from_json,
)

logger = logging.getLogger(__name__)

BOARD_FIELDS = "id,name,closed,shortUrl"


class TrelloClient:
    """Thin synchronous gateway to the Trello API.

    The client holds no domain state; every call returns fresh model
    objects. Only open (non-archived) objects are fetched.

    Example:
        >>> with TrelloClient(config) as client:
        ...     boards = client.get_boards()
    """

    def __init__(self, config: TroConfig, transport: httpx.BaseTransport | None = None):
        """Initialize the client.

        Args:
            config: Runtime configuration with host and credentials.
            transport: Optional httpx transport, used to stub the network.
        """
        self.config = config
        self._client = httpx.Client(
            base_url=config.host,
            params={"key": config.key, "token": config.token},
            headers={"Accept": "application/json"},
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> "TrelloClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and decode the JSON response.

        Raises:
            TrelloAPIError: On transport errors, error statuses or invalid JSON.
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.RequestError as exc:
            raise TrelloAPIError(f"Request to Trello failed: {exc}") from exc

        if response.status_code >= 400:
            raise TrelloAPIError(
                response.text.strip() or "Unknown error",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TrelloAPIError(
                "Invalid JSON response from Trello",
                status_code=response.status_code,
            ) from exc

    # Reads

    def get_boards(self) -> list[Board]:
        """Return all open boards of the authenticated member."""
        payload = self._request(
            "GET",
            "/1/members/me/boards",
            params={"filter": "open", "fields": BOARD_FIELDS},
        )
        return [board_from_json(item) for item in payload]

    def get_lists(self, board_id: str) -> list[BoardList]:
        """Return the open lists of a board, without their cards."""
        payload = self._request("GET", f"/1/boards/{board_id}/lists", params={"filter": "open"})
        return [list_from_json(item) for item in payload]

    def get_cards(self, list_id: str) -> list[Card]:
        """Return the open cards of a list."""
        payload = self._request("GET", f"/1/lists/{list_id}/cards", params={"filter": "open"})
        return [card_from_json(item) for item in payload]

    def retrieve_nested(self, board: Board) -> Board:
        """Return a copy of ``board`` with its lists and their cards loaded.

        Everything is fetched in a single request.
        """
        payload = self._request(
            "GET",
            f"/1/boards/{board.id}/lists",
            params={"filter": "open", "cards": "open"},
        )
        lists = []
        for item in payload:
            item.setdefault("cards", [])
            lists.append(list_from_json(item))
        return replace(board, lists=lists)

    # Mutations

    def create_board(self, name: str) -> Board:
        """Create a board without Trello's default lists."""
        payload = self._request("POST", "/1/boards", json={"name": name, "defaultLists": False})
        return board_from_json(payload)

    def create_list(self, board_id: str, name: str) -> BoardList:
        """Create a list at the end of a board."""
        payload = self._request(
            "POST",
            "/1/lists",
            json={"name": name, "idBoard": board_id, "pos": "bottom"},
        )
        return list_from_json(payload)

    def create_card(self, list_id: str, fields: CardFields) -> Card:
        """Create a card at the end of a list."""
        payload = self._request(
            "POST",
            "/1/cards",
            json={"idList": list_id, "name": fields.name, "desc": fields.desc, "pos": "bottom"},
        )
        return card_from_json(payload)

    def update_board(self, board: Board) -> Board:
        """Send board name and closed state."""
        payload = self._request(
            "PUT",
            f"/1/boards/{board.id}",
            json={"name": board.name, "closed": board.closed},
        )
        return board_from_json(payload)

    def update_list(self, board_list: BoardList) -> BoardList:
        """Send list name and closed state."""
        payload = self._request(
            "PUT",
            f"/1/lists/{board_list.id}",
            json={"name": board_list.name, "closed": board_list.closed},
        )
        return list_from_json(payload)

    def update_card(self, card: Card) -> Card:
        """Send card name, description and closed state.

        Labels are never sent, so whatever Trello holds is left untouched.
        """
        payload = self._request(
            "PUT",
            f"/1/cards/{card.id}",
            json={"name": card.name, "desc": card.desc, "closed": card.closed},
        )
        return card_from_json(payload)

    def close_object(self, obj: Board | BoardList | Card) -> Board | BoardList | Card:
        """Archive a board, list or card by updating it with ``closed=True``."""
        closed = replace(obj, closed=True)
        if isinstance(closed, Card):
            return self.update_card(closed)
        if isinstance(closed, BoardList):
            return self.update_list(closed)
        return self.update_board(closed)
