"""Domain models for Trello boards, lists and cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Protocol

from tro.errors import NestedNotLoadedError


class _Nested(Enum):
    NOT_LOADED = "not_loaded"


NOT_LOADED = _Nested.NOT_LOADED
"""Marks a nested collection that has not been fetched yet.

An empty list means "fetched, nothing there"; ``NOT_LOADED`` means the
collection was never retrieved and must not be traversed.
"""


class Named(Protocol):
    """Anything that can be selected by a name filter."""

    name: str
    type_label: ClassVar[str]


@dataclass(slots=True)
class Label:
    """Represents a card label.

    Attributes:
        id: Trello label identifier.
        name: Label text, may be empty for colour-only labels.
        color: Trello colour name, or None for colourless labels.
    """

    id: str
    name: str
    color: str | None = None


@dataclass(slots=True)
class Card:
    """Represents a Trello card.

    Attributes:
        id: Server-assigned card identifier.
        name: Card title.
        desc: Free-text description body.
        closed: Whether the card is archived.
        labels: Labels attached to the card, carried through edits untouched.
        list_id: Identifier of the containing list.
        url: Web URL of the card when known.
    """

    type_label: ClassVar[str] = "Card"

    id: str
    name: str
    desc: str = ""
    closed: bool = False
    labels: list[Label] = field(default_factory=list)
    list_id: str | None = None
    url: str | None = None


@dataclass(slots=True)
class BoardList:
    """Represents a Trello list (a column of cards on a board)."""

    type_label: ClassVar[str] = "List"

    id: str
    name: str
    closed: bool = False
    board_id: str | None = None
    cards: list[Card] | _Nested = NOT_LOADED

    def require_cards(self) -> list[Card]:
        """Return the fetched cards, failing loudly when never retrieved."""
        if self.cards is NOT_LOADED:
            raise NestedNotLoadedError(f"Cards of list '{self.name}' were not retrieved")
        return self.cards


@dataclass(slots=True)
class Board:
    """Represents a Trello board."""

    type_label: ClassVar[str] = "Board"

    id: str
    name: str
    closed: bool = False
    url: str | None = None
    lists: list[BoardList] | _Nested = NOT_LOADED

    def require_lists(self) -> list[BoardList]:
        """Return the fetched lists, failing loudly when never retrieved."""
        if self.lists is NOT_LOADED:
            raise NestedNotLoadedError(f"Lists of board '{self.name}' were not retrieved")
        return self.lists


@dataclass(slots=True)
class CardFields:
    """Editable card content produced by the card document parser."""

    name: str
    desc: str


@dataclass(slots=True)
class ResolvedContext:
    """Objects selected by walking board -> list -> card.

    ``card`` without ``list`` only happens for the ``-`` list wildcard,
    where cards from every list of the board are searched together.
    """

    board: Board | None = None
    list: BoardList | None = None
    card: Card | None = None


def label_from_json(payload: dict[str, Any]) -> Label:
    """Build a label from a Trello API payload."""
    return Label(
        id=payload["id"],
        name=payload.get("name") or "",
        color=payload.get("color"),
    )


def card_from_json(payload: dict[str, Any]) -> Card:
    """Build a card from a Trello API payload."""
    return Card(
        id=payload["id"],
        name=payload["name"],
        desc=payload.get("desc") or "",
        closed=bool(payload.get("closed", False)),
        labels=[label_from_json(item) for item in payload.get("labels") or []],
        list_id=payload.get("idList"),
        url=payload.get("shortUrl") or payload.get("url"),
    )


def list_from_json(payload: dict[str, Any]) -> BoardList:
    """Build a list from a Trello API payload.

    Cards are only marked as loaded when the payload embeds them.
    """
    raw_cards = payload.get("cards")
    return BoardList(
        id=payload["id"],
        name=payload["name"],
        closed=bool(payload.get("closed", False)),
        board_id=payload.get("idBoard"),
        cards=NOT_LOADED if raw_cards is None else [card_from_json(item) for item in raw_cards],
    )


def board_from_json(payload: dict[str, Any]) -> Board:
    """Build a board from a Trello API payload."""
    raw_lists = payload.get("lists")
    return Board(
        id=payload["id"],
        name=payload["name"],
        closed=bool(payload.get("closed", False)),
        url=payload.get("shortUrl") or payload.get("url"),
        lists=NOT_LOADED if raw_lists is None else [list_from_json(item) for item in raw_lists],
    )


def to_jsonable(obj: Board | BoardList | Card | Label) -> dict[str, Any]:
    """Convert a model to a JSON-serializable dictionary.

    Nested collections that were never retrieved are left out rather than
    rendered as empty.

    Args:
        obj: Board, list, card or label instance.

    Returns:
        JSON-friendly dictionary representing the object.
    """
    if isinstance(obj, Label):
        return {"id": obj.id, "name": obj.name, "color": obj.color}
    if isinstance(obj, Card):
        return {
            "id": obj.id,
            "name": obj.name,
            "desc": obj.desc,
            "closed": obj.closed,
            "labels": [to_jsonable(label) for label in obj.labels],
            "list_id": obj.list_id,
            "url": obj.url,
        }
    if isinstance(obj, BoardList):
        payload: dict[str, Any] = {
            "id": obj.id,
            "name": obj.name,
            "closed": obj.closed,
            "board_id": obj.board_id,
        }
        if obj.cards is not NOT_LOADED:
            payload["cards"] = [to_jsonable(card) for card in obj.cards]
        return payload
    payload = {"id": obj.id, "name": obj.name, "closed": obj.closed, "url": obj.url}
    if obj.lists is not NOT_LOADED:
        payload["lists"] = [to_jsonable(item) for item in obj.lists]
    return payload
