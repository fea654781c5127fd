"""Test fixtures for tro."""

from __future__ import annotations

import copy
from dataclasses import replace

import pytest

from tro.config import TroConfig
from tro.models import NOT_LOADED, Board, BoardList, Card, CardFields, Label


class FakeClient:
    """In-memory stand-in for TrelloClient that records every call."""

    def __init__(self, boards: list[Board]) -> None:
        self._boards = boards
        self.calls: list[tuple[str, ...]] = []
        self.updated: list[Card] = []
        self.closed: list[Board | BoardList | Card] = []
        self.created: list[tuple[str, object]] = []

    def __enter__(self) -> "FakeClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.calls.append(("close",))

    def _board(self, board_id: str) -> Board:
        return next(board for board in self._boards if board.id == board_id)

    def get_boards(self) -> list[Board]:
        self.calls.append(("get_boards",))
        return [replace(board, lists=NOT_LOADED) for board in self._boards]

    def get_lists(self, board_id: str) -> list[BoardList]:
        self.calls.append(("get_lists", board_id))
        return [replace(item, cards=NOT_LOADED) for item in self._board(board_id).require_lists()]

    def get_cards(self, list_id: str) -> list[Card]:
        self.calls.append(("get_cards", list_id))
        for board in self._boards:
            for board_list in board.require_lists():
                if board_list.id == list_id:
                    return copy.deepcopy(board_list.require_cards())
        raise KeyError(list_id)

    def retrieve_nested(self, board: Board) -> Board:
        self.calls.append(("retrieve_nested", board.id))
        return copy.deepcopy(self._board(board.id))

    def update_card(self, card: Card) -> Card:
        self.calls.append(("update_card", card.id))
        self.updated.append(card)
        return card

    def close_object(self, obj):
        self.calls.append(("close_object", obj.id))
        self.closed.append(obj)
        return replace(obj, closed=True)

    def create_board(self, name: str) -> Board:
        self.created.append(("board", name))
        return Board(id="b_new", name=name, lists=[])

    def create_list(self, board_id: str, name: str) -> BoardList:
        self.created.append(("list", (board_id, name)))
        return BoardList(id="l_new", name=name, board_id=board_id, cards=[])

    def create_card(self, list_id: str, fields: CardFields) -> Card:
        self.created.append(("card", (list_id, fields)))
        return Card(
            id="c_new",
            name=fields.name,
            desc=fields.desc,
            list_id=list_id,
            url="https://trello.com/c/new",
        )


def build_boards() -> list[Board]:
    """Return a small board hierarchy used across tests."""
    urgent = Label(id="lab_1", name="urgent", color="red")
    work = Board(
        id="b_work",
        name="Work",
        url="https://trello.com/b/work",
        lists=[
            BoardList(
                id="l_todo",
                name="Todo",
                board_id="b_work",
                cards=[
                    Card(
                        id="c_milk",
                        name="Buy milk",
                        desc="2% please",
                        labels=[urgent],
                        list_id="l_todo",
                        url="https://trello.com/c/milk",
                    ),
                    Card(id="c_report", name="Write report", list_id="l_todo"),
                ],
            ),
            BoardList(
                id="l_doing",
                name="Doing",
                board_id="b_work",
                cards=[Card(id="c_bug", name="Fix bug", desc="Crash on start", list_id="l_doing")],
            ),
            BoardList(id="l_done", name="Done", board_id="b_work", cards=[]),
        ],
    )
    home = Board(
        id="b_home",
        name="Home",
        lists=[
            BoardList(
                id="l_home_todo",
                name="Todo",
                board_id="b_home",
                cards=[Card(id="c_fence", name="Paint fence", list_id="l_home_todo")],
            )
        ],
    )
    workshop = Board(id="b_workshop", name="Workshop", lists=[])
    return [work, home, workshop]


@pytest.fixture()
def fake_client() -> FakeClient:
    """Fake client over the sample board hierarchy."""
    return FakeClient(build_boards())


@pytest.fixture()
def config() -> TroConfig:
    """Configuration value for tests that never touch the network."""
    return TroConfig(host="https://api.trello.test", token="tok", key="key")
