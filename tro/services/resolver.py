"""Resolve board/list/card name filters into Trello objects."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from tro.errors import WildcardRequiresCardError
from tro.matching import match_object
from tro.models import Board, BoardList, Card, ResolvedContext

logger = logging.getLogger(__name__)

ALL_LISTS = "-"


class BoardSource(Protocol):
    """Read operations the resolver needs from a Trello client."""

    def get_boards(self) -> list[Board]: ...

    def get_lists(self, board_id: str) -> list[BoardList]: ...

    def get_cards(self, list_id: str) -> list[Card]: ...

    def retrieve_nested(self, board: Board) -> Board: ...


class FetchStrategy(str, Enum):
    """How nested lists and cards are retrieved once a board is selected.

    ``NESTED`` loads the whole board in one request; ``BY_LEVEL`` makes one
    request per level actually requested. Both resolve identically.
    """

    NESTED = "nested"
    BY_LEVEL = "by_level"


@dataclass(slots=True)
class ResolveParams:
    """Name filters for each hierarchy level.

    Attributes:
        board_pattern: Board name regex, or None to select nothing.
        list_pattern: List name regex, ``-`` for every list, or None.
        card_pattern: Card name regex or None.
        ignore_case: Match names case-insensitively.
    """

    board_pattern: str | None = None
    list_pattern: str | None = None
    card_pattern: str | None = None
    ignore_case: bool = True


def _with_lists(client: BoardSource, board: Board, strategy: FetchStrategy) -> Board:
    """Return the board with its lists loaded (and cards, when nested)."""
    if strategy is FetchStrategy.NESTED:
        return client.retrieve_nested(board)
    return replace(board, lists=client.get_lists(board.id))


def _with_cards(client: BoardSource, board_list: BoardList, strategy: FetchStrategy) -> BoardList:
    """Return the list with its cards loaded."""
    if strategy is FetchStrategy.NESTED:
        return board_list
    return replace(board_list, cards=client.get_cards(board_list.id))


def resolve(
    client: BoardSource,
    params: ResolveParams,
    strategy: FetchStrategy = FetchStrategy.NESTED,
) -> ResolvedContext:
    """Walk board -> list -> card, matching one object at each given level.

    Levels are optional from the bottom up: without a board filter nothing
    is fetched, without a list filter only the board is selected. A list
    filter of ``-`` searches the card filter across every list of the
    board; the result then carries no list.

    The CLI always resolves with the default ``NESTED`` strategy, which
    needs at most one request below the board level.

    Args:
        client: Source of boards, lists and cards.
        params: Name filters and case sensitivity.
        strategy: Retrieval strategy for nested objects.

    Returns:
        The objects selected at each level.

    Raises:
        WildcardRequiresCardError: If ``-`` is used without a card filter.
        InvalidPatternError: If a filter is not a valid regex.
        NotFoundError: If a filter matches nothing.
        AmbiguousMatchError: If a filter matches more than one object.
    """
    if params.board_pattern is None:
        return ResolvedContext()

    ignore_case = params.ignore_case
    board = match_object(
        client.get_boards(), params.board_pattern, ignore_case, type_label=Board.type_label
    )
    logger.debug("Selected board %s (%s)", board.name, board.id)

    if params.list_pattern == ALL_LISTS:
        if params.card_pattern is None:
            raise WildcardRequiresCardError()
        board = _with_lists(client, board, strategy)
        cards = [
            card
            for board_list in board.require_lists()
            for card in _with_cards(client, board_list, strategy).require_cards()
        ]
        card = match_object(cards, params.card_pattern, ignore_case, type_label=Card.type_label)
        logger.debug("Selected card %s (%s) across all lists", card.name, card.id)
        return ResolvedContext(board=board, list=None, card=card)

    if params.list_pattern is None:
        return ResolvedContext(board=board)

    board = _with_lists(client, board, strategy)
    board_list = match_object(
        board.require_lists(), params.list_pattern, ignore_case, type_label=BoardList.type_label
    )
    logger.debug("Selected list %s (%s)", board_list.name, board_list.id)

    if params.card_pattern is None:
        return ResolvedContext(board=board, list=board_list)

    board_list = _with_cards(client, board_list, strategy)
    card = match_object(
        board_list.require_cards(), params.card_pattern, ignore_case, type_label=Card.type_label
    )
    logger.debug("Selected card %s (%s)", card.name, card.id)
    return ResolvedContext(board=board, list=board_list, card=card)
