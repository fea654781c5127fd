"""Tests for single-object name matching."""

from __future__ import annotations

import pytest

from tro.errors import AmbiguousMatchError, InvalidPatternError, NotFoundError
from tro.matching import match_object
from tro.models import Board, Card


def _cards(*names: str) -> list[Card]:
    return [Card(id=f"c{index}", name=name) for index, name in enumerate(names)]


def test_match_object_returns_single_match() -> None:
    """Exactly one matching name should return that object."""
    cards = _cards("Buy milk", "Write report", "Fix bug")
    assert match_object(cards, "report").id == "c1"


def test_match_object_searches_anywhere_in_name() -> None:
    """Patterns are searched, not anchored to the whole name."""
    cards = _cards("Buy milk", "Write report")
    assert match_object(cards, "mil").name == "Buy milk"


def test_match_object_honours_anchors() -> None:
    """Explicit regex anchors should narrow the match."""
    boards = [Board(id="b1", name="Work"), Board(id="b2", name="Workshop")]
    assert match_object(boards, "^Work$").id == "b1"


def test_match_object_ambiguous_lists_candidates_in_input_order() -> None:
    """Two or more matches should fail with every candidate listed in order."""
    cards = _cards("Fix login", "Buy milk", "Fix bug", "Fixture cleanup")
    with pytest.raises(AmbiguousMatchError) as exc_info:
        match_object(cards, "fix")
    assert exc_info.value.candidates == ["Fix login", "Fix bug", "Fixture cleanup"]
    assert exc_info.value.type_label == "Card"
    assert str(exc_info.value) == (
        "More than one Card found. Specify a more precise filter than 'fix' "
        "(Found 'Fix login', 'Fix bug', 'Fixture cleanup')"
    )


def test_match_object_not_found() -> None:
    """No matching name should fail with NotFound."""
    boards = [Board(id="b1", name="Work")]
    with pytest.raises(NotFoundError) as exc_info:
        match_object(boards, "Holiday")
    assert exc_info.value.type_label == "Board"
    assert str(exc_info.value) == "Board not found. Specify a more precise filter than 'Holiday'"


def test_match_object_empty_sequence_uses_explicit_type_label() -> None:
    """An empty candidate list should still report the requested type."""
    with pytest.raises(NotFoundError) as exc_info:
        match_object([], "anything", type_label="List")
    assert exc_info.value.type_label == "List"


def test_match_object_is_case_insensitive_by_default() -> None:
    """Default matching should ignore case."""
    boards = [Board(id="b1", name="Foo")]
    assert match_object(boards, "foo").id == "b1"


def test_match_object_case_sensitive_when_requested() -> None:
    """Disabling ignore_case should make 'foo' miss 'Foo'."""
    boards = [Board(id="b1", name="Foo")]
    with pytest.raises(NotFoundError):
        match_object(boards, "foo", ignore_case=False)
    assert match_object(boards, "Foo", ignore_case=False).id == "b1"


def test_match_object_case_sensitivity_can_resolve_ambiguity() -> None:
    """Case-sensitive matching should drop candidates differing only in case."""
    cards = _cards("todo", "TODO")
    with pytest.raises(AmbiguousMatchError):
        match_object(cards, "todo")
    assert match_object(cards, "todo", ignore_case=False).id == "c0"


def test_match_object_rejects_invalid_regex() -> None:
    """Patterns that do not compile should fail with InvalidPattern."""
    with pytest.raises(InvalidPatternError) as exc_info:
        match_object(_cards("Buy milk"), "[unclosed")
    assert exc_info.value.pattern == "[unclosed"
