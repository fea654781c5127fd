"""Tests for card document render/parse behavior."""

from __future__ import annotations

import pytest

from tro.document import apply_card_fields, parse_card_document, render_card_document
from tro.errors import MalformedDocumentError
from tro.models import Card, CardFields, Label


def test_render_card_document_layout() -> None:
    """Name line, blank separator, then description verbatim."""
    card = Card(id="c1", name="Buy milk", desc="2% please")
    assert render_card_document(card) == "Buy milk\n\n2% please"


def test_parse_card_document_inverts_render() -> None:
    """Parsing rendered text should give back name and description."""
    parsed = parse_card_document("Buy milk\n\n2% please")
    assert parsed == CardFields(name="Buy milk", desc="2% please")


def test_round_trip_multiline_description() -> None:
    """Blank lines inside the body belong to the description."""
    card = Card(id="c1", name="Plan trip", desc="Day one\n\nDay two\n- pack\n- leave")
    parsed = parse_card_document(render_card_document(card))
    assert parsed.name == card.name
    assert parsed.desc == card.desc


def test_only_first_blank_line_ends_name_section() -> None:
    """A body starting with a name-like line stays in the description."""
    text = "Real name\n\nLooks like a name\n\nMore body"
    parsed = parse_card_document(text)
    assert parsed.name == "Real name"
    assert parsed.desc == "Looks like a name\n\nMore body"


def test_round_trip_empty_description() -> None:
    """Cards without a description should round-trip to an empty desc."""
    card = Card(id="c1", name="Just a title")
    parsed = parse_card_document(render_card_document(card))
    assert parsed == CardFields(name="Just a title", desc="")


def test_parse_without_separator_has_empty_description() -> None:
    """No blank line means no description; name is the trimmed first line."""
    parsed = parse_card_document("   Standalone title  ")
    assert parsed == CardFields(name="Standalone title", desc="")


def test_parse_trims_editor_trailing_newlines() -> None:
    """Trailing newlines added by editors should be dropped."""
    parsed = parse_card_document("Buy milk\n\n2% please\n\n\n")
    assert parsed.desc == "2% please"


def test_parse_handles_windows_newlines() -> None:
    """CRLF documents should parse like LF documents."""
    parsed = parse_card_document("Buy milk\r\n\r\nLine one\r\nLine two\r\n")
    assert parsed == CardFields(name="Buy milk", desc="Line one\nLine two")


@pytest.mark.parametrize("text", ["", "\n\n", "   \n"])
def test_parse_rejects_empty_document(text: str) -> None:
    """Documents with no content should be malformed."""
    with pytest.raises(MalformedDocumentError):
        parse_card_document(text)


def test_parse_rejects_missing_name_line() -> None:
    """A blank first line means there is no name."""
    with pytest.raises(MalformedDocumentError):
        parse_card_document("\n\nOnly a body")


def test_apply_card_fields_keeps_identity_and_labels() -> None:
    """Edited fields replace name/desc while identity fields are preserved."""
    labels = [Label(id="lab_1", name="urgent", color="red")]
    card = Card(
        id="c1",
        name="Old",
        desc="Old body",
        labels=labels,
        list_id="l1",
        url="https://trello.com/c/x",
    )
    updated = apply_card_fields(card, CardFields(name="New", desc="New body"))
    assert updated.id == "c1"
    assert updated.labels == labels
    assert updated.list_id == "l1"
    assert updated.url == "https://trello.com/c/x"
    assert (updated.name, updated.desc) == ("New", "New body")
    assert card.name == "Old"
