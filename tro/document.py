"""Plain-text card documents used for editor round trips.

A document is the card name on the first line, one blank line, then the
description verbatim::

    Buy milk

    2% please
"""

from __future__ import annotations

from dataclasses import replace

from tro.errors import MalformedDocumentError
from tro.models import Card, CardFields


def render_card_document(card: Card | CardFields) -> str:
    """Render card name and description to editable text."""
    return f"{card.name}\n\n{card.desc}"


def parse_card_document(text: str) -> CardFields:
    """Parse edited document text back into card name and description.

    Only the first blank line separates the name from the body, so a body
    that itself contains blank lines or name-like lines stays intact.
    Without any blank line the description is empty.

    Args:
        text: Raw text returned from the editor.

    Returns:
        Parsed name and description.

    Raises:
        MalformedDocumentError: If the document has no name line.
    """
    normalized = text.replace("\r\n", "\n").rstrip("\n")
    if not normalized.strip():
        raise MalformedDocumentError("Card document is empty; a name line is required.")

    lines = normalized.split("\n")
    name = lines[0].strip()
    if not name:
        raise MalformedDocumentError("The first line of a card document must be the card name.")

    body_lines: list[str] = []
    for index, line in enumerate(lines[1:], start=1):
        if not line.strip():
            body_lines = lines[index + 1 :]
            break

    while body_lines and not body_lines[-1].strip():
        body_lines.pop()
    return CardFields(name=name, desc="\n".join(body_lines))


def apply_card_fields(card: Card, fields: CardFields) -> Card:
    """Return a copy of ``card`` with edited name/description applied.

    Identity and other fields not present in the document (id, labels,
    closed, list, url) are copied from the original card.
    """
    return replace(card, name=fields.name, desc=fields.desc)
