"""Edit cards as plain text in the user's external editor."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

import click

from tro.document import apply_card_fields, parse_card_document, render_card_document
from tro.errors import EditorError, MalformedDocumentError
from tro.models import Card, CardFields

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "CARD NAME"
PLACEHOLDER_DESC = "CARD DESCRIPTION"

EditText = Callable[[str], str]


def launch_editor(path: Path, editor: str | None = None) -> None:
    """Open ``path`` in the user's editor and block until it exits.

    Args:
        path: File to edit in place.
        editor: Editor command; defaults to $VISUAL/$EDITOR resolution.

    Raises:
        EditorError: If the editor cannot be launched or exits with failure.
    """
    try:
        click.edit(filename=str(path), editor=editor)
    except click.ClickException as exc:
        raise EditorError(f"Could not run editor: {exc.format_message()}") from exc


def edit_text_in_editor(text: str, editor: str | None = None) -> str:
    """Round-trip ``text`` through a temporary file opened in the editor.

    The temporary file is removed on every exit path, including editor
    failures.

    Args:
        text: Initial file contents.
        editor: Optional editor command override.

    Returns:
        File contents after the editor exits.
    """
    fd, raw_path = tempfile.mkstemp(prefix="tro-", suffix=".md")
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        launch_editor(path, editor=editor)
        return path.read_text(encoding="utf-8")
    finally:
        path.unlink(missing_ok=True)


def editor_for(editor: str | None) -> EditText:
    """Bind an editor command to the text editing capability."""

    def _edit(text: str) -> str:
        return edit_text_in_editor(text, editor=editor)

    return _edit


def edit_card(card: Card, edit_text: EditText = edit_text_in_editor) -> tuple[Card, bool]:
    """Let the user edit a card and report whether anything changed.

    Args:
        card: Card to edit.
        edit_text: Capability that takes document text and returns the edit.

    The edit is compared with the card's own document as the parser reads
    it, so whitespace the parser trims (around the name, after the
    description) never counts as a change. An unchanged edit returns the
    original card as is.

    Returns:
        Tuple of the edited card (identity and labels copied from the
        original) and whether the user changed name or description.

    Raises:
        MalformedDocumentError: If the edited text has no name line.
    """
    document = render_card_document(card)
    fields = parse_card_document(edit_text(document))
    changed = fields != _baseline_fields(document)
    logger.debug("Card %s edited, changed=%s", card.id, changed)
    if not changed:
        return card, False
    return apply_card_fields(card, fields), True


def _baseline_fields(document: str) -> CardFields | None:
    """Parse the unedited document; None when the stored name is blank."""
    try:
        return parse_card_document(document)
    except MalformedDocumentError:
        return None


def draft_new_card(edit_text: EditText = edit_text_in_editor) -> CardFields | None:
    """Collect name and description for a new card from the editor.

    The document is pre-filled with placeholders. An untouched description
    placeholder becomes an empty description.

    Returns:
        Fields for the new card, or None when the name placeholder was left
        untouched and no card should be created.
    """
    template = CardFields(name=PLACEHOLDER_NAME, desc=PLACEHOLDER_DESC)
    fields = parse_card_document(edit_text(render_card_document(template)))
    if fields.name == PLACEHOLDER_NAME:
        return None
    if fields.desc == PLACEHOLDER_DESC:
        fields.desc = ""
    return fields
