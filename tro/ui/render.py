"""Rich rendering helpers for tro command output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tro.models import Board, BoardList, Card, Label


def _preview_text(value: str, max_length: int) -> str:
    """Return compact, single-line preview text bounded by max length."""
    compact = " ".join(value.split())
    if len(compact) > max_length:
        return compact[: max_length - 1] + "…"
    return compact


# Trello label colours that rich can render directly.
RICH_LABEL_COLORS = {"green", "yellow", "red", "blue", "black"}


def label_text(label: Label) -> str:
    """Return a markup string for a label, coloured when possible."""
    text = escape(label.name or label.color or "(label)")
    if label.color in RICH_LABEL_COLORS:
        return f"[{label.color}]{text}[/{label.color}]"
    return text


def _labels_markup(card: Card) -> str:
    return ", ".join(label_text(label) for label in card.labels)


def print_boards(console: Console, boards: list[Board]) -> None:
    """Render the table of all boards."""
    if not boards:
        console.print("No open boards.")
        return
    table = Table(title="Boards")
    table.add_column("Name")
    table.add_column("URL")
    for board in boards:
        table.add_row(escape(board.name), escape(board.url or ""))
    console.print(table)


def _cards_table(board_list: BoardList) -> Table:
    table = Table(title=escape(board_list.name), title_justify="left", show_header=False)
    table.add_column("Card")
    table.add_column("Labels")
    cards = board_list.require_cards()
    if not cards:
        table.add_row("[dim](no cards)[/dim]", "")
    for card in cards:
        table.add_row(escape(_preview_text(card.name, 80)), _labels_markup(card))
    return table


def print_board(console: Console, board: Board) -> None:
    """Render a board with every list and its cards.

    The board must have been retrieved with nested lists and cards.
    """
    console.print(f"[bold]{escape(board.name)}[/bold]")
    lists = board.require_lists()
    if not lists:
        console.print("No open lists.")
        return
    for board_list in lists:
        console.print(_cards_table(board_list))


def print_list(console: Console, board_list: BoardList) -> None:
    """Render a single list with its cards."""
    console.print(_cards_table(board_list))


def print_card(console: Console, card: Card) -> None:
    """Render card name, labels and description in a panel."""
    body_lines = []
    if card.labels:
        body_lines.append(_labels_markup(card))
        body_lines.append("")
    body_lines.append(escape(card.desc) if card.desc else "[dim](no description)[/dim]")
    console.print(
        Panel.fit(
            "\n".join(body_lines),
            title=escape(card.name),
            border_style="cyan",
        )
    )
