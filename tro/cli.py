"""Typer CLI entrypoint for tro."""

from __future__ import annotations

import json
import logging
import webbrowser
from typing import Any

import click
import typer
from rich.console import Console
from rich.markup import escape

from tro.client import TrelloClient
from tro.config import TroConfig, load_config
from tro.errors import TroError
from tro.models import NOT_LOADED, Board, BoardList, Card, ResolvedContext, to_jsonable
from tro.services.editing import draft_new_card, edit_card, editor_for
from tro.services.resolver import ALL_LISTS, ResolveParams, resolve
from tro.ui.render import print_board, print_boards, print_card, print_list

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="tro: a Trello client for the command line.",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send log records at ``level`` and above to stderr."""
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def _validate_log_level(raw: str) -> str:
    """Validate the --log-level option value.

    Raises:
        typer.BadParameter: If the level is not a standard logging level.
    """
    normalized = raw.strip().upper()
    if normalized not in LOG_LEVELS:
        raise typer.BadParameter(f"Invalid log level '{raw}'. Use one of: {', '.join(LOG_LEVELS)}.")
    return normalized


def _emit_json(payload: Any) -> None:
    """Emit machine-readable JSON without Rich wrapping effects."""
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _safe_text(value: Any) -> str:
    """Escape Rich markup tokens in user-visible text values."""
    return escape(str(value))


def _params(
    board: str | None,
    list_name: str | None,
    card: str | None,
    case_sensitive: bool,
) -> ResolveParams:
    """Build resolver parameters from positional filters."""
    return ResolveParams(
        board_pattern=board,
        list_pattern=list_name,
        card_pattern=card,
        ignore_case=not case_sensitive,
    )


def _client(config: TroConfig) -> TrelloClient:
    """Return a Trello client for the loaded configuration."""
    return TrelloClient(config)


def _deepest(context: ResolvedContext) -> Board | BoardList | Card | None:
    """Return the most specific object selected by the resolver."""
    return context.card or context.list or context.board


def _target_url(context: ResolvedContext) -> str:
    """Return the web URL for a resolved card, or its board otherwise.

    Raises:
        TroError: If nothing was selected or Trello gave no URL.
    """
    url = None
    if context.card is not None:
        url = context.card.url
    elif context.board is not None:
        url = context.board.url
    else:
        raise TroError("Specify at least a board to get a URL for.")
    if not url:
        raise TroError("Trello did not return a URL for the selected object.")
    return url


BOARD_ARG = typer.Argument(None, help="Board name pattern (regex).", show_default=False)
LIST_ARG = typer.Argument(
    None,
    help="List name pattern (regex), or '-' to search cards in every list.",
    show_default=False,
)
CARD_ARG = typer.Argument(None, help="Card name pattern (regex).", show_default=False)
CASE_OPTION = typer.Option(False, "--case-sensitive", "-c", help="Match names case-sensitively.")


@app.callback()
def root_callback(
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level."),
) -> None:
    """Trello boards, lists and cards selected by approximate name."""
    configure_logging(_validate_log_level(log_level))


@app.command("show")
def show_command(
    board: str | None = BOARD_ARG,
    list_name: str | None = LIST_ARG,
    card: str | None = CARD_ARG,
    case_sensitive: bool = CASE_OPTION,
    edit: bool = typer.Option(False, "--edit", "-e", help="Edit the selected card in $EDITOR."),
    as_json: bool = typer.Option(False, "--json", help="Output JSON."),
) -> None:
    """Show boards, a board, a list or a card."""
    if edit and card is None:
        raise typer.BadParameter("--edit requires a card name pattern.")
    config = load_config()
    with _client(config) as client:
        context = resolve(client, _params(board, list_name, card, case_sensitive))

        if context.card is not None:
            selected = context.card
            if edit:
                # Keep stdout clean for JSON consumers.
                status_console = err_console if as_json else console
                edited, changed = edit_card(selected, editor_for(config.editor))
                if changed:
                    selected = client.update_card(edited)
                    status_console.print(f"[green]Updated card[/green] {_safe_text(selected.name)}")
                else:
                    logger.info("Card %s unchanged, skipping update", selected.id)
                    status_console.print("No changes made.")
            if as_json:
                _emit_json(to_jsonable(selected))
            elif not edit:
                print_card(console, selected)
            return

        if context.list is not None:
            if as_json:
                _emit_json(to_jsonable(context.list))
            else:
                print_list(console, context.list)
            return

        if context.board is not None:
            selected_board = context.board
            if selected_board.lists is NOT_LOADED:
                selected_board = client.retrieve_nested(selected_board)
            if as_json:
                _emit_json(to_jsonable(selected_board))
            else:
                print_board(console, selected_board)
            return

        boards = client.get_boards()
        if as_json:
            _emit_json([to_jsonable(item) for item in boards])
        else:
            print_boards(console, boards)


@app.command("close")
def close_command(
    board: str = typer.Argument(..., help="Board name pattern (regex)."),
    list_name: str | None = LIST_ARG,
    card: str | None = CARD_ARG,
    case_sensitive: bool = CASE_OPTION,
) -> None:
    """Close (archive) the most specific board, list or card selected."""
    config = load_config()
    with _client(config) as client:
        context = resolve(client, _params(board, list_name, card, case_sensitive))
        target = _deepest(context)
        assert target is not None
        client.close_object(target)
    console.print(f"[green]Closed {target.type_label.lower()}[/green] {_safe_text(target.name)}")


@app.command("create")
def create_command(
    board: str | None = BOARD_ARG,
    list_name: str | None = typer.Argument(None, help="List name pattern (regex).", show_default=False),
    case_sensitive: bool = CASE_OPTION,
) -> None:
    """Create a board, a list in a board, or a card in a list."""
    if list_name == ALL_LISTS:
        raise typer.BadParameter("Cards cannot be created in the '-' wildcard list.")
    config = load_config()
    with _client(config) as client:
        if board is None:
            name = typer.prompt("Board name").strip()
            if not name:
                raise typer.BadParameter("Board name must be a non-empty string.")
            created_board = client.create_board(name)
            console.print(f"[green]Created board[/green] {_safe_text(created_board.name)}")
            return

        context = resolve(client, _params(board, list_name, None, case_sensitive))
        assert context.board is not None
        if context.list is None:
            name = typer.prompt("List name").strip()
            if not name:
                raise typer.BadParameter("List name must be a non-empty string.")
            created_list = client.create_list(context.board.id, name)
            console.print(
                f"[green]Created list[/green] {_safe_text(created_list.name)}"
                f" on {_safe_text(context.board.name)}"
            )
            return

        fields = draft_new_card(editor_for(config.editor))
        if fields is None:
            console.print("[yellow]Card name left unchanged; no card created.[/yellow]")
            return
        created_card = client.create_card(context.list.id, fields)
    console.print(
        f"[green]Created card[/green] {_safe_text(created_card.name)}"
        f" in {_safe_text(context.list.name)}"
    )
    if created_card.url:
        console.print(_safe_text(created_card.url))


@app.command("url")
def url_command(
    board: str = typer.Argument(..., help="Board name pattern (regex)."),
    list_name: str | None = LIST_ARG,
    card: str | None = CARD_ARG,
    case_sensitive: bool = CASE_OPTION,
) -> None:
    """Print the web URL of the selected card, or of the board."""
    config = load_config()
    with _client(config) as client:
        context = resolve(client, _params(board, list_name, card, case_sensitive))
    typer.echo(_target_url(context))


@app.command("open")
def open_command(
    board: str = typer.Argument(..., help="Board name pattern (regex)."),
    list_name: str | None = LIST_ARG,
    card: str | None = CARD_ARG,
    case_sensitive: bool = CASE_OPTION,
) -> None:
    """Open the selected card, or the board, in a web browser."""
    config = load_config()
    with _client(config) as client:
        context = resolve(client, _params(board, list_name, card, case_sensitive))
    url = _target_url(context)
    if not webbrowser.open(url):
        raise TroError(f"Could not open a web browser for {url}")


def main() -> None:
    """CLI process entrypoint."""
    try:
        app(standalone_mode=False)
    except TroError as err:
        err_console.print(f"[red]Error:[/red] {_safe_text(err)}")
        raise SystemExit(2) from err
    except click.ClickException as err:
        err.show()
        raise SystemExit(err.exit_code) from err
    except click.exceptions.Abort as err:
        raise SystemExit(1) from err
    except click.exceptions.Exit as err:
        raise SystemExit(err.exit_code) from err


# Register aliases with identical signatures.
app.command("s", hidden=True)(show_command)
app.command("c", hidden=True)(close_command)


if __name__ == "__main__":
    main()
