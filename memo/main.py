"""Command-line entry point using Typer and Rich."""

import logging
import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from memo.analytics.tools import format_stats
from memo.config import get_settings
from memo.dependencies import DecodeError, MemoError, logger
from memo.notes import tools
from memo.notes.models import LoadResult, Note
from memo.notes.store import NoteStore
from memo.search.tools import make_preview
from memo.session import Session

app = typer.Typer(
    name="memo",
    help="Memo - Personal Notes Manager",
    no_args_is_help=True,
)

console = Console(highlight=False)

COMMANDS = [
    ("create", "Create a new note"),
    ("list [--tag <tag>]", "List notes (with numbered references)"),
    ("read <note-id|number>", "Display a specific note"),
    ("edit <note-id|number>", "Edit a specific note"),
    ("delete <note-id|number>", "Delete a specific note"),
    ("search <query>", "Search notes for text"),
    ("stats", "Display statistics about your notes"),
]


# =============================================================================
# Rendering
# =============================================================================


def print_help() -> None:
    """Print the shell command table."""
    table = Table(title="Commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="green")
    table.add_column("Description")

    for cmd, desc in [*COMMANDS, ("help", "Show this help message"), ("quit", "Exit the shell")]:
        table.add_row(escape(cmd), desc)

    console.print(table)


def print_warnings(result: LoadResult) -> None:
    for warning in result.warnings:
        console.print(
            f"[yellow]Warning: failed to parse note {escape(str(warning.path))}: "
            f"{escape(warning.error)}[/yellow]"
        )


def _local(note_time: datetime) -> str:
    return note_time.astimezone().strftime("%Y-%m-%d %H:%M")


def print_listing(notes: list[Note], page_size: int, show_all: bool, interactive: bool) -> None:
    """Print notes page by page, asking before each further page."""
    total = len(notes)
    start = 0

    while start < total:
        end = total if show_all else min(start + page_size, total)

        console.print(f"\nShowing notes {start + 1}-{end} of {total}:")
        console.print("=" * 40)
        for number, note in enumerate(notes[start:end], start + 1):
            console.print(
                f"{number:2d}. [bold]{escape(note.title)}[/bold] | Created: {_local(note.created)}"
            )
            if note.tags:
                console.print(f"    Tags: {escape(', '.join(note.tags))}")
            console.print(f"    ID: {note.note_id}")
            console.print()

        if end >= total:
            console.print("End of notes.")
            break
        if not Confirm.ask(f"Show next {page_size} notes?", default=False, console=console):
            break
        start = end

    if interactive:
        console.print(
            f"\n[dim]Tip: Use 'read <number>' or 'edit <number>' "
            f"with numbers 1-{total} from this listing.[/dim]"
        )
    else:
        console.print("\n[dim]Tip: Run 'memo shell' to refer to notes by list number.[/dim]")


def print_note(note: Note) -> None:
    console.print(f"Title: {escape(note.title)}")
    console.print(f"Created: {note.created.astimezone():%Y-%m-%d %H:%M:%S}")
    console.print(f"Modified: {note.modified.astimezone():%Y-%m-%d %H:%M:%S}")
    if note.tags:
        console.print(f"Tags: {escape(', '.join(note.tags))}")
    if note.author:
        console.print(f"Author: {escape(note.author)}")
    if note.status:
        console.print(f"Status: {escape(note.status)}")
    if note.priority:
        console.print(f"Priority: {note.priority}")
    console.print("\nContent:")
    console.print("--------")
    console.print(note.content, markup=False)


def print_search_results(notes: list[Note], query: str) -> None:
    if not notes:
        console.print(f"No notes found matching '{escape(query)}'")
        return

    console.print(f"Found {len(notes)} note(s) matching '{escape(query)}':\n")
    for note in notes:
        console.print(f"ID: {note.note_id} | Title: {escape(note.title)}")
        console.print(f"Preview: {escape(make_preview(note.content))}")
        console.print("--------")


def _ask(prompt: str) -> str:
    return Prompt.ask(prompt, default="", show_default=False, console=console)


# =============================================================================
# Command Handlers
# =============================================================================


def do_create(
    session: Session,
    title: str | None = None,
    content: str | None = None,
    tags: str | None = None,
) -> None:
    """Create a note, prompting for anything not given."""
    if title is None:
        title = _ask("Enter note title")
    if not title.strip():
        raise MemoError("title is required")
    if content is None:
        content = _ask("Enter note content")
    if tags is None:
        tags = _ask("Enter tags (comma-separated, optional)")

    note = tools.create_note(session, title, content, tools.parse_tags(tags))
    console.print(f"[green]Note created successfully: {note.note_id}[/green]")


def do_list(session: Session, tag: str | None = None, show_all: bool = False) -> None:
    result = tools.list_notes(session, tag=tag)
    print_warnings(result)

    if tag:
        console.print(f"Notes with tag '{escape(tag)}':")
    else:
        console.print("All notes:")

    if not result.notes:
        console.print("No notes found.")
        return

    page_size = get_settings().page_size
    print_listing(result.notes, page_size, show_all, session.interactive)


def do_read(session: Session, identifier: str) -> None:
    print_note(tools.read_note(session, identifier))


def do_edit(
    session: Session,
    identifier: str,
    content: str | None = None,
    tags: str | None = None,
) -> None:
    """Edit a note; with neither option given, prompt for both (empty keeps)."""
    new_tags = tools.parse_tags(tags) if tags is not None else None

    if content is None and tags is None:
        note = tools.read_note(session, identifier)
        console.print(f"Editing note: {escape(note.title)}")
        console.print("Current content:")
        console.print(note.content, markup=False)
        console.print()

        answer = _ask("Enter new content (leave empty to keep current)")
        content = answer or None

        console.print(f"Current tags: {escape(', '.join(note.tags))}")
        answer = _ask("Enter new tags (comma-separated, leave empty to keep current)")
        new_tags = tools.parse_tags(answer) if answer.strip() else None
        identifier = note.note_id

    tools.edit_note(session, identifier, content=content, tags=new_tags)
    console.print("[green]Note updated successfully![/green]")


def do_delete(session: Session, identifier: str, yes: bool = False) -> None:
    note_id = session.resolve_note_id(identifier)

    try:
        label = session.store.find_by_id(note_id).title
    except DecodeError:
        label = note_id

    if not yes and not Confirm.ask(
        f"Are you sure you want to delete note '{escape(label)}'?",
        default=False,
        console=console,
    ):
        console.print("Deletion cancelled.")
        return

    tools.delete_note(session, note_id)
    console.print("[green]Note deleted successfully![/green]")


def do_search(session: Session, query: str) -> None:
    result = tools.search_collection(session, query)
    print_warnings(result)
    print_search_results(result.notes, query)


def do_stats(session: Session) -> None:
    stats, result = tools.collection_stats(session)
    print_warnings(result)
    console.print(format_stats(stats), markup=False)


def run_shell_command(session: Session, line: str) -> bool:
    """Run one shell line.

    Returns True if the shell should continue, False to exit.
    """
    try:
        parts = shlex.split(line)
    except ValueError as e:
        raise MemoError(f"could not parse command: {e}") from e
    if not parts:
        return True

    cmd, args = parts[0].lower(), parts[1:]

    if cmd in ("quit", "exit", "q"):
        return False

    elif cmd in ("help", "?"):
        print_help()

    elif cmd == "create":
        do_create(session)

    elif cmd == "list":
        tag = None
        if args and args[0] == "--tag":
            if len(args) < 2:
                raise MemoError("tag value required. Usage: list --tag <tag>")
            tag = args[1]
        do_list(session, tag=tag)

    elif cmd in ("read", "edit", "delete"):
        if not args:
            raise MemoError(f"note-id or number required. Usage: {cmd} <note-id|number>")
        if cmd == "read":
            do_read(session, args[0])
        elif cmd == "edit":
            do_edit(session, args[0])
        else:
            do_delete(session, args[0])

    elif cmd == "search":
        if not args:
            raise MemoError("search query required. Usage: search <query>")
        do_search(session, " ".join(args))

    elif cmd == "stats":
        do_stats(session)

    else:
        console.print(f"[red]Unknown command: {escape(cmd)}[/red]")
        console.print("[dim]Type help for available commands.[/dim]")

    return True


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Print note errors and exit with status 1."""
    try:
        yield
    except (MemoError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


# =============================================================================
# Typer Commands
# =============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    notes_dir: Optional[Path] = typer.Option(
        None,
        "--notes-dir",
        "-n",
        help="Notes directory (default: .memo-notes or $MEMO_NOTES_DIR)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Memo - Personal Notes Manager."""
    if debug:
        logger.setLevel(logging.DEBUG)

    store = NoteStore.from_settings(get_settings(), notes_dir=notes_dir)
    ctx.obj = Session(store=store)


@app.command()
def create(
    ctx: typer.Context,
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Note title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="Note content"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags"),
):
    """Create a new note."""
    with reporting_errors():
        do_create(ctx.obj, title, content, tags)


@app.command("list")
def list_command(
    ctx: typer.Context,
    tag: Optional[str] = typer.Option(None, "--tag", help="Only notes with this tag"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every note without paging"),
):
    """List notes, optionally filtered by tag."""
    with reporting_errors():
        do_list(ctx.obj, tag=tag, show_all=show_all)


@app.command()
def read(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Note id or list number"),
):
    """Display a specific note."""
    with reporting_errors():
        do_read(ctx.obj, identifier)


@app.command()
def edit(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Note id or list number"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New content"),
    tags: Optional[str] = typer.Option(None, "--tags", help="New comma-separated tags"),
):
    """Edit a specific note."""
    with reporting_errors():
        do_edit(ctx.obj, identifier, content=content, tags=tags)


@app.command()
def delete(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Note id or list number"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a specific note."""
    with reporting_errors():
        do_delete(ctx.obj, identifier, yes=yes)


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to look for in titles, bodies and tags"),
):
    """Search notes for text."""
    with reporting_errors():
        do_search(ctx.obj, query)


@app.command()
def stats(ctx: typer.Context):
    """Display statistics about your notes."""
    with reporting_errors():
        do_stats(ctx.obj)


@app.command()
def shell(ctx: typer.Context):
    """Start an interactive session where list numbers stay valid."""
    session: Session = ctx.obj
    session.interactive = True

    console.print(
        Panel.fit(
            "[bold blue]Memo[/bold blue]\n"
            "[dim]Personal Notes Manager[/dim]\n\n"
            "Type a command and press Enter. 'help' lists commands, 'quit' exits.",
            title="Welcome",
            border_style="blue",
        )
    )

    while True:
        try:
            line = Prompt.ask("[bold blue]memo[/bold blue]", console=console)
            if not run_shell_command(session, line):
                break
        except (MemoError, OSError) as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use quit to exit.[/dim]")
        except EOFError:
            break

    console.print("[dim]Goodbye![/dim]")
