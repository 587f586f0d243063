"""Main CLI application using Typer."""
import asyncio
import logging
from enum import Enum
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..archive import ArchiveStore, ExportFormat, export_entry, write_backup
from ..chat.models import ArchiveEntry
from ..errors import MentorError
from ..storage import AUTH_TOKEN_KEY
from .providers import get_client_storage, get_completion_service, get_export_dir, get_server_url

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="mentor",
    help="AI Mentor: multi-session chat client and its backend server",
    no_args_is_help=True,
    add_completion=True,
)
archives_app = typer.Typer(help="Manage saved chats", no_args_is_help=True)
app.add_typer(archives_app, name="archives")

# Console for rich output
console = Console()


class ArchiveFormat(str, Enum):
    """Output format of ``mentor archives export``."""

    BACKUP = "backup"
    TXT = "txt"
    PDF = "pdf"


@app.callback()
def configure(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        envvar="MENTOR_LOG_LEVEL",
        help="Console log level: debug, info, warning or error"
    ),
):
    """Configure console logging for every command."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(code=1)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: MENTOR_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: MENTOR_PORT or 5000)"),
):
    """Run the mentor HTTP server (signup, login, ask)."""
    import uvicorn

    from ..server import ServerSettings, create_app
    from ..server.config import DEV_JWT_SECRET

    settings = ServerSettings.from_env()
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    if settings.jwt_secret == DEV_JWT_SECRET:
        console.print("[yellow]Warning: JWT_SECRET not set, using the development secret[/yellow]")
    if settings.llm_api_key is None:
        console.print(
            f"[yellow]Warning: no API key for {settings.llm_provider}, /api/ask will fail[/yellow]"
        )

    console.print(f"[dim]Serving on http://{settings.host}:{settings.port}[/dim]")
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=logging.getLevelName(logging.getLogger().level).lower(),
    )


@app.command()
def chat(
    direct: bool = typer.Option(
        False,
        "--direct",
        "-d",
        help="Call the LLM provider directly instead of the mentor server"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat client."""
    async def _chat():
        from ..ui import run_mentor_tui

        storage = get_client_storage()
        completion = get_completion_service(storage, direct=direct, console=console)
        await run_mentor_tui(
            completion=completion,
            storage=storage,
            export_dir=get_export_dir(),
            log_level=log_level,
        )
        console.print("\n[dim]Goodbye![/dim]")

    # Records go to the in-app log panel, not the terminal under the TUI
    logging.getLogger("mentor").propagate = False
    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def signup(
    name: str = typer.Option(..., "--name", "-n", prompt=True, help="Display name"),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True
    ),
):
    """Create an account on the mentor server."""
    from ..accounts import AccountClient

    async def _signup() -> str:
        async with AccountClient(get_server_url()) as client:
            return await client.signup(name, email, password)

    try:
        message = asyncio.run(_signup())
    except MentorError as e:
        _fail(e.message)
    console.print(f"[green]{message}[/green]")


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
):
    """Log in and remember the session token for the chat client."""
    from ..accounts import AccountClient

    async def _login() -> str:
        async with AccountClient(get_server_url()) as client:
            return await client.login(email, password)

    try:
        token = asyncio.run(_login())
    except MentorError as e:
        _fail(e.message)
    get_client_storage().set_item(AUTH_TOKEN_KEY, token)
    console.print("[green]Login successful[/green]")


@app.command()
def logout():
    """Forget the saved session token."""
    get_client_storage().remove_item(AUTH_TOKEN_KEY)
    console.print("[dim]Logged out.[/dim]")


def _find_entry(store: ArchiveStore, key: str) -> ArchiveEntry:
    """Look up a saved chat by id or unique id prefix."""
    entry = store.get(key)
    if entry is not None:
        return entry
    matches = [e for e in store.entries if e.id.startswith(key)]
    if len(matches) != 1:
        _fail(f"No saved chat matches '{key}'" if not matches else f"'{key}' is ambiguous")
    return matches[0]


@archives_app.command("list")
def list_archives():
    """List saved chats."""
    store = ArchiveStore(get_client_storage())
    if not len(store):
        console.print("[dim]No saved chats yet.[/dim]")
        return

    table = Table(show_header=True, box=None)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold cyan")
    table.add_column("Messages", justify="right")
    for entry in store.entries:
        table.add_row(entry.id, entry.name, str(len(entry.messages)))
    console.print(table)


@archives_app.command("export")
def export_archives(
    entry_id: str | None = typer.Argument(None, help="Saved chat id (or prefix); omit for a full backup"),
    fmt: ArchiveFormat = typer.Option(
        ArchiveFormat.BACKUP,
        "--format",
        "-f",
        help="backup (all chats as JSON), txt or pdf"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory"),
):
    """Export one saved chat as TXT/PDF, or every saved chat as a JSON backup."""
    store = ArchiveStore(get_client_storage())
    directory = output or get_export_dir()

    try:
        if fmt == ArchiveFormat.BACKUP:
            path = write_backup(store.export_all(), directory)
        else:
            if entry_id is None:
                _fail("A saved chat id is required for txt and pdf exports")
            entry = _find_entry(store, entry_id)
            path = export_entry(entry, ExportFormat(fmt.value), directory)
    except OSError as e:
        _fail(str(e))
    console.print(f"[green]Written {path}[/green]")


@archives_app.command("import")
def import_archives(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Backup file to import"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Replace ALL saved chats with the contents of a backup file."""
    if not yes:
        console.print("[yellow]WARNING: this replaces every saved chat![/yellow]")
        if not typer.confirm("Are you sure you want to continue?"):
            console.print("[dim]Aborted.[/dim]")
            return

    store = ArchiveStore(get_client_storage())
    try:
        count = store.import_all(path.read_bytes())
    except MentorError as e:
        _fail(e.message)
    console.print(f"[green]Imported {count} saved chats[/green]")


@archives_app.command("clear")
def clear_archives(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Delete every saved chat."""
    if not yes and not typer.confirm("Delete every saved chat?"):
        console.print("[dim]Aborted.[/dim]")
        return
    ArchiveStore(get_client_storage()).clear_all()
    console.print("[green]All saved chats deleted[/green]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
