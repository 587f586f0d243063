"""Provider factory functions for CLI.

Centralizes creation of client storage, LLM and completion service instances
from environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path
from typing import Any

from rich.console import Console

from ..completion import CompletionService, HTTPCompletionService, ProviderCompletionService
from ..llm import create_llm_provider
from ..storage import AUTH_TOKEN_KEY, ClientStorage, create_client_storage

DEFAULT_SERVER_URL = "http://localhost:5000"
DEFAULT_STORAGE_PATH = "~/.ai-mentor/storage.json"
DEFAULT_EXPORT_DIR = "./exports"

# Default console for output
_console = Console()


def get_server_url() -> str:
    """Base URL of the mentor server (MENTOR_SERVER_URL)."""
    return os.getenv("MENTOR_SERVER_URL", DEFAULT_SERVER_URL)


def get_export_dir() -> Path:
    """Directory for TXT/PDF exports and backups (MENTOR_EXPORT_DIR)."""
    return Path(os.getenv("MENTOR_EXPORT_DIR", DEFAULT_EXPORT_DIR)).expanduser()


def get_client_storage() -> ClientStorage:
    """Create the client's durable key-value storage.

    Environment variables:
        MENTOR_STORAGE_PATH: JSON file path (default: ~/.ai-mentor/storage.json)
    """
    return create_client_storage(
        "json",
        path=os.getenv("MENTOR_STORAGE_PATH", DEFAULT_STORAGE_PATH),
    )


def get_llm(console: Console | None = None) -> Any | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (gemini, openai; default: gemini)
        GEMINI_API_KEY: Gemini API key (for gemini provider)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "gemini").lower()

    if llm_provider == "gemini":
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: GEMINI_API_KEY not set, LLM features disabled[/yellow]")
            return None
        model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        return create_llm_provider("gemini", api_key=api_key, model=model)

    elif llm_provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: OPENAI_API_KEY not set, LLM features disabled[/yellow]")
            return None
        model = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
        return create_llm_provider("openai", api_key=api_key, model=model)

    con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
    return None


def require_llm(console: Console | None = None) -> Any:
    """Get LLM provider, raising error if not configured.

    Raises:
        SystemExit: If LLM provider is not configured
    """
    import typer

    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def get_completion_service(
    storage: ClientStorage,
    direct: bool = False,
    console: Console | None = None,
) -> CompletionService:
    """Create the completion service the chat client talks to.

    Args:
        storage: Client storage; its saved login token is sent to the server
        direct: Call the LLM provider in-process instead of the mentor server
        console: Optional Rich console for output
    """
    if direct:
        return ProviderCompletionService(require_llm(console))
    return HTTPCompletionService(
        base_url=get_server_url(),
        token=storage.get_item(AUTH_TOKEN_KEY),
    )
