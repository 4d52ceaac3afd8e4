"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from urban_dict_client.client import DefinitionClient
from urban_dict_client.factories import close_cache_client, create_cache_client
from urban_dict_client.observability import command_context, configure_logging
from urban_dict_core.config.settings import Settings
from urban_dict_core.exceptions import UrbanDictError
from urban_dict_core.models import AutocompleteSuggestion, DefinitionRecord

T = TypeVar("T")

app = typer.Typer(
    name="urban-dict",
    help="Look up Urban Dictionary definitions through a shared cache",
)
console = Console()
logger = structlog.get_logger()


@app.command()
def define(
    term: str | None = typer.Argument(None, help="Term to define (omit for random)"),
    as_json: bool = typer.Option(False, "--json", help="Print raw records as JSON"),
    limit: int = typer.Option(3, "--limit", min=1, help="Maximum definitions to print"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Show definitions for a term."""
    settings = _load_settings(verbose)
    with command_context("define", term=term or ""):
        records = _run(settings, lambda client: client.define(term))
    _print_definitions(records, as_json=as_json, limit=limit)


@app.command()
def random(
    as_json: bool = typer.Option(False, "--json", help="Print raw records as JSON"),
    limit: int = typer.Option(3, "--limit", min=1, help="Maximum definitions to print"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Show random definitions."""
    settings = _load_settings(verbose)
    with command_context("random"):
        records = _run(settings, lambda client: client.random())
    _print_definitions(records, as_json=as_json, limit=limit)


@app.command()
def autocomplete(
    term: str = typer.Argument(..., help="Partial term to complete"),
    as_json: bool = typer.Option(False, "--json", help="Print raw suggestions as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Show autocomplete suggestions for a partial term."""
    settings = _load_settings(verbose)
    with command_context("autocomplete", term=term):
        suggestions = _run(settings, lambda client: client.autocomplete(term))
    _print_suggestions(suggestions, as_json=as_json)


@app.command()
def version() -> None:
    """Show version."""
    console.print("urban-dict-cache v0.1.0")


def _load_settings(verbose: bool) -> Settings:
    """Load settings from the environment and configure logging."""
    try:
        settings = Settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)
    return settings


def _run(settings: Settings, call: Callable[[DefinitionClient], Awaitable[T]]) -> T:
    """Run one client call, turning library errors into a clean exit."""
    try:
        return asyncio.run(_with_client(settings, call))
    except UrbanDictError as exc:
        logger.debug("command_failed", error=str(exc))
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


async def _with_client(
    settings: Settings,
    call: Callable[[DefinitionClient], Awaitable[T]],
) -> T:
    """Open the cache and HTTP session, run the call, close both."""
    cache = create_cache_client(settings)
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
            client = DefinitionClient.from_settings(settings, cache, http=http)
            return await call(client)
    finally:
        await close_cache_client(cache)


def _dump(items: list[DefinitionRecord] | list[AutocompleteSuggestion]) -> str:
    """Serialize records back to upstream-shaped JSON."""
    return json.dumps([item.model_dump() for item in items], ensure_ascii=False)


def _print_definitions(records: list[DefinitionRecord], *, as_json: bool, limit: int) -> None:
    """Print definitions as text blocks, or as JSON."""
    if as_json:
        console.print_json(_dump(records))
        return

    if not records:
        console.print("[yellow]No definitions found[/yellow]")
        return

    for record in records[:limit]:
        header = f"[bold]{escape(record.word)}[/bold]  [dim]by {escape(record.author)}[/dim]"
        console.print(f"\n{header}")
        console.print(escape(record.definition))
        if record.example:
            console.print(f"[italic]{escape(record.example)}[/italic]")
        console.print(f"[green]+{record.thumbs_up}[/green] [red]-{record.thumbs_down}[/red]")


def _print_suggestions(suggestions: list[AutocompleteSuggestion], *, as_json: bool) -> None:
    """Print suggestions as a table, or as JSON."""
    if as_json:
        console.print_json(_dump(suggestions))
        return

    if not suggestions:
        console.print("[yellow]No suggestions found[/yellow]")
        return

    table = Table("Term", "Preview")
    for suggestion in suggestions:
        table.add_row(escape(suggestion.term), escape(suggestion.preview))
    console.print(table)


if __name__ == "__main__":
    app()
