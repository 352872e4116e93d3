from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .errors import ConfigurationError, ServiceError
from .logging import setup_logging
from .memory import get_service
from .service import DataService
from .settings import Settings, load_settings
from .tui.components import bold, status_ko, status_ok
from .tui.screens import DatabaseBrowser

app = typer.Typer(
    add_completion=False,
    help="dbnav: browse data bases, collections and elements from the terminal",
    rich_markup_mode="rich",
)
console = Console()


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _settings(seed: Path | None) -> Settings:
    settings = load_settings()
    if seed is not None:
        settings.DBNAV_SEED_FILE = seed
    return settings


def _service(settings: Settings) -> DataService:
    try:
        return get_service(settings)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e.message}")
        raise typer.Exit(code=1)


SEED_OPTION = typer.Option(
    None,
    "--seed",
    help="JSON file with {data base: {collection: documents}} to browse",
)


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback(invoke_without_command=True)
def _root(ctx: typer.Context, seed: Optional[Path] = SEED_OPTION):
    """
    [bold]dbnav[/bold]: interactive data base browser.

    [dim]Run without arguments to launch the browser.[/dim]

    [bold]At the prompt:[/bold]
      3                        pick option number 3
      > shop > orders > 42     jump to an element
      * > orders               continue from the current selection
      > + inventory            create a data base
    """
    if ctx.invoked_subcommand is None:
        browse(seed=seed)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("browse", help="[bold cyan]B[/bold cyan]rowse data bases interactively")
def browse(seed: Optional[Path] = SEED_OPTION):
    """Launch the interactive browser."""
    settings = _settings(seed)
    log_file = setup_logging(settings)
    service = _service(settings)

    console.print(f"[dim]Logging to {log_file}[/dim]\n")
    try:
        asyncio.run(DatabaseBrowser(service).launch(console=console))
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]👋 Goodbye![/]")


@app.command("status", help="[bold cyan]S[/bold cyan]how data service health")
def status(seed: Optional[Path] = SEED_OPTION):
    """Probe the data service once; exit code 1 when it is down."""
    service = _service(_settings(seed))
    try:
        asyncio.run(service.status())
    except ServiceError as e:
        console.print(status_ko())
        console.print(f"[dim]{e.message}[/dim]")
        raise typer.Exit(code=1)
    console.print(status_ok())


@app.command("databases", help="[bold cyan]L[/bold cyan]ist data bases")
def databases(seed: Optional[Path] = SEED_OPTION):
    """Print every data base name, one per line."""
    service = _service(_settings(seed))
    try:
        names = asyncio.run(service.list_databases())
    except ServiceError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1)
    for name in names:
        console.print(f" - {bold(name)}")


def main():
    app()
