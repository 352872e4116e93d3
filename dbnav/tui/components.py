"""Reusable text components for the TUI.

Everything here returns rich markup strings; printing is the router's job.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import questionary
from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console

    from .screen import RenderState


# ═══════════════════════════════════════════════════════════════════════════════
# BRAND STYLING
# ═══════════════════════════════════════════════════════════════════════════════

BRAND_STYLE = questionary.Style([
    ("qmark", "fg:#00b4d8 bold"),         # Cyan accent
    ("question", "bold"),
    ("answer", "fg:#90e0ef bold"),         # Light cyan for answers
])

TITLE = "[bold cyan]dbnav[/bold cyan] [dim]data base browser[/dim]"


# ═══════════════════════════════════════════════════════════════════════════════
# DISPLAY ATTRIBUTES
# ═══════════════════════════════════════════════════════════════════════════════

def bold(value: str) -> str:
    """Bold a data value, escaping any markup it contains."""
    return f"[bold]{escape(value)}[/bold]"


def status_ok() -> str:
    return "[bold green] Status OK.[/bold green]"


def status_ko() -> str:
    return "[bold red] Status KO.[/bold red]"


# ═══════════════════════════════════════════════════════════════════════════════
# LIST RENDERING
# ═══════════════════════════════════════════════════════════════════════════════

def render_list(header: str, items: list[str]) -> str:
    """Render a header sentence followed by a bulleted, bold item list.

    An extra blank line separates header and items only when there is
    at least one item.
    """
    lines = [f" - {bold(item)}" for item in items]
    if lines:
        header = f"{header}\n"
    return f"{header}\n" + "\n".join(lines)


def render_items(items: list[str]) -> str:
    """Render full elements, each bolded, separated by a blank line."""
    return "\n\n".join(f" {bold(item)}" for item in items)


# ═══════════════════════════════════════════════════════════════════════════════
# CURSOR OUTPUT
# ═══════════════════════════════════════════════════════════════════════════════

def render_cursor(console: Console, cursor: RenderState) -> None:
    """Print a RenderState body followed by its numbered options.

    Args:
        console: Rich Console for output
        cursor: State to render
    """
    console.print(cursor.text)
    console.print()
    for index, option in enumerate(cursor.options, 1):
        console.print(f"  [cyan]\\[{index}][/cyan] {escape(option.label)}")
    console.print()
