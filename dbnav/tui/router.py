"""Render/input/dispatch loop for the TUI."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable

import questionary
from rich.console import Console

from .components import BRAND_STYLE, render_cursor
from .screen import ActionRequest, RenderState

logger = logging.getLogger(__name__)

Reader = Callable[[], Awaitable["str | None"]]


async def prompt_line() -> str | None:
    """Read one line from the terminal; None when the user interrupts."""
    return await questionary.text(
        "Option number or path (e.g. > db > collection):",
        style=BRAND_STYLE,
        qmark="›",
    ).ask_async()


class Router:
    """Main navigation loop with screen dispatch.

    The router is the only component that touches the terminal. It renders
    the current RenderState, reads one line, resolves it to an ActionRequest
    and hands that to the owning screen. It knows nothing about any concrete
    screen: unmatched input goes through the screen's free-text key.
    """

    def __init__(
        self,
        cursor: RenderState,
        console: Console | None = None,
        reader: Reader | None = None,
    ):
        """Initialize router with dependencies.

        Args:
            cursor: Initial state to render
            console: Rich Console for output
            reader: Async callable returning the next input line (None to quit)
        """
        self.cursor = cursor
        self.console = console or Console()
        self.reader = reader or prompt_line

    def resolve(self, line: str) -> ActionRequest:
        """Map an input line to a listed option or a synthesized free-text request.

        Only a decimal index within range selects a listed option; labels are
        never matched.
        """
        choice = line.strip()
        if choice.isdecimal():
            index = int(choice)
            if 1 <= index <= len(self.cursor.options):
                return self.cursor.options[index - 1]

        owner = self.cursor.owner
        return ActionRequest.with_args(line, owner.free_text_key(), [line], owner)

    async def step(self, line: str) -> RenderState:
        """Dispatch one input line and make the result the current state."""
        request = self.resolve(line)
        logger.debug("Dispatching %s args=%s", request.action_key, request.args)
        self.cursor = await request.target.dispatch(request)
        return self.cursor

    async def run(self) -> None:
        """Run the navigation loop.

        No action ends the loop; it stops only when the reader reports an
        interrupt (Ctrl-C / Ctrl-D), which is treated as process exit.
        """
        while True:
            render_cursor(self.console, self.cursor)
            try:
                line = await self.reader()
            except (KeyboardInterrupt, EOFError):
                line = None
            if line is None:
                logger.info("Input closed, leaving navigation loop")
                return
            await self.step(line)
