"""Menu dispatch primitives shared by every screen."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class Screen(Protocol):
    """Capability implemented by every menu-driven state machine.

    A screen is a value: ``dispatch`` never mutates the receiver, it returns
    a RenderState whose ``owner`` is the next snapshot.
    """

    def free_text_key(self) -> str:
        """Action key used when the user typed text instead of picking an option."""
        ...

    async def dispatch(self, request: ActionRequest) -> RenderState:
        """Run the transition named by ``request.action_key``.

        Raises:
            UnknownActionError: the key is not one the screen declares
        """
        ...


@dataclass(frozen=True)
class ActionRequest:
    """One selectable (or synthesized) action bound to the screen snapshot it targets."""

    label: str
    action_key: str
    target: Screen
    args: tuple[str, ...] = ()

    @classmethod
    def with_args(
        cls,
        label: str,
        action_key: str,
        args: list[str] | tuple[str, ...],
        target: Screen,
    ) -> ActionRequest:
        return cls(label=label, action_key=action_key, target=target, args=tuple(args))


@dataclass
class RenderState:
    """Renderable outcome of a dispatch: next owner, body text and menu options."""

    owner: Screen
    text: str
    options: list[ActionRequest] = field(default_factory=list)

    def push(self, option: ActionRequest) -> RenderState:
        self.options.append(option)
        return self
