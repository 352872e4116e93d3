"""Error types shared across dbnav."""
from __future__ import annotations


class DbnavError(Exception):
    """Base class for dbnav errors.

    Every subclass carries a human-readable ``message`` that the TUI can show
    verbatim as header text.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ServiceError(DbnavError):
    """Failure reported by the data-access service (connectivity, query, create/drop)."""


class SelectionError(DbnavError):
    """A drill-down was attempted without its prerequisite selection."""


class ConfigurationError(DbnavError):
    """Settings or seed data could not be loaded."""


class UnknownActionError(LookupError):
    """Dispatch on an action key the screen does not declare."""

    def __init__(self, action_key: str):
        super().__init__(f"unknown action key: {action_key!r}")
        self.action_key = action_key
