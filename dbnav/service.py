"""Data-access service contract consumed by the browser."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from .errors import ServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseSpec:
    """Arguments of a create/drop data base request."""

    name: str


@dataclass(frozen=True)
class Scope:
    """A data base, optionally narrowed to one of its collections."""

    database: str
    collection: str | None = None


@dataclass(frozen=True)
class Filter:
    """Locates elements of a collection by an identifier chain."""

    database: str
    collection: str
    id_chain: tuple[str, ...] = field(default_factory=tuple)


class DataService(Protocol):
    """Async data-store facade.

    Every method raises :class:`~dbnav.errors.ServiceError` on failure.
    """

    async def status(self) -> None: ...

    async def create_database(self, spec: DatabaseSpec) -> str: ...

    async def drop_database(self, spec: DatabaseSpec) -> str: ...

    async def list_databases(self) -> list[str]: ...

    async def list_collections(self, scope: Scope) -> list[str]: ...

    async def find_all_lite(self, scope: Scope) -> list[str]: ...

    async def find_query(self, query: Filter) -> list[str]: ...


class TimeoutService:
    """Wrap another service so that no call can stall the menu loop forever.

    A call exceeding ``seconds`` is cancelled and surfaces as a ServiceError,
    which the browser renders like any other collaborator failure.
    """

    def __init__(self, inner: DataService, seconds: float):
        if seconds <= 0:
            raise ValueError("timeout must be positive")
        self.inner = inner
        self.seconds = seconds

    async def _call(self, name: str, *args):
        method = getattr(self.inner, name)
        try:
            return await asyncio.wait_for(method(*args), timeout=self.seconds)
        except asyncio.TimeoutError:
            logger.warning("Service call %s timed out after %ss", name, self.seconds)
            raise ServiceError(
                f"Operation '{name}' timed out after {self.seconds:g}s."
            ) from None

    async def status(self) -> None:
        await self._call("status")

    async def create_database(self, spec: DatabaseSpec) -> str:
        return await self._call("create_database", spec)

    async def drop_database(self, spec: DatabaseSpec) -> str:
        return await self._call("drop_database", spec)

    async def list_databases(self) -> list[str]:
        return await self._call("list_databases")

    async def list_collections(self, scope: Scope) -> list[str]:
        return await self._call("list_collections", scope)

    async def find_all_lite(self, scope: Scope) -> list[str]:
        return await self._call("find_all_lite", scope)

    async def find_query(self, query: Filter) -> list[str]:
        return await self._call("find_query", query)
