"""Selection context of the data base browser."""
from __future__ import annotations

from dataclasses import dataclass, replace

from ..errors import SelectionError


@dataclass(frozen=True)
class Selection:
    """Current data base / collection / element choices.

    Immutable; every setter returns a new Selection. Clearing or changing a
    level clears every level below it:

    - database cleared or changed -> collection and element cleared
    - collection cleared or changed -> element cleared
    """

    database: str | None = None
    collection: str | None = None
    element: tuple[str, ...] | None = None

    def with_database(self, database: str | None) -> Selection:
        if database is not None and database == self.database:
            return self
        return Selection(database=database)

    def with_collection(self, collection: str | None) -> Selection:
        if collection is not None and collection == self.collection:
            return self
        return replace(self, collection=collection, element=None)

    def with_element(self, element: list[str] | tuple[str, ...] | None) -> Selection:
        return replace(self, element=tuple(element) if element else None)

    def verify_database(self) -> str:
        """Return the selected data base or raise SelectionError."""
        if self.database is None:
            raise SelectionError("No data base selected.")
        return self.database

    def verify_collection(self) -> tuple[str, str]:
        database = self.verify_database()
        if self.collection is None:
            raise SelectionError("No collection selected.")
        return database, self.collection

    def verify_element(self) -> tuple[str, str, tuple[str, ...]]:
        database, collection = self.verify_collection()
        if not self.element:
            raise SelectionError("No element selected.")
        return database, collection, self.element

    def breadcrumbs(self) -> str:
        """Breadcrumb path like "Home > shop > orders > 42"."""
        parts = ["Home"]
        if self.database is not None:
            parts.append(self.database)
            if self.collection is not None:
                parts.append(self.collection)
                if self.element:
                    parts.append(" > ".join(self.element))
        return " > ".join(parts)
