"""In-memory data service and JSON seed loading."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import ConfigurationError, ServiceError
from .service import DataService, DatabaseSpec, Filter, Scope, TimeoutService
from .settings import Settings

logger = logging.getLogger(__name__)

WILDCARD = "*"

Catalog = dict[str, dict[str, dict[str, Any]]]


def render_document(value: Any) -> str:
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False, default=str)


def _normalize_collection(raw: Any, where: str) -> dict[str, Any]:
    """Accept either ``{id: doc}`` or a list of docs carrying ``_id``."""
    if isinstance(raw, dict):
        return {str(k): v for k, v in raw.items()}
    if isinstance(raw, list):
        docs: dict[str, Any] = {}
        for idx, doc in enumerate(raw):
            key = doc.get("_id", idx) if isinstance(doc, dict) else idx
            docs[str(key)] = doc
        return docs
    raise ConfigurationError(f"{where}: collection must be an object or a list")


def load_catalog(path: Path) -> Catalog:
    """Read a JSON seed file shaped ``{db: {collection: documents}}``."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read seed file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in seed file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path}: top level must be an object of data bases")

    catalog: Catalog = {}
    for db_name, collections in raw.items():
        if not isinstance(collections, dict):
            raise ConfigurationError(f"{path}: data base '{db_name}' must be an object")
        catalog[str(db_name)] = {
            str(coll): _normalize_collection(docs, f"{path}:{db_name}.{coll}")
            for coll, docs in collections.items()
        }
    return catalog


class MemoryService:
    """In-process data service backed by nested dicts.

    Layout is ``{database: {collection: {element_id: document}}}``. An element
    identifier chain selects a document by its id, then walks nested keys of
    that document; ``*`` at any position matches every key at that level.
    """

    backend_name = "memory"

    def __init__(self, catalog: Catalog | None = None, *, healthy: bool = True):
        self.catalog: Catalog = catalog if catalog is not None else {}
        self.healthy = healthy

    @classmethod
    def from_file(cls, path: Path) -> MemoryService:
        catalog = load_catalog(path)
        logger.info("Loaded %d data base(s) from %s", len(catalog), path)
        return cls(catalog)

    def _database(self, name: str) -> dict[str, dict[str, Any]]:
        db = self.catalog.get(name)
        if db is None:
            raise ServiceError(f"Data base '{name}' not found.")
        return db

    def _collection(self, database: str, collection: str | None) -> dict[str, Any]:
        if not collection:
            raise ServiceError("No collection given.")
        coll = self._database(database).get(collection)
        if coll is None:
            raise ServiceError(f"Collection '{collection}' not found in '{database}'.")
        return coll

    async def status(self) -> None:
        if not self.healthy:
            raise ServiceError("Service unavailable.")

    async def create_database(self, spec: DatabaseSpec) -> str:
        name = spec.name.strip()
        if not name:
            raise ServiceError("Data base name cannot be empty.")
        if name in self.catalog:
            raise ServiceError(f"Data base '{name}' already exists.")
        self.catalog[name] = {}
        logger.info("Created data base %s", name)
        return name

    async def drop_database(self, spec: DatabaseSpec) -> str:
        self._database(spec.name)
        del self.catalog[spec.name]
        logger.info("Dropped data base %s", spec.name)
        return spec.name

    async def list_databases(self) -> list[str]:
        return sorted(self.catalog)

    async def list_collections(self, scope: Scope) -> list[str]:
        return sorted(self._database(scope.database))

    async def find_all_lite(self, scope: Scope) -> list[str]:
        return sorted(self._collection(scope.database, scope.collection))

    async def find_query(self, query: Filter) -> list[str]:
        if not query.id_chain:
            raise ServiceError("Empty element identifier.")

        matches: list[Any] = [self._collection(query.database, query.collection)]
        for key in query.id_chain:
            step: list[Any] = []
            for node in matches:
                if not isinstance(node, dict):
                    continue
                if key == WILDCARD:
                    step.extend(node[k] for k in sorted(node))
                elif key in node:
                    step.append(node[key])
            matches = step

        if not matches:
            path = " > ".join(query.id_chain)
            raise ServiceError(f"No element matches '{path}'.")
        return [render_document(m) for m in matches]


def get_service(settings: Settings) -> DataService:
    """Build the data service described by ``settings``."""
    seed = settings.DBNAV_SEED_FILE
    service: DataService = MemoryService.from_file(seed) if seed else MemoryService()
    if settings.DBNAV_SERVICE_TIMEOUT > 0:
        service = TimeoutService(service, settings.DBNAV_SERVICE_TIMEOUT)
    return service
