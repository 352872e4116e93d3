"""Data base browser screen: data base -> collection -> element drill-down."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Awaitable, Callable

from rich.console import Console
from rich.markup import escape

from ...errors import SelectionError, ServiceError, UnknownActionError
from ...service import DatabaseSpec, DataService, Filter, Scope
from ..components import TITLE, render_items, render_list, status_ko, status_ok
from ..path import PATH_DELIMITER, ROOT_SELECTORS, resolve_path
from ..router import Reader, Router
from ..screen import ActionRequest, RenderState
from ..state import Selection

if TYPE_CHECKING:
    PathResolver = Callable[[str, list[str], "DatabaseBrowser"], Awaitable[RenderState]]

logger = logging.getLogger(__name__)


HOME = "HOME"
STATUS = "STATUS"

TEXT_INPUT = "TEXT_INPUT"

CREATE_DATABASE = "CREATE_DATABASE"
DROP_DATABASE = "DROP_DATABASE"
SHOW_DATABASES = "SHOW_DATABASES"
SELECT_DATABASE_PANEL = "SELECT_DATABASE_PANEL"
SELECT_DATABASE = "SELECT_DATABASE"

SHOW_COLLECTIONS = "SHOW_COLLECTIONS"
SELECT_COLLECTION_PANEL = "SELECT_COLLECTION_PANEL"
SELECT_COLLECTION = "SELECT_COLLECTION"

SHOW_ELEMENTS = "SHOW_ELEMENTS"
SELECT_ELEMENTS_PANEL = "SELECT_ELEMENTS_PANEL"
SELECT_ELEMENT = "SELECT_ELEMENT"

SHOW_SELECTED = "SHOW_SELECTED"

NONE_LABEL = "[None]"

HOME_OPTIONS: list[tuple[str, str]] = [
    ("Home", HOME),
    ("Status", STATUS),
    ("Show data bases", SHOW_DATABASES),
    ("Select data base", SELECT_DATABASE_PANEL),
    ("Drop selected data base", DROP_DATABASE),
    ("Show collections", SHOW_COLLECTIONS),
    ("Select collection", SELECT_COLLECTION_PANEL),
    ("Show elements", SHOW_ELEMENTS),
    ("Select element", SELECT_ELEMENTS_PANEL),
    ("Show selected element", SHOW_SELECTED),
]


@dataclass(frozen=True)
class DatabaseBrowser:
    """Hierarchical browse/select screen over an injected DataService.

    The browser is an immutable snapshot. Every transition works on a copy,
    and every option it emits targets the snapshot that was current when the
    option was shown.
    """

    service: DataService
    selection: Selection = field(default_factory=Selection)
    resolver: PathResolver = field(default=resolve_path, compare=False)

    # ── Screen protocol ───────────────────────────────────────────

    def free_text_key(self) -> str:
        return TEXT_INPUT

    async def dispatch(self, request: ActionRequest) -> RenderState:
        key = request.action_key
        if key == HOME:
            return self.home_headers()
        if key == STATUS:
            return await self.status()
        if key == TEXT_INPUT:
            return await self.translate_query(request.args)
        if key == CREATE_DATABASE:
            return await self.create_database(request.args)
        if key == DROP_DATABASE:
            return await self.drop_database()
        if key == SHOW_DATABASES:
            return await self.show_databases()
        if key == SELECT_DATABASE_PANEL:
            return await self.select_database_panel()
        if key == SELECT_DATABASE:
            return self.select_database(request.args)
        if key == SHOW_COLLECTIONS:
            return await self.show_collections()
        if key == SELECT_COLLECTION_PANEL:
            return await self.select_collection_panel()
        if key == SELECT_COLLECTION:
            return self.select_collection(request.args)
        if key == SHOW_ELEMENTS:
            return await self.show_elements()
        if key == SELECT_ELEMENTS_PANEL:
            return await self.select_element_panel()
        if key == SELECT_ELEMENT:
            return self.select_element(request.args)
        if key == SHOW_SELECTED:
            return await self.show_selected()
        raise UnknownActionError(key)

    # ── Entry point ───────────────────────────────────────────────

    async def launch(self, reader: Reader | None = None, console: Console | None = None) -> None:
        """Run the interactive loop starting from the home screen."""
        router = Router(self.home_headers(), console=console, reader=reader)
        await router.run()

    # ── Rendering helpers ─────────────────────────────────────────

    def with_selection(self, selection: Selection) -> DatabaseBrowser:
        return replace(self, selection=selection)

    def default_header(self) -> str:
        return f"{TITLE}\n[dim]{escape(self.selection.breadcrumbs())}[/dim]"

    def info_headers(self, message: str) -> str:
        return f"{self.default_header()}\n\n{message}"

    def home(self, header: str) -> RenderState:
        cursor = RenderState(self, header)
        for label, key in HOME_OPTIONS:
            cursor.push(ActionRequest(label, key, self))
        return cursor

    def home_headers(self) -> RenderState:
        return self.home(self.default_header())

    def _panel(self, header: str, items: list[str], action_key: str) -> RenderState:
        cursor = RenderState(self, header)
        for item in items:
            cursor.push(ActionRequest.with_args(item, action_key, [item], self))
        cursor.push(ActionRequest(NONE_LABEL, action_key, self))
        return cursor

    def _failed(self, action: str, error: ServiceError) -> str:
        logger.warning("%s failed: %s", action, error.message)
        return escape(error.message)

    # ── Status ────────────────────────────────────────────────────

    async def status(self) -> RenderState:
        message = status_ok()
        try:
            await self.service.status()
        except ServiceError as e:
            logger.warning("Status probe failed: %s", e.message)
            message = status_ko()
        return self.home(f"{self.default_header()}\n\n{message}")

    # ── Data bases ────────────────────────────────────────────────

    async def create_database(self, args: tuple[str, ...]) -> RenderState:
        if not args:
            return self.home(self.info_headers("Cannot create data base."))

        name = args[0].strip()
        try:
            created = await self.service.create_database(DatabaseSpec(name))
        except ServiceError as e:
            return self.home(self.info_headers(self._failed("create_database", e)))

        logger.info("Data base %s created", created)
        return self.home(self.info_headers(f"Data base '{escape(created)}' created"))

    async def drop_database(self) -> RenderState:
        database = self.selection.database
        if database is None:
            return self.home(self.info_headers("Cannot drop data base."))

        try:
            dropped = await self.service.drop_database(DatabaseSpec(database))
        except ServiceError as e:
            return self.home(self.info_headers(self._failed("drop_database", e)))

        logger.info("Data base %s dropped", dropped)
        browser = self.with_selection(self.selection.with_database(None))
        return browser.home(browser.info_headers(f"Data base '{escape(dropped)}' dropped"))

    async def show_databases(self) -> RenderState:
        header = self.info_headers("The repository contains the following data bases:")
        items: list[str] = []
        try:
            items = await self.service.list_databases()
        except ServiceError as e:
            header = self._failed("list_databases", e)
        return self.home(render_list(header, items))

    async def select_database_panel(self) -> RenderState:
        header = self.info_headers("Select one of the following data bases:")
        items: list[str] = []
        try:
            items = await self.service.list_databases()
        except ServiceError as e:
            header = self._failed("list_databases", e)
        return self._panel(header, items, SELECT_DATABASE)

    def select_database(self, args: tuple[str, ...]) -> RenderState:
        database = args[0] if args else None
        return self.with_selection(self.selection.with_database(database)).home_headers()

    # ── Collections ───────────────────────────────────────────────

    async def show_collections(self) -> RenderState:
        try:
            database = self.selection.verify_database()
        except SelectionError as e:
            return self.home(self.info_headers(e.message))

        header = self.info_headers("The repository contains the following collections:")
        items: list[str] = []
        try:
            items = await self.service.list_collections(Scope(database))
        except ServiceError as e:
            header = self._failed("list_collections", e)
        return self.home(render_list(header, items))

    async def select_collection_panel(self) -> RenderState:
        try:
            database = self.selection.verify_database()
        except SelectionError as e:
            return self.home(self.info_headers(e.message))

        header = self.info_headers("Select one of the following collections:")
        items: list[str] = []
        try:
            items = await self.service.list_collections(Scope(database))
        except ServiceError as e:
            header = self._failed("list_collections", e)
        return self._panel(header, items, SELECT_COLLECTION)

    def select_collection(self, args: tuple[str, ...]) -> RenderState:
        collection = args[0] if args else None
        return self.with_selection(self.selection.with_collection(collection)).home_headers()

    # ── Elements ──────────────────────────────────────────────────

    async def show_elements(self) -> RenderState:
        try:
            database, collection = self.selection.verify_collection()
        except SelectionError as e:
            return self.home(self.info_headers(e.message))

        header = self.info_headers("The repository contains the following items:")
        items: list[str] = []
        try:
            items = await self.service.find_all_lite(Scope(database, collection))
        except ServiceError as e:
            header = self._failed("find_all_lite", e)
        return self.home(render_list(header, items))

    async def select_element_panel(self) -> RenderState:
        try:
            database, collection = self.selection.verify_collection()
        except SelectionError as e:
            return self.home(self.info_headers(e.message))

        header = self.info_headers("Select one of the following elements:")
        items: list[str] = []
        try:
            items = await self.service.find_all_lite(Scope(database, collection))
        except ServiceError as e:
            header = self._failed("find_all_lite", e)
        return self._panel(header, items, SELECT_ELEMENT)

    def select_element(self, args: tuple[str, ...]) -> RenderState:
        element = [args[0]] if args else None
        return self.with_selection(self.selection.with_element(element)).home_headers()

    async def show_selected(self) -> RenderState:
        try:
            database, collection, chain = self.selection.verify_element()
        except SelectionError as e:
            return self.home(self.info_headers(e.message))

        try:
            elements = await self.service.find_query(Filter(database, collection, chain))
        except ServiceError as e:
            message = self._failed("find_query", e)
            return self.home(self.info_headers(f"Cannot find element: {message}"))

        if len(elements) == 1:
            return self.home(f"{self.info_headers('Item:')}\n\n{escape(elements[0])}")

        return self.home(f"{self.info_headers('Items:')}\n\n{render_items(elements)}")

    # ── Free text ─────────────────────────────────────────────────

    async def translate_query(self, args: tuple[str, ...]) -> RenderState:
        """Interpret typed text as a path expression.

        ``"> db > collection > id"`` navigates from the top, ``"* > x"`` from
        the current selection. Any other root leaves the view unchanged.
        """
        if not args:
            return self.home_headers()

        fragments = [f.strip() for f in args[0].split(PATH_DELIMITER)]
        first = fragments.pop(0)

        if first in ROOT_SELECTORS:
            return await self.resolver(first, fragments, self)

        return self.home_headers()
