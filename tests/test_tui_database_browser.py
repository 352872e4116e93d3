"""Unit tests for the data base browser screen."""
from __future__ import annotations

import asyncio

import pytest

from dbnav.errors import ServiceError, UnknownActionError
from dbnav.memory import render_document
from dbnav.tui.screen import ActionRequest
from dbnav.tui.screens import database as db
from dbnav.tui.screens.database import DatabaseBrowser
from dbnav.tui.state import Selection


def _run(browser, key, *args):
    request = ActionRequest.with_args(key, key, list(args), browser)
    return asyncio.run(browser.dispatch(request))


def _keys(cursor):
    return [o.action_key for o in cursor.options]


class BrokenService:
    async def status(self):
        raise ServiceError("connection refused")

    async def list_databases(self):
        raise ServiceError("connection refused")

    async def list_collections(self, scope):
        raise ServiceError("connection refused")

    async def find_all_lite(self, scope):
        raise ServiceError("connection refused")


def test_free_text_key():
    assert DatabaseBrowser(None).free_text_key() == "TEXT_INPUT"


def test_unknown_action_is_fatal(browser):
    with pytest.raises(UnknownActionError):
        _run(browser, "NOPE")


def test_home_lists_home_options(browser):
    cursor = _run(browser, db.HOME)

    assert cursor.owner == browser
    assert _keys(cursor) == [key for _, key in db.HOME_OPTIONS]
    assert "Home" in cursor.text
    assert all(o.target is browser for o in cursor.options)


def test_status_ok_and_ko(browser):
    assert "Status OK." in _run(browser, db.STATUS).text

    cursor = _run(DatabaseBrowser(BrokenService()), db.STATUS)
    assert "Status KO." in cursor.text
    assert "[bold red]" in cursor.text
    assert _keys(cursor)[0] == db.HOME


def test_show_databases_renders_bold_bullets(browser):
    cursor = _run(browser, db.SHOW_DATABASES)

    assert "The repository contains the following data bases:\n\n - [bold]logs[/bold]\n - [bold]shop[/bold]" in cursor.text


def test_show_list_without_items_has_no_extra_blank_line(browser):
    browser = browser.with_selection(Selection(database="logs"))

    cursor = _run(browser, db.SHOW_COLLECTIONS)

    assert cursor.text.endswith("The repository contains the following collections:\n")


def test_show_databases_failure_uses_error_message_as_header():
    cursor = _run(DatabaseBrowser(BrokenService()), db.SHOW_DATABASES)

    assert cursor.text == "connection refused\n"
    assert _keys(cursor)[0] == db.HOME


def test_select_database_panel_offers_every_database_plus_none(browser):
    cursor = _run(browser, db.SELECT_DATABASE_PANEL)

    assert [o.label for o in cursor.options] == ["logs", "shop", "[None]"]
    assert all(o.action_key == db.SELECT_DATABASE for o in cursor.options)
    assert cursor.options[1].args == ("shop",)
    assert cursor.options[-1].args == ()


def test_panel_degrades_to_none_option_on_failure():
    cursor = _run(DatabaseBrowser(BrokenService()), db.SELECT_DATABASE_PANEL)

    assert [o.label for o in cursor.options] == ["[None]"]
    assert cursor.text == "connection refused"


def test_select_database_sets_and_clears(browser):
    cursor = _run(browser, db.SELECT_DATABASE, "shop")
    assert cursor.owner.selection.database == "shop"
    assert "Home > shop" in cursor.text

    cleared = _run(cursor.owner, db.SELECT_DATABASE)
    assert cleared.owner.selection.database is None


def test_selection_does_not_leak_into_original_snapshot(browser):
    _run(browser, db.SELECT_DATABASE, "shop")

    assert browser.selection == Selection()


def test_show_collections_requires_database(untouchable):
    cursor = _run(DatabaseBrowser(untouchable), db.SHOW_COLLECTIONS)

    assert cursor.text.endswith("No data base selected.")
    assert _keys(cursor)[0] == db.HOME


def test_show_collections_after_clearing_database(browser):
    selected = _run(browser, db.SELECT_DATABASE, "shop").owner
    cleared = _run(selected, db.SELECT_DATABASE).owner

    cursor = _run(cleared, db.SHOW_COLLECTIONS)

    assert cursor.text.endswith("No data base selected.")


def test_select_collection_panel_counts(browser, catalog):
    browser = browser.with_selection(Selection(database="shop"))

    cursor = _run(browser, db.SELECT_COLLECTION_PANEL)

    assert len(cursor.options) == len(catalog["shop"]) + 1
    assert cursor.options[-1].label == "[None]"
    assert cursor.options[-1].args == ()
    assert all(o.target.selection.database == "shop" for o in cursor.options)


def test_select_collection_panel_requires_database(untouchable):
    cursor = _run(DatabaseBrowser(untouchable), db.SELECT_COLLECTION_PANEL)

    assert cursor.text.endswith("No data base selected.")


def test_select_collection_and_show_elements(browser):
    browser = _run(browser, db.SELECT_DATABASE, "shop").owner
    browser = _run(browser, db.SELECT_COLLECTION, "orders").owner

    cursor = _run(browser, db.SHOW_ELEMENTS)

    assert " - [bold]1001[/bold]\n - [bold]1002[/bold]" in cursor.text


def test_show_elements_requires_collection(untouchable):
    browser = DatabaseBrowser(untouchable, Selection(database="shop"))

    cursor = _run(browser, db.SHOW_ELEMENTS)

    assert cursor.text.endswith("No collection selected.")


def test_select_elements_panel(browser):
    browser = browser.with_selection(Selection(database="shop", collection="orders"))

    cursor = _run(browser, db.SELECT_ELEMENTS_PANEL)

    assert [o.label for o in cursor.options] == ["1001", "1002", "[None]"]
    assert cursor.options[0].action_key == db.SELECT_ELEMENT


def test_select_element_sets_single_chain(browser):
    browser = browser.with_selection(Selection(database="shop", collection="orders"))

    cursor = _run(browser, db.SELECT_ELEMENT, "1001")

    assert cursor.owner.selection.element == ("1001",)
    assert _run(cursor.owner, db.SELECT_ELEMENT).owner.selection.element is None


def test_clearing_collection_clears_element(browser):
    browser = browser.with_selection(Selection(database="shop", collection="orders", element=("1001",)))

    cursor = _run(browser, db.SELECT_COLLECTION)

    assert cursor.owner.selection == Selection(database="shop")


def test_show_selected_single_match_is_verbatim(browser, catalog):
    browser = browser.with_selection(Selection(database="shop", collection="orders", element=("1001",)))

    cursor = _run(browser, db.SHOW_SELECTED)

    doc = render_document(catalog["shop"]["orders"]["1001"])
    assert cursor.text.endswith(f"Item:\n\n{doc}")
    assert "[bold]" not in cursor.text.split("Item:")[1]


def test_show_selected_many_matches_are_separated_and_bold(browser, catalog):
    browser = browser.with_selection(Selection(database="shop", collection="orders", element=("*",)))

    cursor = _run(browser, db.SHOW_SELECTED)

    docs = [render_document(catalog["shop"]["orders"][k]) for k in ("1001", "1002")]
    assert cursor.text.endswith(f"Items:\n\n [bold]{docs[0]}[/bold]\n\n [bold]{docs[1]}[/bold]")


def test_show_selected_requires_element(untouchable):
    browser = DatabaseBrowser(untouchable, Selection(database="shop", collection="orders"))

    cursor = _run(browser, db.SHOW_SELECTED)

    assert cursor.text.endswith("No element selected.")


def test_show_selected_reports_missing_element(browser):
    browser = browser.with_selection(Selection(database="shop", collection="orders", element=("9",)))

    cursor = _run(browser, db.SHOW_SELECTED)

    assert "Cannot find element: No element matches '9'." in cursor.text


def test_create_then_select_round_trip(browser):
    created = _run(browser, db.CREATE_DATABASE, " alpha ")
    assert "Data base 'alpha' created" in created.text

    panel = _run(created.owner, db.SELECT_DATABASE_PANEL)
    option = next(o for o in panel.options if o.label == "alpha")

    selected = asyncio.run(option.target.dispatch(option))
    assert selected.owner.selection.database == "alpha"


def test_create_without_argument(untouchable):
    cursor = _run(DatabaseBrowser(untouchable), db.CREATE_DATABASE)

    assert cursor.text.endswith("Cannot create data base.")


def test_create_failure_shows_service_message(browser):
    cursor = _run(browser, db.CREATE_DATABASE, "shop")

    assert cursor.text.endswith("Data base 'shop' already exists.")


def test_drop_selected_database_clears_selection(browser, service):
    browser = browser.with_selection(Selection(database="shop", collection="orders", element=("1001",)))

    cursor = _run(browser, db.DROP_DATABASE)

    assert "Data base 'shop' dropped" in cursor.text
    assert cursor.owner.selection == Selection()
    assert "shop" not in service.catalog


def test_drop_without_selection(untouchable):
    cursor = _run(DatabaseBrowser(untouchable), db.DROP_DATABASE)

    assert cursor.text.endswith("Cannot drop data base.")


def test_drop_failure_keeps_selection(browser):
    browser = browser.with_selection(Selection(database="ghost"))

    cursor = _run(browser, db.DROP_DATABASE)

    assert cursor.text.endswith("Data base 'ghost' not found.")
    assert cursor.owner.selection.database == "ghost"


def test_free_text_unknown_root_is_ignored(untouchable):
    browser = DatabaseBrowser(untouchable)

    cursor = _run(browser, db.TEXT_INPUT, "foo")

    assert cursor.owner == browser
    assert cursor.text == browser.default_header()


def test_free_text_without_args_goes_home(untouchable):
    browser = DatabaseBrowser(untouchable)

    assert _run(browser, db.TEXT_INPUT).text == browser.default_header()


def test_free_text_forwards_recognized_roots_to_resolver(untouchable):
    seen = []

    async def resolver(root, fragments, browser):
        seen.append((root, fragments))
        return browser.home_headers()

    browser = DatabaseBrowser(untouchable, resolver=resolver)

    _run(browser, db.TEXT_INPUT, " > shop > orders")
    _run(browser, db.TEXT_INPUT, "* > 1001")
    _run(browser, db.TEXT_INPUT, "*")

    assert seen == [("", ["shop", "orders"]), ("*", ["1001"]), ("*", [])]


def test_absolute_plus_path_creates_database(browser, service):
    cursor = _run(browser, db.TEXT_INPUT, "> + beta")

    assert "Data base 'beta' created" in cursor.text
    assert "beta" in service.catalog


@pytest.mark.parametrize("text", ["+x", "+ beta", "shop > orders"])
def test_free_text_other_roots_leave_view_unchanged(untouchable, text):
    browser = DatabaseBrowser(untouchable)

    cursor = _run(browser, db.TEXT_INPUT, text)

    assert cursor.owner == browser
    assert cursor.text == browser.default_header()
    assert _keys(cursor) == [key for _, key in db.HOME_OPTIONS]


def test_markup_in_data_is_escaped(service):
    service.catalog["[red]x"] = {}

    cursor = _run(DatabaseBrowser(service), db.SHOW_DATABASES)

    assert "\\[red]x" in cursor.text


@pytest.mark.parametrize(
    "action",
    [db.SHOW_COLLECTIONS, db.SHOW_ELEMENTS],
)
def test_show_lists_turn_service_failure_into_header(action):
    browser = DatabaseBrowser(BrokenService(), Selection(database="shop", collection="orders"))

    cursor = _run(browser, action)

    assert cursor.text == "connection refused\n"
    assert "[bold]" not in cursor.text
    assert _keys(cursor) == [key for _, key in db.HOME_OPTIONS]


@pytest.mark.parametrize(
    "action, select_key",
    [
        (db.SELECT_COLLECTION_PANEL, db.SELECT_COLLECTION),
        (db.SELECT_ELEMENTS_PANEL, db.SELECT_ELEMENT),
    ],
)
def test_panels_degrade_to_none_option_on_failure(action, select_key):
    browser = DatabaseBrowser(BrokenService(), Selection(database="shop", collection="orders"))

    cursor = _run(browser, action)

    assert cursor.text == "connection refused"
    assert [o.label for o in cursor.options] == ["[None]"]
    assert cursor.options[0].action_key == select_key
    assert cursor.options[0].args == ()
