"""Path expressions typed at the prompt.

A path is a ``>``-delimited list of fragments. The fragment before the first
delimiter is the root selector:

- ``""`` (e.g. ``> shop > orders > 42``): absolute, fragments name the data
  base, the collection, then the element identifier chain.
- ``"*"`` (e.g. ``* > 42``): relative, fragments continue below the deepest
  level already selected.

An absolute path made of one ``+name`` fragment creates that data base
instead of selecting it.

The deepest resolved level decides the view: element -> item view,
collection -> its elements, data base -> its collections, nothing -> all
data bases.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import SelectionError
from .state import Selection

if TYPE_CHECKING:
    from .screen import RenderState
    from .screens.database import DatabaseBrowser

logger = logging.getLogger(__name__)

PATH_DELIMITER = ">"
ABSOLUTE_ROOT = ""
RELATIVE_ROOT = "*"
ROOT_SELECTORS = (ABSOLUTE_ROOT, RELATIVE_ROOT)
# Single absolute fragment that creates a data base, e.g. "> + inventory".
CREATE_PREFIX = "+"


def clean_fragments(fragments: list[str]) -> list[str]:
    """Trim fragments and drop empty ones."""
    return [f.strip() for f in fragments if f.strip()]


def _start_levels(root: str, current: Selection) -> list[str]:
    """Selection levels the fragments are appended to."""
    if root == ABSOLUTE_ROOT:
        return []
    if root != RELATIVE_ROOT:
        raise SelectionError(f"Unknown path root '{root}'.")

    levels: list[str] = []
    if current.database is not None:
        levels.append(current.database)
        if current.collection is not None:
            levels.append(current.collection)
            levels.extend(current.element or ())
    return levels


def build_selection(root: str, fragments: list[str], current: Selection) -> Selection:
    """Compute the selection a path expression points at.

    Args:
        root: Root selector, ``""`` or ``"*"``
        fragments: Raw fragments following the root
        current: Selection the path is relative to

    Returns:
        New selection; levels the path does not reach are cleared
    """
    levels = _start_levels(root, current) + clean_fragments(fragments)

    selection = Selection()
    if levels:
        selection = selection.with_database(levels[0])
    if len(levels) > 1:
        selection = selection.with_collection(levels[1])
    if len(levels) > 2:
        selection = selection.with_element(levels[2:])
    return selection


async def resolve_path(root: str, fragments: list[str], browser: DatabaseBrowser) -> RenderState:
    """Default path resolver: select what the path names and show it."""
    cleaned = clean_fragments(fragments)
    if root == ABSOLUTE_ROOT and len(cleaned) == 1 and cleaned[0].startswith(CREATE_PREFIX):
        return await browser.create_database((cleaned[0][len(CREATE_PREFIX):],))

    try:
        selection = build_selection(root, fragments, browser.selection)
    except SelectionError as e:
        return browser.home(browser.info_headers(e.message))

    logger.debug("Path %r %r resolved to %s", root, fragments, selection)
    target = browser.with_selection(selection)

    if selection.element:
        return await target.show_selected()
    if selection.collection is not None:
        return await target.show_elements()
    if selection.database is not None:
        return await target.show_collections()
    return await target.show_databases()
