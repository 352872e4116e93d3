from __future__ import annotations

import os
import sys

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `dbnav/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()


@pytest.fixture
def catalog() -> dict:
    """Small two-data-base catalog used across browser tests."""
    return {
        "shop": {
            "orders": {
                "1001": {"customer": "ada", "total": 42},
                "1002": {"customer": "grace", "total": 12},
            },
            "customers": {
                "ada": {"name": "Ada"},
            },
        },
        "logs": {},
    }


@pytest.fixture
def service(catalog):
    from dbnav.memory import MemoryService

    return MemoryService(catalog)


@pytest.fixture
def browser(service):
    from dbnav.tui.screens.database import DatabaseBrowser

    return DatabaseBrowser(service)


class UntouchableService:
    """Service whose every call fails the test."""

    def __getattr__(self, name):
        async def _fail(*args, **kwargs):
            raise AssertionError(f"service.{name} should not be called")

        return _fail


@pytest.fixture
def untouchable():
    return UntouchableService()
