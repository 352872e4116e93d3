"""TUI (Terminal User Interface) module for dbnav.

Provides a menu/cursor dispatch loop and the screens built on it.
"""
from .router import Router
from .screen import ActionRequest, RenderState, Screen
from .state import Selection

__all__ = ["ActionRequest", "RenderState", "Router", "Screen", "Selection"]
