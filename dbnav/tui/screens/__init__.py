"""Concrete screens."""
from .database import DatabaseBrowser

__all__ = ["DatabaseBrowser"]
