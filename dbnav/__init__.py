"""dbnav: interactive terminal browser for data bases, collections and elements."""

__version__ = "0.1.0"
