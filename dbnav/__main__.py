"""Entrypoint for `python -m dbnav`."""

from .cli import main


if __name__ == "__main__":
    main()
