"""Rich-backed logging for the ``otpclient`` namespace.

A single handler lives on the package logger. Module loggers carry no
handlers of their own and propagate to it, so one ``set_level`` call
switches the verbosity of the whole library.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "otpclient"


def _make_handler(*, rich: bool) -> logging.Handler:
    if rich:
        # RichHandler renders time and level itself
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    return handler


def configure(level: int = logging.INFO, *, rich: bool = True) -> logging.Logger:
    """Install the package handler if missing; later calls only adjust the level."""
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        package.addHandler(_make_handler(rich=rich))
        package.propagate = False
    package.setLevel(level)
    return package


def get_logger(name: str) -> logging.Logger:
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        raise ValueError(f"Logger {name!r} is outside the {PACKAGE_LOGGER!r} namespace")
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        configure()
    return logging.getLogger(name)


def set_level(level: int) -> None:
    configure(level)
