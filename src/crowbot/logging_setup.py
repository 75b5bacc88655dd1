"""Logging bootstrap shared by the CLI and any embedding bot process."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """
    Route all `crowbot.*` loggers through a RichHandler on stderr.

    Safe to call more than once; only the first call installs handlers, later
    calls just adjust the level.
    """
    global _CONFIGURED
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    if _CONFIGURED:
        logging.getLogger().setLevel(numeric)
        return

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(level=numeric, format="%(name)s: %(message)s", datefmt="[%X]", handlers=[handler])

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _CONFIGURED = True
