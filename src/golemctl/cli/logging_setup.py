"""Logging configuration for the CLI.

Log records are rendered by Rich on stderr, never on stdout, so machine
mode output stays parseable.  Falls back to a plain stderr handler when
Rich is unavailable.
"""

from __future__ import annotations

import logging

from golemctl.cli.console import get_rich_console
from golemctl.exceptions import EnvironmentError

HANDLER_NAME = "golemctl-stderr"

_LEVELS: tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int) -> int:
    """Map the ``-v`` count to a logging level (capped at DEBUG)."""
    return _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]


def configure_logging(verbosity: int = 0) -> None:
    """Attach a single stderr handler to the ``golemctl`` logger.

    Handlers installed by others (test capture, embedding applications)
    are left in place and do not count as ours.
    """
    logger = logging.getLogger("golemctl")
    logger.setLevel(level_for_verbosity(verbosity))
    logger.propagate = False

    if any(handler.get_name() == HANDLER_NAME for handler in logger.handlers):
        return

    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        handler = RichHandler(console=get_rich_console(), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    handler.set_name(HANDLER_NAME)
    logger.addHandler(handler)
