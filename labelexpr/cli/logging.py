"""Logging setup for the CLI.

Library modules only create loggers; handlers are installed here, on the
package logger, and removed again when the command finishes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "labelexpr"


@dataclass(frozen=True, slots=True)
class PreviousLoggingState:
    level: int
    handlers: list[logging.Handler]
    propagate: bool


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int) -> PreviousLoggingState:
    logger = logging.getLogger(_PACKAGE_LOGGER)
    previous = PreviousLoggingState(
        level=logger.level,
        handlers=list(logger.handlers),
        propagate=logger.propagate,
    )

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbosity >= 2,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.handlers = [handler]
    logger.setLevel(_level_for_verbosity(verbosity))
    logger.propagate = False
    return previous


def restore_logging(previous: PreviousLoggingState) -> None:
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.handlers = previous.handlers
    logger.setLevel(previous.level)
    logger.propagate = previous.propagate
