"""
Logging for matchset.

Library modules only call :func:`get_logger`; nothing is printed unless
the CLI calls :func:`setup_logging`. Records are rendered on stderr by a
Rich handler so they never mix with command output on stdout.

Verbosity follows the CLI's ``-v`` count:

====  =========  ============================================
``0``  WARNING    large complement/intersection expansions
``1``  INFO       configuration loading
``2``  DEBUG      per-operation expansion sizes, parsed input
``3``  DEBUG      as above, with timestamps and logger names
====  =========  ============================================
"""

from __future__ import annotations

import logging
from typing import IO, Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER_NAME = "matchset"

#: Logging level for each ``-v`` count; higher counts reuse the last entry.
VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

#: ``-v`` count from which timestamps and logger names are shown.
DETAILED_VERBOSITY = 3

logging.getLogger(_ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def level_for_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level."""
    index = min(max(verbose, 0), len(VERBOSITY_LEVELS) - 1)
    return VERBOSITY_LEVELS[index]


def setup_logging(
    verbose: int = 0,
    *,
    color: bool = True,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Route matchset records to stderr (or ``stream``).

    Replaces any handler installed by a previous call, so the CLI can be
    invoked repeatedly in one process.

    Args:
        verbose: ``-v`` count, see :data:`VERBOSITY_LEVELS`.
        color: ``False`` disables styling; ``True`` defers to Rich and
            ``NO_COLOR``.
        stream: Destination; defaults to the process's current stderr.

    Returns:
        The installed handler.
    """
    level = level_for_verbosity(verbose)
    detailed = verbose >= DETAILED_VERBOSITY

    console = Console(
        file=stream,
        stderr=stream is None,
        no_color=None if color else True,
        highlight=False,
    )
    handler = RichHandler(
        console=console,
        level=level,
        show_time=detailed,
        show_path=detailed,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(
        logging.Formatter("%(name)s: %(message)s" if detailed else "%(message)s")
    )

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False

    root_logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the ``matchset`` namespace.

    ``"core.constraints"`` and ``"matchset.core.constraints"`` name the
    same logger.
    """
    if not name or name == _ROOT_LOGGER_NAME:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
