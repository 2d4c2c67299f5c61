"""
Output helpers shared by matchset commands.

- :mod:`matchset.utils.logger`: diagnostics on stderr
- :mod:`matchset.utils.console`: command results on stdout
"""

from __future__ import annotations

from matchset.utils.logger import get_logger, setup_logging
from matchset.utils.console import (
    configure_console,
    print_error,
    print_plain,
    print_success,
    print_table,
    print_warning,
)

__all__ = [
    "configure_console",
    "get_logger",
    "print_error",
    "print_plain",
    "print_success",
    "print_table",
    "print_warning",
    "setup_logging",
]
