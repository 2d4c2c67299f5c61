"""
Terminal output for matchset commands.

Command results go to stdout through a single Rich console. Status lines
carry a plain-text prefix (``[OK]``, ``[ERROR]``, ``[WARNING]``) so they
stay readable with color disabled, and constraint text is never parsed as
Rich markup: ``[`` can appear in user-supplied specifiers and messages.
Diagnostics belong to :mod:`matchset.utils.logger`, not here.
"""

from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

MATCHSET_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "match": "green",
        "no_match": "red",
        "title": "bold",
    }
)

_console: Optional[Console] = None


def configure_console(*, color: bool = True) -> Console:
    """Create the console used by every output helper.

    Args:
        color: ``False`` disables styling. ``True`` leaves the choice to
            Rich, which checks the terminal and ``NO_COLOR``.
    """
    global _console

    _console = Console(
        theme=MATCHSET_THEME,
        no_color=None if color else True,
        highlight=False,
    )
    return _console


def get_console() -> Console:
    """Return the configured console, creating a default one on first use."""
    if _console is None:
        return configure_console()
    return _console


def print_success(message: str) -> None:
    get_console().print(f"[OK] {message}", style="success", markup=False)


def print_error(message: str) -> None:
    get_console().print(f"[ERROR] {message}", style="error", markup=False)


def print_warning(message: str) -> None:
    get_console().print(f"[WARNING] {message}", style="warning", markup=False)


def print_plain(message: str) -> None:
    """Print a result line exactly as given."""
    get_console().print(message, markup=False)


def print_table(
    rows: Sequence[Mapping[str, str]],
    *,
    headers: Sequence[str],
    title: Optional[str] = None,
    row_style: Optional[Callable[[Mapping[str, str]], Optional[str]]] = None,
) -> None:
    """Render result rows under ``headers``; nothing is printed for no rows.

    Cells are added as :class:`rich.text.Text` so brackets in constraint
    text are shown literally.
    """
    if not rows:
        return

    console = get_console()
    table = Table(
        title=Text(title) if title else None,
        title_style="title",
        header_style="bold",
    )
    for header in headers:
        table.add_column(header, overflow="fold")

    for row in rows:
        table.add_row(
            *(console.render_str(row.get(h, ""), markup=False) for h in headers),
            style=row_style(row) if row_style else None,
        )

    console.print(table)
