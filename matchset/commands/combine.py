"""Combine command implementation for matchset.

Builds a constraint set from several operands and prints its canonical
form. Operands are version specifiers (``--spec``) and exact pins
(``--pin VERSION=BUILD``, a singleton set). By default the operands are
intersected; ``--union`` unites them instead and ``--complement`` negates
the result.

Typical usage::

    $ matchset combine -s ">=1.0,<2.0" -s ">=1.5,<3.0"
    $ matchset combine -s "<1.0" -s ">=2.0" --union
    $ matchset combine -p 1.2.3=1 --complement --format json
"""

from __future__ import annotations

import sys
import json
from functools import reduce
from typing import List, Optional, Tuple

import click

from matchset.constants import OUTPUT_FORMATS
from matchset.core import ConstraintSet
from matchset.exceptions import MatchSetError
from matchset.context import pass_context, MatchSetContext
from matchset.commands import parse_candidates, requirements_to_constraints
from matchset.utils import get_logger, print_error, print_plain, print_table

logger = get_logger("commands.combine")


@click.command()
@click.option(
    "--spec",
    "-s",
    "specs",
    multiple=True,
    help="Version specifier operand (repeatable).",
)
@click.option(
    "--pin",
    "-p",
    "pins",
    multiple=True,
    help="Exact VERSION=BUILD operand (repeatable).",
)
@click.option(
    "--union",
    "use_union",
    is_flag=True,
    help="Unite the operands instead of intersecting them.",
)
@click.option(
    "--complement",
    is_flag=True,
    help="Negate the combined result.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Output format (defaults to the configured format).",
)
@pass_context
def combine(
    ctx: MatchSetContext,
    specs: Tuple[str, ...],
    pins: Tuple[str, ...],
    use_union: bool,
    complement: bool,
    output_format: Optional[str],
) -> None:
    """Combine requirements and print the resulting constraint set."""
    output_format = (output_format or ctx.config.default_format).lower()

    if not specs and not pins:
        raise click.UsageError("Provide at least one --spec or --pin operand.")

    try:
        operands = build_operands(specs, pins)
    except MatchSetError as e:
        print_error(f"{e}")
        sys.exit(1)

    result = combine_operands(operands, union=use_union, complement=complement)
    _render(result, output_format, show_unconstrained=ctx.config.show_unconstrained)


def build_operands(specs: Tuple[str, ...], pins: Tuple[str, ...]) -> List[ConstraintSet]:
    """Return one constraint set per ``--spec`` and ``--pin`` operand."""
    operands = [requirements_to_constraints([spec]) for spec in specs]
    operands.extend(ConstraintSet.singleton(c) for c in parse_candidates(pins))
    return operands


def combine_operands(
    operands: List[ConstraintSet],
    *,
    union: bool = False,
    complement: bool = False,
) -> ConstraintSet:
    """Fold ``operands`` with intersection (or union), then optionally negate."""
    if union:
        result = reduce(ConstraintSet.union, operands, ConstraintSet.empty())
    else:
        result = reduce(ConstraintSet.intersection, operands, ConstraintSet.full())

    if complement:
        result = result.complement()

    logger.debug(
        "Combined %d operands (%s%s): %s",
        len(operands),
        "union" if union else "intersection",
        ", complemented" if complement else "",
        result,
    )
    return result


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _render(result: ConstraintSet, output_format: str, *, show_unconstrained: bool) -> None:
    text = result.to_display_text(show_unconstrained=show_unconstrained)

    if output_format == "json":
        payload = {
            "constraint": text,
            "groups": result.to_json(),
            "is_empty": result.is_empty(),
            "is_full": result.is_full(),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    if output_format == "simple":
        print_plain(text)
        return

    rows = [
        {"#": str(index), "version": group["version"], "build_number": group["build_number"]}
        for index, group in enumerate(result.to_json(), start=1)
    ]
    if rows:
        print_table(
            rows,
            headers=["#", "version", "build_number"],
            title=f"Constraint: {text}",
        )
    else:
        print_plain(f"Constraint: {text} (matches nothing)")
