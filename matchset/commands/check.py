"""Check command implementation for matchset.

Checks concrete candidates against a set of requirements on one package.
The requirements are combined with the constraint algebra (every
``--spec`` intersected, every ``--exclude`` removed through its
complement) and each candidate is tested for membership.

Typical usage::

    # Does 1.7 satisfy both ranges?
    $ matchset check 1.7 -s ">=1.0,<2.0" -s ">=1.5,<3.0"

    # Pin the build number and exclude a broken release
    $ matchset check 1.7=2 1.8=2 -s ">=1.0" -b 2 -x "==1.8"

    # Machine-readable output
    $ matchset check 1.7 -s ">=1.0" --format json
"""

from __future__ import annotations

import sys
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

import click

from matchset.constants import OUTPUT_FORMATS
from matchset.core import ConstraintSet
from matchset.models import Candidate
from matchset.exceptions import MatchSetError
from matchset.context import pass_context, MatchSetContext
from matchset.commands import parse_candidates, requirements_to_constraints
from matchset.utils import (
    get_logger,
    print_error,
    print_plain,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.check")


@click.command()
@click.argument("candidates", nargs=-1, required=True)
@click.option(
    "--spec",
    "-s",
    "specs",
    multiple=True,
    help="Version specifier candidates must satisfy (repeatable).",
)
@click.option(
    "--build-number",
    "-b",
    type=click.IntRange(min=0),
    default=None,
    help="Exact build number candidates must have.",
)
@click.option(
    "--exclude",
    "-x",
    "excludes",
    multiple=True,
    help="Version specifier candidates must not satisfy (repeatable).",
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
def check(
    ctx: MatchSetContext,
    candidates: Tuple[str, ...],
    specs: Tuple[str, ...],
    build_number: Optional[int],
    excludes: Tuple[str, ...],
    output_format: Optional[str],
) -> None:
    """Check CANDIDATES (``VERSION`` or ``VERSION=BUILD``) against requirements.

    Exits 0 if every candidate matches, 1 otherwise.
    """
    output_format = (output_format or ctx.config.default_format).lower()

    try:
        parsed = parse_candidates(candidates)
        constraint = requirements_to_constraints(
            specs,
            build_number=build_number,
            excludes=excludes,
        )
    except MatchSetError as e:
        print_error(f"{e}")
        sys.exit(1)

    results = evaluate_candidates(constraint, parsed)
    _render(
        constraint,
        results,
        output_format,
        show_unconstrained=ctx.config.show_unconstrained,
    )

    sys.exit(0 if all(matched for _, matched in results) else 1)


def evaluate_candidates(
    constraint: ConstraintSet,
    candidates: Sequence[Candidate],
) -> List[Tuple[Candidate, bool]]:
    """Return ``(candidate, matches)`` for every candidate, in order."""
    results = [(candidate, constraint.contains(candidate)) for candidate in candidates]
    logger.debug(
        "%d of %d candidates match %s",
        sum(1 for _, matched in results if matched),
        len(results),
        constraint,
    )
    return results


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _render(
    constraint: ConstraintSet,
    results: List[Tuple[Candidate, bool]],
    output_format: str,
    *,
    show_unconstrained: bool,
) -> None:
    text = constraint.to_display_text(show_unconstrained=show_unconstrained)

    if output_format == "json":
        payload: Dict[str, Any] = {
            "constraint": text,
            "groups": constraint.to_json(),
            "candidates": [
                {"candidate": candidate.to_string(), "matches": matched}
                for candidate, matched in results
            ],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    if output_format == "simple":
        for candidate, matched in results:
            print_plain(f"{candidate.to_string()}: {'match' if matched else 'no match'}")
        return

    if constraint.is_empty():
        print_warning("Requirements are unsatisfiable; no candidate can match")

    print_table(
        [
            {"Candidate": candidate.to_string(), "Matches": "yes" if matched else "no"}
            for candidate, matched in results
        ],
        headers=["Candidate", "Matches"],
        title=f"Constraint: {text}",
        row_style=lambda row: "match" if row["Matches"] == "yes" else "no_match",
    )

    if all(matched for _, matched in results):
        print_success("All candidates match")
