"""
CLI subcommands for matchset.

Shared helpers that turn command-line operands into constraint sets live
here so that every command builds them the same way.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from matchset.core import ConstraintSet
from matchset.models import Candidate, Requirement
from matchset.utils.logger import get_logger

logger = get_logger("commands")

#: Package name used for requirements typed on the command line.
CLI_PACKAGE_NAME = "<cli>"


def requirements_to_constraints(
    specs: Sequence[str],
    *,
    build_number: Optional[int] = None,
    excludes: Iterable[str] = (),
) -> ConstraintSet:
    """Return the constraint set satisfying every spec and no exclude.

    Args:
        specs: PEP 440 specifier strings; all must hold.
        build_number: Exact build number every candidate must have.
        excludes: PEP 440 specifier strings; none may hold.

    Returns:
        ``full()`` narrowed by each requirement and by the complement of
        each exclusion.

    Raises:
        ParseError: A specifier string is invalid.
    """
    constraint = ConstraintSet.full()

    for spec in specs:
        constraint = constraint.intersection(
            Requirement(CLI_PACKAGE_NAME, spec).to_constraints()
        )

    if build_number is not None:
        constraint = constraint.intersection(
            Requirement(CLI_PACKAGE_NAME, build_number=build_number).to_constraints()
        )

    for spec in excludes:
        excluded = Requirement(CLI_PACKAGE_NAME, spec).to_constraints()
        constraint = constraint.intersection(excluded.complement())

    logger.debug("Combined requirements: %s", constraint)
    return constraint


def parse_candidates(values: Iterable[str]) -> Sequence[Candidate]:
    """Parse ``VERSION`` / ``VERSION=BUILD`` operands into candidates."""
    return [Candidate.from_string(value) for value in values]
