"""
Constraint sets: the version-set value consumed by a PubGrub-style solver.

A :class:`ConstraintSet` is a disjunction (OR) of
:class:`~matchset.core.element.ConjunctiveElement` groups, i.e. a
constraint in disjunctive normal form. It implements the full version-set
contract: ``empty``, ``full``, ``singleton``, ``complement``,
``intersection``, ``union`` and ``contains``, plus structural equality and
hashing.

Canonical form
--------------
Every construction normalizes the groups so that two sets matching the
same candidates are structurally equal:

1. groups equal to the canonical empty element are dropped;
2. a group matching everything collapses the set to :meth:`full`;
3. the remaining groups are regrouped over the version axis: version
   space is cut into atoms at every range boundary, each atom is mapped
   to the union of the build-number ranges of the groups covering it,
   and atoms sharing the same build-number range are merged;
4. groups are sorted by :meth:`ConjunctiveElement.sort_key`.

Because of this, ``x.complement().complement() == x`` and the other
boolean-algebra laws hold as plain ``==`` comparisons.

Typical usage::

    >>> from matchset.models import Candidate, Requirement
    >>> a = Requirement("numpy", ">=1.0,<2.0").to_constraints()
    >>> b = Requirement("numpy", ">=1.5,<3.0").to_constraints()
    >>> combined = a.intersection(b)
    >>> combined.contains(Candidate("1.7"))
    True
    >>> str(combined)
    'version >=1.5,<2.0'
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Sequence, Set, Tuple

from matchset.constants import (
    DEFAULT_EXPANSION_WARNING_THRESHOLD,
    DISPLAY_ANY,
    DISPLAY_EMPTY,
    DISPLAY_GROUP_SEPARATOR,
)
from matchset.core.element import ELEMENT_FIELDS, ConjunctiveElement
from matchset.core.ranges import Range
from matchset.core.translate import requirement_to_element
from matchset.utils.logger import get_logger

if TYPE_CHECKING:
    from matchset.models.candidate import Candidate
    from matchset.models.requirement import Requirement

logger = get_logger("core.constraints")


# ---------------------------------------------------------------------------
# Canonicalization
# ---------------------------------------------------------------------------


def _atoms(points: Sequence[Any]) -> List[Range[Any]]:
    """Cut a field's value space into the regions delimited by ``points``.

    For sorted points ``p1 < ... < pn`` the atoms are ``<p1``, ``==p1``,
    ``>p1,<p2``, ..., ``==pn``, ``>pn``. No atom straddles a point, so each
    atom is either inside or outside any range bounded by those points.
    """
    if not points:
        return [Range.any()]

    atoms: List[Range[Any]] = [Range.lower_than(points[0])]
    for low, high in zip(points, points[1:]):
        atoms.append(Range.equal(low))
        atoms.append(Range.strictly_higher_than(low).intersection(Range.lower_than(high)))
    atoms.append(Range.equal(points[-1]))
    atoms.append(Range.strictly_higher_than(points[-1]))
    return atoms


# Regrouping cuts one field into atoms and collects the other field's ranges
# per atom, so it is defined for exactly two fields. Unpacking fails at
# import time if ELEMENT_FIELDS grows.
_AXIS_FIELD, _COLUMN_FIELD = ELEMENT_FIELDS


def _regroup(groups: Set[ConjunctiveElement]) -> Set[ConjunctiveElement]:
    """Rewrite ``groups`` as one group per distinct column range.

    The axis field is cut into atoms at every bound the groups use; atoms
    allowing the same column range are merged into a single group.
    """
    points = sorted(
        {point for group in groups for point in getattr(group, _AXIS_FIELD).bounds()}
    )

    # column range -> union of the axis atoms allowing it
    columns: Dict[Range[Any], Range[Any]] = {}
    for atom in _atoms(points):
        allowed: Range[Any] = Range.none()
        for group in groups:
            if not getattr(group, _AXIS_FIELD).intersection(atom).is_empty():
                allowed = allowed.union(getattr(group, _COLUMN_FIELD))
        if allowed.is_empty():
            continue
        columns[allowed] = columns.get(allowed, Range.none()).union(atom)

    return {
        ConjunctiveElement(**{_AXIS_FIELD: axis, _COLUMN_FIELD: column})
        for column, axis in columns.items()
    }


def _canonical_groups(
    groups: Iterable[ConjunctiveElement],
) -> Tuple[ConjunctiveElement, ...]:
    unique: Set[ConjunctiveElement] = set()
    for group in groups:
        if group.is_empty():
            continue
        if group.is_any():
            return (ConjunctiveElement.any(),)
        unique.add(group)

    if len(unique) > 1:
        unique = _regroup(unique)
        if any(group.is_any() for group in unique):
            return (ConjunctiveElement.any(),)

    return tuple(sorted(unique, key=ConjunctiveElement.sort_key))


# ---------------------------------------------------------------------------
# Constraint set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstraintSet:
    """Immutable OR of conjunctive elements.

    Attributes:
        groups: Canonical group tuple. An empty tuple matches nothing; a
            single unconstrained group matches everything.
    """

    groups: Tuple[ConjunctiveElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "groups", _canonical_groups(self.groups))

    # ------------------------------------------------------------------
    # Construction primitives
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "ConstraintSet":
        """Return the set that matches no candidate."""
        return cls(())

    @classmethod
    def full(cls) -> "ConstraintSet":
        """Return the set that matches every candidate."""
        return cls((ConjunctiveElement.any(),))

    @classmethod
    def singleton(cls, candidate: "Candidate") -> "ConstraintSet":
        """Return the set that matches exactly ``candidate``."""
        return cls(
            (
                ConjunctiveElement(
                    version=Range.equal(candidate.version),
                    build_number=Range.equal(candidate.build_number),
                ),
            )
        )

    @classmethod
    def from_element(cls, element: ConjunctiveElement) -> "ConstraintSet":
        return cls((element,))

    @classmethod
    def from_requirement(cls, requirement: "Requirement") -> "ConstraintSet":
        """Return the single-group set matching ``requirement``."""
        return cls.from_element(requirement_to_element(requirement))

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def complement(self) -> "ConstraintSet":
        """Return the set of candidates not matched by this set.

        ``NOT (g1 OR ... OR gn)`` is expanded by De Morgan into the
        conjunction of every group's negation alternatives, then
        distributed back into DNF through a cartesian product.
        """
        if not self.groups:
            return ConstraintSet.full()

        return self._expand(
            [group.negations() for group in self.groups],
            operation="complement",
        )

    def intersection(self, other: "ConstraintSet") -> "ConstraintSet":
        """Return the set of candidates matched by both sets."""
        return self._expand([self.groups, other.groups], operation="intersection")

    def union(self, other: "ConstraintSet") -> "ConstraintSet":
        """Return the set of candidates matched by either set."""
        return self.complement().intersection(other.complement()).complement()

    def contains(self, candidate: "Candidate") -> bool:
        """Return True if any group matches ``candidate``."""
        return any(group.contains(candidate) for group in self.groups)

    def is_empty(self) -> bool:
        return not self.groups

    def is_full(self) -> bool:
        return len(self.groups) == 1 and self.groups[0].is_any()

    def is_disjoint(self, other: "ConstraintSet") -> bool:
        """Return True if no candidate is matched by both sets."""
        return self.intersection(other).is_empty()

    def subset_of(self, other: "ConstraintSet") -> bool:
        """Return True if every candidate matched here is matched by ``other``."""
        return self == self.intersection(other)

    @staticmethod
    def _expand(
        choices: Sequence[Sequence[ConjunctiveElement]],
        *,
        operation: str,
    ) -> "ConstraintSet":
        """AND together one pick from each choice list, for every combination."""
        combinations = 1
        for options in choices:
            combinations *= len(options)

        if combinations > DEFAULT_EXPANSION_WARNING_THRESHOLD:
            logger.warning(
                "Large %s expansion: %d combinations over %d groups",
                operation,
                combinations,
                len(choices),
            )
        else:
            logger.debug("%s expansion: %d combinations", operation, combinations)

        groups: List[ConjunctiveElement] = []
        for picks in itertools.product(*choices):
            group = reduce(ConjunctiveElement.intersection, picks)
            if group.is_any():
                return ConstraintSet.full()
            if not group.is_empty():
                groups.append(group)

        return ConstraintSet(tuple(groups))

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __and__(self, other: object) -> "ConstraintSet":
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self.intersection(other)

    def __or__(self, other: object) -> "ConstraintSet":
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self.union(other)

    def __invert__(self) -> "ConstraintSet":
        return self.complement()

    def __contains__(self, candidate: object) -> bool:
        return self.contains(candidate)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def to_display_text(self, *, show_unconstrained: bool = False) -> str:
        """Render the set for logs and conflict explanations."""
        if self.is_empty():
            return DISPLAY_EMPTY
        if self.is_full():
            return DISPLAY_ANY
        return DISPLAY_GROUP_SEPARATOR.join(
            group.to_display_text(show_unconstrained=show_unconstrained)
            for group in self.groups
        )

    def to_json(self) -> List[Dict[str, Any]]:
        """Return the groups as a JSON-serializable list."""
        return [group.to_json() for group in self.groups]

    def __str__(self) -> str:
        return self.to_display_text()

    def __repr__(self) -> str:
        return f"ConstraintSet({self.to_display_text()!r})"
