"""
Conjunctive element: a single AND term of a constraint set.

An element holds one :class:`~matchset.core.ranges.Range` per matchable
field and matches a candidate when every field range contains the
candidate's attribute of the same name. Every element operation iterates
over :data:`ELEMENT_FIELDS`, so a new matchable attribute only needs a
new dataclass field and an entry in that tuple. Canonical regrouping in
:mod:`matchset.core.constraints` supports exactly two fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, Final, Iterator, List, Tuple

from packaging.version import Version

from matchset.constants import DISPLAY_ANY, DISPLAY_FIELD_SEPARATOR
from matchset.core.ranges import Range

if TYPE_CHECKING:
    from matchset.models.candidate import Candidate

#: Matchable fields, in canonical order.
ELEMENT_FIELDS: Final[Tuple[str, ...]] = ("version", "build_number")


@dataclass(frozen=True)
class ConjunctiveElement:
    """Constraint that holds when every field constraint holds.

    An element with any empty field is normalized to :meth:`none`, the
    canonical empty element, so that two empty elements always compare
    equal regardless of which field caused the emptiness.

    Attributes:
        version: Allowed versions.
        build_number: Allowed build numbers.
    """

    version: Range[Version] = field(default_factory=Range.any)
    build_number: Range[int] = field(default_factory=Range.any)

    def __post_init__(self) -> None:
        if any(r.is_empty() for _, r in self.ranges()):
            for name in ELEMENT_FIELDS:
                object.__setattr__(self, name, Range.none())

    @classmethod
    def none(cls) -> "ConjunctiveElement":
        """Return the canonical element that matches nothing."""
        return cls(**{name: Range.none() for name in ELEMENT_FIELDS})

    @classmethod
    def any(cls) -> "ConjunctiveElement":
        """Return the element that matches everything."""
        return cls(**{name: Range.any() for name in ELEMENT_FIELDS})

    def ranges(self) -> Iterator[Tuple[str, Range[Any]]]:
        """Yield ``(field name, range)`` pairs in canonical field order."""
        for name in ELEMENT_FIELDS:
            yield name, getattr(self, name)

    def is_empty(self) -> bool:
        return self == ConjunctiveElement.none()

    def is_any(self) -> bool:
        return all(r.is_any() for _, r in self.ranges())

    def intersection(self, other: "ConjunctiveElement") -> "ConjunctiveElement":
        """Return the field-wise intersection, collapsing to :meth:`none`."""
        merged: Dict[str, Range[Any]] = {}
        for name, own in self.ranges():
            combined = own.intersection(getattr(other, name))
            if combined.is_empty():
                return ConjunctiveElement.none()
            merged[name] = combined
        return ConjunctiveElement(**merged)

    def negations(self) -> List["ConjunctiveElement"]:
        """Return the De Morgan alternatives of this element.

        ``NOT (a AND b)`` is ``(NOT a) OR (NOT b)``. Each alternative
        negates a single field and leaves the others unconstrained;
        fields whose negation is empty contribute nothing.
        """
        alternatives: List[ConjunctiveElement] = []
        for name, own in self.ranges():
            negated = own.negate()
            if not negated.is_empty():
                alternatives.append(replace(ConjunctiveElement.any(), **{name: negated}))
        return alternatives

    def contains(self, candidate: "Candidate") -> bool:
        """Return True if every field range contains the candidate's value."""
        return all(r.contains(getattr(candidate, name)) for name, r in self.ranges())

    def sort_key(self) -> Tuple[Any, ...]:
        """Lexicographic key over the field ranges; defines canonical order."""
        return tuple(r.sort_key() for _, r in self.ranges())

    def to_display_text(self, *, show_unconstrained: bool = False) -> str:
        """Render the element as ``version <range> and build_number <range>``.

        Args:
            show_unconstrained: Also render fields that match anything.
        """
        if self.is_any() and not show_unconstrained:
            return DISPLAY_ANY

        parts = [
            f"{name} {r}"
            for name, r in self.ranges()
            if show_unconstrained or not r.is_any()
        ]
        return DISPLAY_FIELD_SEPARATOR.join(parts)

    def to_json(self) -> Dict[str, str]:
        """Return a JSON-serializable mapping of field name to range text."""
        return {name: str(r) for name, r in self.ranges()}

    def __str__(self) -> str:
        return self.to_display_text()
