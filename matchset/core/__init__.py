"""
Core constraint algebra for matchset.

This package contains the version-set machinery consumed by a solver:

- :class:`Range`: interval sets over an ordered scalar domain
- :class:`ConjunctiveElement`: an AND of one range per matchable field
- :class:`ConstraintSet`: an OR of conjunctive elements (DNF)
- specifier translation helpers

Example:
    >>> from matchset.core import ConstraintSet
    >>> ConstraintSet.empty().complement() == ConstraintSet.full()
    True
"""

from __future__ import annotations

from matchset.core.ranges import Range, Segment
from matchset.core.element import ELEMENT_FIELDS, ConjunctiveElement
from matchset.core.translate import (
    parse_specifier_set,
    requirement_to_element,
    specifier_to_range,
)
from matchset.core.constraints import ConstraintSet

__all__ = [
    "Range",
    "Segment",
    "ELEMENT_FIELDS",
    "ConjunctiveElement",
    "ConstraintSet",
    "parse_specifier_set",
    "requirement_to_element",
    "specifier_to_range",
]
