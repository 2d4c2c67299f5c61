"""
Requirement data model for matchset.

This module defines the structured requirement handed over by a
requirement parser: a package name, an optional PEP 440 version
specifier, and an optional exact build number. Parsing the surrounding
requirement syntax is the caller's job; only the specifier text is
interpreted here, through ``packaging``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from packaging.specifiers import SpecifierSet

from matchset.core.constraints import ConstraintSet
from matchset.core.translate import parse_specifier_set, requirement_to_element
from matchset.exceptions import ParseError

if TYPE_CHECKING:
    from matchset.core.element import ConjunctiveElement


def _normalize_name(name: str) -> str:
    """Normalize a package name according to PEP 503."""
    return name.lower().replace("_", "-")


@dataclass(frozen=True)
class Requirement:
    """
    A parsed requirement on a single package.

    Attributes:
        name: Normalized package name.
        version_spec: PEP 440 specifier text (``">=1.0,<2.0"``); empty
            for no version constraint.
        build_number: Exact build number, or ``None`` for any build.

    Raises:
        ParseError: ``version_spec`` is not a valid specifier set, or the
            build number is not a non-negative integer.
    """

    name: str
    version_spec: str = ""
    build_number: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _normalize_name(self.name))
        object.__setattr__(self, "version_spec", self.version_spec.strip())

        # Validate eagerly so bad input fails where it was written
        parse_specifier_set(self.version_spec)

        build_number = self.build_number
        if build_number is None:
            return
        if isinstance(build_number, bool) or not isinstance(build_number, int):
            raise ParseError(
                "Build number must be an integer",
                text=repr(build_number),
            )
        if build_number < 0:
            raise ParseError(
                "Build number must not be negative",
                text=str(build_number),
            )

    @property
    def specifier(self) -> SpecifierSet:
        """Parsed version specifier set."""
        return parse_specifier_set(self.version_spec)

    def to_element(self) -> "ConjunctiveElement":
        """Return the conjunctive element matching this requirement."""
        return requirement_to_element(self)

    def to_constraints(self) -> ConstraintSet:
        """Return the single-group constraint set matching this requirement."""
        return ConstraintSet.from_requirement(self)

    def to_string(self) -> str:
        """Render ``name [specifier] [build_number==N]``."""
        parts: List[str] = [self.name]
        if self.version_spec:
            parts.append(str(self.specifier))
        if self.build_number is not None:
            parts.append(f"build_number=={self.build_number}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()
