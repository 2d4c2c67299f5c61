"""
Candidate data model for matchset.

A candidate is a concrete package build offered to the solver. Only the
two attributes that take part in matching are modelled: the PEP 440
version and the non-negative build number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from packaging.version import InvalidVersion, Version

from matchset.constants import CANDIDATE_BUILD_SEPARATOR
from matchset.exceptions import InvalidCandidateError, ParseError

_BUILD_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Candidate:
    """A concrete version/build pair checked against constraint sets.

    Attributes:
        version: Parsed PEP 440 version. Strings are parsed on construction.
        build_number: Non-negative build number.
        name: Optional package name, informational only.

    Raises:
        InvalidCandidateError: The version cannot be parsed or the build
            number is not a non-negative integer.
    """

    version: Version
    build_number: int = 0
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "version", _coerce_version(self.version))

        build_number = self.build_number
        if isinstance(build_number, bool) or not isinstance(build_number, int):
            raise InvalidCandidateError(
                "Build number must be an integer",
                build_number=build_number,
            )
        if build_number < 0:
            raise InvalidCandidateError(
                "Build number must not be negative",
                build_number=build_number,
            )

    @classmethod
    def from_string(cls, text: str, *, name: Optional[str] = None) -> "Candidate":
        """Parse ``VERSION`` or ``VERSION=BUILD`` into a candidate.

        Examples:
            >>> Candidate.from_string("1.2.3=4").build_number
            4
            >>> Candidate.from_string("2.0").build_number
            0
        """
        version_text, sep, build_text = text.strip().partition(CANDIDATE_BUILD_SEPARATOR)
        if not sep:
            return cls(version_text, name=name)

        build_text = build_text.strip()
        if not _BUILD_NUMBER_RE.fullmatch(build_text):
            raise ParseError(
                f"Invalid build number in candidate {text!r}",
                text=text,
            )
        return cls(version_text.strip(), int(build_text), name=name)

    def to_string(self) -> str:
        return f"{self.version}{CANDIDATE_BUILD_SEPARATOR}{self.build_number}"

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} {self.to_string()}"
        return self.to_string()


def _coerce_version(value: Union[Version, str]) -> Version:
    if isinstance(value, Version):
        return value
    if not isinstance(value, str):
        raise InvalidCandidateError(
            f"Version must be a string or Version, got {type(value).__name__}",
            version=value,
        )
    try:
        return Version(value)
    except InvalidVersion as exc:
        raise InvalidCandidateError(
            f"Invalid candidate version: {value!r}",
            version=value,
        ) from exc
