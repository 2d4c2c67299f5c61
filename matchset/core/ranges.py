"""
Interval-set primitive for matchset.

A :class:`Range` is a subset of a totally ordered scalar domain (PEP 440
versions, build numbers) stored as a tuple of disjoint segments. Every
construction normalizes the segments (sorted, empty segments dropped,
overlapping or touching segments merged), so two ranges describing the
same set always compare and hash equal.

Typical usage::

    >>> from packaging.version import Version
    >>> r = Range.higher_than(Version("1.0")).intersection(
    ...     Range.lower_than(Version("2.0"))
    ... )
    >>> r.contains(Version("1.5"))
    True
    >>> str(r.negate())
    '<1.0 || >=2.0'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, NamedTuple, Optional, Tuple, TypeVar

from matchset.constants import DISPLAY_ANY, DISPLAY_NONE, DISPLAY_SEGMENT_SEPARATOR

T = TypeVar("T")


class Segment(NamedTuple):
    """A single interval. ``None`` bounds are unbounded."""

    lower: Optional[Any]
    lower_inclusive: bool
    upper: Optional[Any]
    upper_inclusive: bool

    def is_empty(self) -> bool:
        if self.lower is None or self.upper is None:
            return False
        if self.lower < self.upper:
            return False
        if self.lower == self.upper:
            return not (self.lower_inclusive and self.upper_inclusive)
        return True

    def contains(self, value: Any) -> bool:
        if self.lower is not None:
            if value < self.lower or (value == self.lower and not self.lower_inclusive):
                return False
        if self.upper is not None:
            if value > self.upper or (value == self.upper and not self.upper_inclusive):
                return False
        return True

    def lower_key(self) -> Tuple[Any, ...]:
        """Ordering key of the lower bound; smaller means less restrictive."""
        if self.lower is None:
            return (0,)
        return (1, self.lower, 0 if self.lower_inclusive else 1)

    def upper_key(self) -> Tuple[Any, ...]:
        """Ordering key of the upper bound; larger means less restrictive."""
        if self.upper is None:
            return (2,)
        return (1, self.upper, 1 if self.upper_inclusive else 0)

    def is_point(self) -> bool:
        return (
            self.lower is not None
            and self.lower == self.upper
            and self.lower_inclusive
            and self.upper_inclusive
        )

    def __str__(self) -> str:
        if self.lower is None and self.upper is None:
            return DISPLAY_ANY
        if self.is_point():
            return f"=={self.lower}"

        parts: List[str] = []
        if self.lower is not None:
            parts.append(f"{'>=' if self.lower_inclusive else '>'}{self.lower}")
        if self.upper is not None:
            parts.append(f"{'<=' if self.upper_inclusive else '<'}{self.upper}")
        return ",".join(parts)


def _make_segment(
    lower: Optional[Any],
    lower_inclusive: bool,
    upper: Optional[Any],
    upper_inclusive: bool,
) -> Segment:
    # Unbounded sides are never inclusive, which keeps equality structural
    return Segment(
        lower,
        lower_inclusive and lower is not None,
        upper,
        upper_inclusive and upper is not None,
    )


def _connected(left: Segment, right: Segment) -> bool:
    """Return True if ``right`` overlaps or touches ``left``.

    Assumes ``left`` does not start after ``right``.
    """
    if left.upper is None or right.lower is None:
        return True
    if left.upper > right.lower:
        return True
    if left.upper == right.lower:
        return left.upper_inclusive or right.lower_inclusive
    return False


def _normalize(segments: Iterable[Segment]) -> Tuple[Segment, ...]:
    ordered = sorted(
        (_make_segment(*s) for s in segments if not s.is_empty()),
        key=Segment.lower_key,
    )

    merged: List[Segment] = []
    for segment in ordered:
        if merged and _connected(merged[-1], segment):
            last = merged[-1]
            upper = max(last, segment, key=Segment.upper_key)
            merged[-1] = _make_segment(
                last.lower,
                last.lower_inclusive,
                upper.upper,
                upper.upper_inclusive,
            )
        else:
            merged.append(segment)

    return tuple(merged)


def _intersect_segments(left: Segment, right: Segment) -> Segment:
    lower = max(left, right, key=Segment.lower_key)
    upper = min(left, right, key=Segment.upper_key)
    return _make_segment(
        lower.lower,
        lower.lower_inclusive,
        upper.upper,
        upper.upper_inclusive,
    )


@dataclass(frozen=True)
class Range(Generic[T]):
    """Immutable finite union of intervals over an ordered domain.

    Attributes:
        segments: Canonical, sorted, disjoint, non-adjacent segments.
    """

    segments: Tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", _normalize(self.segments))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def none(cls) -> "Range[T]":
        """Return the range that contains nothing."""
        return cls(())

    @classmethod
    def any(cls) -> "Range[T]":
        """Return the range that contains every value."""
        return cls((_make_segment(None, False, None, False),))

    @classmethod
    def equal(cls, value: T) -> "Range[T]":
        """Return the range that contains exactly ``value``."""
        return cls((_make_segment(value, True, value, True),))

    @classmethod
    def higher_than(cls, value: T) -> "Range[T]":
        """Return ``>= value``."""
        return cls((_make_segment(value, True, None, False),))

    @classmethod
    def strictly_higher_than(cls, value: T) -> "Range[T]":
        """Return ``> value``."""
        return cls((_make_segment(value, False, None, False),))

    @classmethod
    def lower_than(cls, value: T) -> "Range[T]":
        """Return ``< value``."""
        return cls((_make_segment(None, False, value, False),))

    @classmethod
    def at_most(cls, value: T) -> "Range[T]":
        """Return ``<= value``."""
        return cls((_make_segment(None, False, value, True),))

    @classmethod
    def between(cls, lower: T, upper: T) -> "Range[T]":
        """Return the half-open range ``[lower, upper)``."""
        return cls((_make_segment(lower, True, upper, False),))

    # ------------------------------------------------------------------
    # Set algebra
    # ------------------------------------------------------------------

    def intersection(self, other: "Range[T]") -> "Range[T]":
        return Range(
            tuple(
                _intersect_segments(left, right)
                for left in self.segments
                for right in other.segments
            )
        )

    def union(self, other: "Range[T]") -> "Range[T]":
        return Range(self.segments + other.segments)

    def negate(self) -> "Range[T]":
        """Return the complement within the scalar domain."""
        gaps: List[Segment] = []
        lower: Optional[Any] = None
        lower_inclusive = False
        unbounded_below = True

        for segment in self.segments:
            if segment.lower is not None:
                gaps.append(
                    _make_segment(
                        None if unbounded_below else lower,
                        lower_inclusive,
                        segment.lower,
                        not segment.lower_inclusive,
                    )
                )
            if segment.upper is None:
                return Range(tuple(gaps))
            lower = segment.upper
            lower_inclusive = not segment.upper_inclusive
            unbounded_below = False

        gaps.append(
            _make_segment(
                None if unbounded_below else lower,
                lower_inclusive,
                None,
                False,
            )
        )
        return Range(tuple(gaps))

    def contains(self, value: T) -> bool:
        return any(segment.contains(value) for segment in self.segments)

    def is_empty(self) -> bool:
        return not self.segments

    def is_any(self) -> bool:
        return self == Range.any()

    # ------------------------------------------------------------------
    # Ordering & display
    # ------------------------------------------------------------------

    def bounds(self) -> List[Any]:
        """Return every finite boundary value of the range, in order."""
        values: List[Any] = []
        for segment in self.segments:
            for value in (segment.lower, segment.upper):
                if value is not None and (not values or values[-1] != value):
                    values.append(value)
        return values

    def sort_key(self) -> Tuple[Any, ...]:
        """Total order over ranges of the same domain.

        The key is injective: distinct ranges never share a key.
        """
        return tuple((s.lower_key(), s.upper_key()) for s in self.segments)

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        if not self.segments:
            return DISPLAY_NONE

        excluded = self.negate().segments
        if len(excluded) == 1 and excluded[0].is_point():
            return f"!={excluded[0].lower}"

        return DISPLAY_SEGMENT_SEPARATOR.join(str(s) for s in self.segments)

    def __repr__(self) -> str:
        return f"Range({str(self)!r})"
