"""
Translation from PEP 440 specifiers to ranges.

This module is the seam between parsed requirements and the constraint
algebra. A :class:`~packaging.specifiers.SpecifierSet` becomes a
``Range[Version]`` by intersecting the range of each specifier; a
:class:`~matchset.models.requirement.Requirement` becomes a single
:class:`~matchset.core.element.ConjunctiveElement`, with unconstrained
fields left as ``Range.any()``.

Ranges use plain PEP 440 ordering. ``==1.2``, ``!=1.2``, ``<=1.2`` and
``>1.2`` compare local versions by their public part, so ``1.2+abc``
equals ``1.2`` for them. Two filtering rules of ``packaging`` are not
part of the algebra: pre-release exclusion (``<2.0`` rejecting ``2.0a1``)
and ``>1.2`` rejecting the post-releases of ``1.2``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from packaging.specifiers import InvalidSpecifier, Specifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from matchset.core.element import ConjunctiveElement
from matchset.core.ranges import Range
from matchset.exceptions import ParseError

if TYPE_CHECKING:
    from matchset.models.requirement import Requirement


def parse_specifier_set(text: str) -> SpecifierSet:
    """Parse ``text`` into a :class:`SpecifierSet`.

    Raises:
        ParseError: ``text`` is not a valid PEP 440 specifier set.
    """
    try:
        return SpecifierSet(text)
    except InvalidSpecifier as exc:
        raise ParseError(
            f"Invalid version specifier: {text!r}",
            text=text,
            reason=str(exc),
        ) from exc


def specifier_to_range(spec: Union[SpecifierSet, str]) -> Range[Version]:
    """Return the range of versions allowed by every specifier in ``spec``.

    Args:
        spec: A specifier set, or its string form.

    Returns:
        The intersection of the specifiers' ranges; ``Range.any()`` for an
        empty specifier set.

    Raises:
        ParseError: The specifier text or one of its versions is invalid.

    Examples:
        >>> str(specifier_to_range(">=1.0,<2.0"))
        '>=1.0,<2.0'
        >>> str(specifier_to_range("<=1.5"))
        '<1.5.post0.dev0'
    """
    if isinstance(spec, str):
        spec = parse_specifier_set(spec)

    result: Range[Version] = Range.any()
    for specifier in spec:
        result = result.intersection(_specifier_range(specifier))
    return result


def requirement_to_element(requirement: "Requirement") -> ConjunctiveElement:
    """Map a requirement to the conjunctive element it denotes."""
    build_number: Range[int] = (
        Range.equal(requirement.build_number)
        if requirement.build_number is not None
        else Range.any()
    )
    return ConjunctiveElement(
        version=specifier_to_range(requirement.specifier),
        build_number=build_number,
    )


def _specifier_range(specifier: Specifier) -> Range[Version]:
    operator = specifier.operator
    text = specifier.version

    if text.endswith(".*"):
        prefix = _prefix_range(text[:-2])
        if operator == "==":
            return prefix
        if operator == "!=":
            return prefix.negate()
        raise ParseError(
            f"Wildcard not allowed with operator {operator!r}",
            text=str(specifier),
        )

    version = _parse_version(text)

    if operator == "===":
        return Range.equal(version)
    if operator == "==":
        return _release_range(version)
    if operator == "!=":
        return _release_range(version).negate()
    if operator == "<":
        return Range.lower_than(version)
    if operator == "<=":
        return Range.lower_than(_local_ceiling(version))
    if operator == ">":
        return Range.higher_than(_local_ceiling(version))
    if operator == ">=":
        return Range.higher_than(version)
    if operator == "~=":
        return _compatible_range(version, text)

    raise ParseError(f"Unsupported specifier operator {operator!r}", text=str(specifier))


def _parse_version(text: str) -> Version:
    try:
        return Version(text)
    except InvalidVersion as exc:
        raise ParseError(
            f"Invalid version: {text!r}",
            text=text,
            reason=str(exc),
        ) from exc


def _release_range(version: Version) -> Range[Version]:
    """Return ``version`` together with its local variants.

    A version that already carries a local label only matches itself.
    """
    if version.local is not None:
        return Range.equal(version)
    return Range.between(version, _local_ceiling(version))


def _local_ceiling(version: Version) -> Version:
    """Return the smallest version above every local variant of ``version``.

    Local labels sort after their public version and before anything else,
    so ``[1.2, 1.2.post0.dev0)`` holds exactly ``1.2`` and ``1.2+<label>``.
    """
    public = version.public
    if version.dev is not None:
        return Version(f"{public.rsplit('dev', 1)[0]}dev{version.dev + 1}")
    if version.post is not None:
        return Version(f"{public.rsplit('post', 1)[0]}post{version.post + 1}.dev0")
    return Version(f"{public}.post0.dev0")


def _release_text(version: Version, release: tuple) -> str:
    epoch = f"{version.epoch}!" if version.epoch else ""
    return epoch + ".".join(str(part) for part in release)


def _prefix_range(prefix: str) -> Range[Version]:
    """Return every version whose release starts with ``prefix``.

    ``1.2`` covers ``[1.2.dev0, 1.3.dev0)``, which includes the
    pre-releases of ``1.2`` and excludes those of ``1.3``.
    """
    version = _parse_version(prefix)
    release = version.release
    bumped = release[:-1] + (release[-1] + 1,)

    lower = Version(_release_text(version, release) + ".dev0")
    upper = Version(_release_text(version, bumped) + ".dev0")
    return Range.between(lower, upper)


def _compatible_range(version: Version, text: str) -> Range[Version]:
    """``~=X.Y.Z`` is ``>=X.Y.Z`` together with ``==X.Y.*``."""
    release = version.release
    if len(release) < 2:
        raise ParseError(
            "Compatible release clause requires at least two release segments",
            text=text,
        )
    prefix = _release_text(version, release[:-1])
    return Range.higher_than(version).intersection(_prefix_range(prefix))
