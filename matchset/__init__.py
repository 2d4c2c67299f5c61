"""
matchset: boolean algebra over package-version constraints

matchset provides the "version set" primitive of a PubGrub-style
dependency resolver: constraint sets over package version and build
number that support intersection, union, complement and membership
without enumerating concrete versions.

Features include:
    • Exact boolean-algebra laws under a canonical DNF representation
    • PEP 440 specifier translation via ``packaging``
    • Structural equality and hashing independent of construction order
    • A small CLI for checking candidates and combining requirements
"""

from __future__ import annotations

from matchset.__version__ import __version__
from matchset.core import ConjunctiveElement, ConstraintSet, Range
from matchset.exceptions import (
    ConfigError,
    InvalidCandidateError,
    MatchSetError,
    ParseError,
)
from matchset.models import Candidate, Requirement

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "matchset Contributors"
__license__ = "Apache-2.0"
__description__ = "Boolean algebra over package-version constraints."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "Candidate",
    "ConjunctiveElement",
    "ConstraintSet",
    "Range",
    "Requirement",
    "MatchSetError",
    "ParseError",
    "InvalidCandidateError",
    "ConfigError",
]
