"""
Unified data model exports for matchset.

Example:
    >>> from matchset.models import Candidate, Requirement
"""

from __future__ import annotations

from matchset.models.candidate import Candidate
from matchset.models.requirement import Requirement

__all__ = [
    "Candidate",
    "Requirement",
]
