"""
Centralized constants for matchset.

This module defines immutable configuration values used across matchset,
including algebra limits, display tokens, CLI defaults, and logging
formats. All values are intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Algebra limits
# ---------------------------------------------------------------------------

#: Number of cartesian combinations above which an expansion is logged as
#: a warning. The expansion still runs to completion.
DEFAULT_EXPANSION_WARNING_THRESHOLD: Final[int] = 4096

# ---------------------------------------------------------------------------
# Display tokens
# ---------------------------------------------------------------------------

#: Rendering of a range or constraint set that matches everything.
DISPLAY_ANY: Final[str] = "*"

#: Rendering of a range that matches nothing.
DISPLAY_NONE: Final[str] = "<none>"

#: Rendering of a constraint set that matches nothing.
DISPLAY_EMPTY: Final[str] = "<empty>"

#: Separator between the disjoint segments of a range.
DISPLAY_SEGMENT_SEPARATOR: Final[str] = " || "

#: Separator between the fields of a conjunctive element.
DISPLAY_FIELD_SEPARATOR: Final[str] = " and "

#: Separator between the groups of a constraint set.
DISPLAY_GROUP_SEPARATOR: Final[str] = " | "

#: Separator between version and build number in candidate strings.
CANDIDATE_BUILD_SEPARATOR: Final[str] = "="

# ---------------------------------------------------------------------------
# CLI / configuration defaults
# ---------------------------------------------------------------------------

#: Output formats understood by CLI commands.
OUTPUT_FORMATS: Final[Sequence[str]] = ("table", "simple", "json")

#: Default CLI output format.
DEFAULT_OUTPUT_FORMAT: Final[str] = "table"

#: Whether unconstrained fields are rendered in CLI output by default.
DEFAULT_SHOW_UNCONSTRAINED: Final[bool] = False

#: Name of the standalone configuration file.
CONFIG_FILE_NAME: Final[str] = "matchset.toml"
