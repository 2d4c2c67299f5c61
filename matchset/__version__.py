"""
matchset version information.

Single source of truth for the package version, read by the CLI
``--version`` option and by ``python -m matchset`` startup diagnostics.
"""

from __future__ import annotations

__version__ = "0.1.0"
