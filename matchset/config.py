"""Configuration file loader for matchset.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``matchset.toml``: settings under ``[matchset]`` table
- ``pyproject.toml``: settings under ``[tool.matchset]`` table

Discovery order:

1. Explicit path from ``--config`` or ``MATCHSET_CONFIG``
2. ``matchset.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.matchset]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``matchset.toml``)::

    [matchset]
    default_format = "json"
    show_unconstrained = true
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from matchset.exceptions import ConfigError
from matchset.utils.logger import get_logger
from matchset.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SHOW_UNCONSTRAINED,
    OUTPUT_FORMATS,
)

logger = get_logger("config")


@dataclass
class MatchSetConfig:
    """Parsed and validated matchset configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        default_format: Output format used by CLI commands when
            ``--format`` is not given.
        show_unconstrained: Render fields that match anything as ``*``
            instead of omitting them.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    default_format: str = DEFAULT_OUTPUT_FORMAT
    show_unconstrained: bool = DEFAULT_SHOW_UNCONSTRAINED

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "default_format": self.default_format,
            "show_unconstrained": self.show_unconstrained,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    standalone = cwd / CONFIG_FILE_NAME
    if standalone.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, standalone)
        return standalone

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_matchset_section(pyproject_toml):
        logger.debug("Found [tool.matchset] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_matchset_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.matchset] section.

    An unreadable pyproject.toml is treated as having no section.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        logger.debug("Ignoring unreadable pyproject.toml: %s", path)
        return False
    return "matchset" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> MatchSetConfig:
    """Load and validate matchset configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`MatchSetConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return MatchSetConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("matchset", {})
    else:
        section = raw.get("matchset", {})

    if not section:
        logger.debug("Config file found but no matchset section, using defaults")
        return MatchSetConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> MatchSetConfig:
    """Parse and validate the ``[matchset]`` / ``[tool.matchset]`` table.

    Raises:
        ConfigError: Unknown keys, incorrect types, or unsupported values.
    """
    config = MatchSetConfig()

    known_top = {"default_format", "show_unconstrained"}

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "default_format" in section:
        val = section["default_format"]
        if not isinstance(val, str):
            raise ConfigError(
                f"default_format must be a string, got {type(val).__name__}",
                config_path=config_path,
                option="default_format",
            )
        val = val.lower()
        if val not in OUTPUT_FORMATS:
            raise ConfigError(
                f"default_format must be one of {', '.join(OUTPUT_FORMATS)}, got {val!r}",
                config_path=config_path,
                option="default_format",
            )
        config.default_format = val

    if "show_unconstrained" in section:
        val = section["show_unconstrained"]
        if not isinstance(val, bool):
            raise ConfigError(
                f"show_unconstrained must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option="show_unconstrained",
            )
        config.show_unconstrained = val

    return config
