"""
Custom exception hierarchy for matchset.

The constraint algebra itself is total and never raises. The exceptions
defined here belong to the collaborator layer: turning text into
specifiers and candidates, and loading configuration. All exceptions
inherit from :class:`MatchSetError` and carry optional structured
metadata via the ``details`` attribute to improve diagnostics and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class MatchSetError(Exception):
    """Base exception for all matchset errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ParseError(MatchSetError):
    """Raised when a specifier or candidate string cannot be interpreted.

    Args:
        message: Error description.
        text: The offending input, truncated for safety.
        reason: Underlying parser message, if any.
    """

    __slots__ = ("text", "reason")

    def __init__(
        self,
        message: str,
        *,
        text: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        if text is not None:
            details["text"] = _truncate(text)
        _add_if(details, "reason", reason)

        super().__init__(message, details)

        self.text = text
        self.reason = reason


class InvalidCandidateError(MatchSetError):
    """Raised when a candidate's fields cannot take part in matching.

    Args:
        message: Error description.
        version: Version value that was supplied.
        build_number: Build number value that was supplied.
    """

    __slots__ = ("version", "build_number")

    def __init__(
        self,
        message: str,
        *,
        version: Optional[Any] = None,
        build_number: Optional[Any] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "version", version)
        _add_if(details, "build_number", build_number)

        super().__init__(message, details)

        self.version = version
        self.build_number = build_number


class ConfigError(MatchSetError):
    """Raised when a configuration file is missing or invalid.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
