# Area: Shared
"""
word_conquest.errors — Custom exception classes
================================================

Defines the exception hierarchy for the game engine.
Each exception stores full context for structured logging.

The store catches InsufficientResourceError and InvalidTransitionError
at the point of mutation and reports a False/no-op result instead.
ConfigurationInvariantError is a programming error and propagates.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class WordConquestError(Exception):
    """Base exception for all Word Conquest errors."""
    pass


class InsufficientResourceError(WordConquestError):
    """Raised when a resource (energy) is below the required amount."""

    def __init__(self, resource: str, required: int, available: int):
        self.resource = resource
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient {resource}: required {required}, available {available}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="INSUFFICIENT_RESOURCE",
            subject=self.resource,
            context={"required": self.required, "available": self.available},
            details=None,
        )


class InvalidTransitionError(WordConquestError):
    """Raised when a cell or quiz is not in the status an operation needs."""

    def __init__(self, subject: str, current: str, attempted: str):
        self.subject = subject
        self.current = current
        self.attempted = attempted
        super().__init__(
            f"Invalid transition on {subject}: cannot {attempted} from '{current}'"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="INVALID_TRANSITION",
            subject=self.subject,
            context={"current": self.current, "attempted": self.attempted},
            details=None,
        )


class ConfigurationInvariantError(WordConquestError):
    """Raised when static configuration breaks one of its invariants."""

    def __init__(self, name: str, details: List[str]):
        self.name = name
        self.details = details
        super().__init__(f"Configuration '{name}' is invalid: {details}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="CONFIGURATION_INVARIANT_VIOLATION",
            subject=self.name,
            context=None,
            details=self.details,
        )


def _format_error_block(
    error_type: str,
    subject: str,
    context: Optional[Dict[str, Any]],
    details: Optional[List[str]],
) -> str:
    """Format a structured error block for the log."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " GAME ENGINE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Subject:      {subject}",
    ]

    if context is not None:
        lines.append("")
        lines.append(" ── CONTEXT " + "─" * 52)
        lines.append(_indent_json(context))

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        for detail in details:
            lines.append(f" • {detail}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
