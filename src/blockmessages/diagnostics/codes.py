"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic record passed to
diagnostic sinks and carried by exceptions.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Source errors (resource missing, unreadable, undecodable)
        2000-2999: Entry diagnostics (individual keys dropped during a load)
    """

    # Source errors (1000-1999)
    RESOURCE_NOT_FOUND = 1001
    SOURCE_UNREADABLE = 1002
    SOURCE_PARSE_FAILED = 1003
    SOURCE_NOT_A_MAPPING = 1004

    # Entry diagnostics (2000-2999)
    MALFORMED_ENTRY = 2001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique diagnostic code
        message: Human-readable description
        resource_id: Resource the diagnostic relates to (None for inline data)
        source_path: Human-readable location of the resource, from the loader
        key: Raw entry key that triggered the diagnostic
        expected_type: Expected value type (malformed entries)
        received_type: Actual value type (malformed entries)
        hint: Suggestion for fixing the problem
        severity: Diagnostic severity level
    """

    code: DiagnosticCode
    message: str
    resource_id: str | None = None
    source_path: str | None = None
    key: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            warning[MALFORMED_ENTRY]: Unrecognized value type 'int' for key 'count'
              --> msg/bky_messages.json
              = key: count
              = expected: str
              = received: int

        Returns:
            Formatted diagnostic text
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
