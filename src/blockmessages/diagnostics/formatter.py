"""Rendering of diagnostics for terminals, logs and tooling.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# C0 controls, DEL and C1 controls. Keys come from untrusted files and must
# not reach a terminal raw.
_CONTROL_CHARS = frozenset(chr(c) for c in (*range(0x20), *range(0x7F, 0xA0)))


class OutputFormat(StrEnum):
    """Diagnostic output styles."""

    RUST = "rust"  # Multi-line, compiler style (default)
    SIMPLE = "simple"  # One line: CODE: message
    JSON = "json"  # One JSON object per diagnostic


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Render Diagnostic records as text.

    Control characters are always escaped. With sanitize=True, free-text
    fields longer than max_content_length are truncated.

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> formatter.format(diagnostic)
        "MALFORMED_ENTRY: Unrecognized value type 'int' for key 'count'"
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured style."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._clean(diagnostic.message)}"
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics separated by blank lines."""
        return "\n\n".join(map(self.format, diagnostics))

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Compiler-style block.

        Example output:
            error[RESOURCE_NOT_FOUND]: Could not find 'bky_messages.json'
              --> msg/bky_messages.json
              = help: Check the loader base path
        """
        lines = [
            f"{diagnostic.severity}[{diagnostic.code.name}]: "
            f"{self._clean(diagnostic.message)}"
        ]
        location = diagnostic.source_path or diagnostic.resource_id
        if location:
            lines.append(f"  --> {self._escape(location)}")

        notes = (
            ("key", diagnostic.key),
            ("expected", diagnostic.expected_type),
            ("received", diagnostic.received_type),
            ("help", diagnostic.hint),
        )
        lines.extend(
            f"  = {label}: {self._clean(value)}" for label, value in notes if value is not None
        )
        return "\n".join(lines)

    def _format_json(self, diagnostic: Diagnostic) -> str:
        optional = {
            "resource_id": diagnostic.resource_id,
            "source_path": diagnostic.source_path,
            "key": diagnostic.key,
            "expected_type": diagnostic.expected_type,
            "received_type": diagnostic.received_type,
            "hint": diagnostic.hint and self._maybe_sanitize(diagnostic.hint),
        }
        payload: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }
        payload.update({name: value for name, value in optional.items() if value is not None})
        return json.dumps(payload, ensure_ascii=False)

    def _clean(self, text: str) -> str:
        return self._escape(self._maybe_sanitize(text))

    @staticmethod
    def _escape(text: str) -> str:
        """Replace control characters with their repr escapes."""
        if not any(ch in _CONTROL_CHARS for ch in text):
            return text
        return "".join(repr(ch)[1:-1] if ch in _CONTROL_CHARS else ch for ch in text)

    def _maybe_sanitize(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
