"""Tests for diagnostic records, formatting and the exception hierarchy."""

from __future__ import annotations

import json

import pytest

from blockmessages.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    MessageTableError,
    OutputFormat,
    ResourceNotFoundError,
    SourceParseError,
)


def _malformed() -> Diagnostic:
    return Diagnostic(
        code=DiagnosticCode.MALFORMED_ENTRY,
        message="Unrecognized value type 'int' for key 'count'",
        resource_id="bky_messages.json",
        source_path="msg/bky_messages.json",
        key="count",
        expected_type="str",
        received_type="int",
        severity="warning",
    )


class TestDiagnosticCode:
    """Test code numbering ranges."""

    def test_source_errors_in_1000_range(self) -> None:
        """Source error codes are 1xxx."""
        for code in (
            DiagnosticCode.RESOURCE_NOT_FOUND,
            DiagnosticCode.SOURCE_UNREADABLE,
            DiagnosticCode.SOURCE_PARSE_FAILED,
            DiagnosticCode.SOURCE_NOT_A_MAPPING,
        ):
            assert 1000 <= code.value < 2000

    def test_entry_diagnostics_in_2000_range(self) -> None:
        """Entry diagnostic codes are 2xxx."""
        assert 2000 <= DiagnosticCode.MALFORMED_ENTRY.value < 3000

    def test_values_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))


class TestDiagnostic:
    """Test the Diagnostic record."""

    def test_str_is_message(self) -> None:
        """str() returns the plain message."""
        assert str(_malformed()) == "Unrecognized value type 'int' for key 'count'"

    def test_frozen(self) -> None:
        """Diagnostics are immutable."""
        diagnostic = _malformed()
        with pytest.raises(AttributeError):
            diagnostic.message = "changed"  # type: ignore[misc]

    def test_format_error(self) -> None:
        """format_error renders compiler-style output."""
        assert _malformed().format_error() == (
            "warning[MALFORMED_ENTRY]: Unrecognized value type 'int' for key 'count'\n"
            "  --> msg/bky_messages.json\n"
            "  = key: count\n"
            "  = expected: str\n"
            "  = received: int"
        )


class TestDiagnosticFormatter:
    """Test output formats."""

    def test_simple(self) -> None:
        """Simple format is one line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(_malformed()) == (
            "MALFORMED_ENTRY: Unrecognized value type 'int' for key 'count'"
        )

    def test_json(self) -> None:
        """JSON format carries all present fields."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format(_malformed()))

        assert data["code"] == "MALFORMED_ENTRY"
        assert data["code_value"] == 2001
        assert data["key"] == "count"
        assert data["severity"] == "warning"
        assert "hint" not in data

    def test_rust_uses_resource_id_without_path(self) -> None:
        """resource_id is the location when no source_path is known."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message="Could not find 'm.json'",
            resource_id="m.json",
            hint="Check the loader base path",
        )

        assert DiagnosticFormatter().format(diagnostic) == (
            "error[RESOURCE_NOT_FOUND]: Could not find 'm.json'\n"
            "  --> m.json\n"
            "  = help: Check the loader base path"
        )

    def test_control_characters_escaped(self) -> None:
        """Control characters in keys cannot reach the output raw."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.MALFORMED_ENTRY,
            message="bad \x1b[31mkey",
            key="line\nbreak",
        )

        output = DiagnosticFormatter().format(diagnostic)

        assert "\x1b" not in output
        assert "\\x1b[31mkey" in output
        assert "line\\nbreak" in output

    def test_sanitize_truncates(self) -> None:
        """sanitize truncates long messages."""
        diagnostic = Diagnostic(code=DiagnosticCode.MALFORMED_ENTRY, message="x" * 50)
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )

        assert formatter.format(diagnostic) == "MALFORMED_ENTRY: " + "x" * 10 + "..."

    def test_format_all(self) -> None:
        """format_all separates diagnostics by blank lines."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_all([_malformed(), _malformed()])

        assert output.count("\n\n") == 1


class TestErrors:
    """Test exception hierarchy."""

    def test_plain_message(self) -> None:
        """String messages carry no diagnostic."""
        error = MessageTableError("boom")

        assert str(error) == "boom"
        assert error.diagnostic is None
        assert error.resource_id is None

    def test_diagnostic_message(self) -> None:
        """Diagnostic messages are formatted and retained."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message="Could not find 'm.json'",
            resource_id="m.json",
        )
        error = ResourceNotFoundError(diagnostic)

        assert error.diagnostic is diagnostic
        assert error.resource_id == "m.json"
        assert str(error).startswith("error[RESOURCE_NOT_FOUND]")

    def test_hierarchy(self) -> None:
        """Source errors derive from MessageTableError."""
        assert issubclass(ResourceNotFoundError, MessageTableError)
        assert issubclass(SourceParseError, MessageTableError)
        assert not issubclass(ResourceNotFoundError, SourceParseError)
