"""Diagnostic system for message table loading.

Provides structured diagnostics with codes, locations and hints, and the
exception hierarchy raised by load operations.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import MessageTableError, ResourceNotFoundError, SourceParseError
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "MessageTableError",
    "OutputFormat",
    "ResourceNotFoundError",
    "SourceParseError",
]
