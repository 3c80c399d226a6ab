"""Exception hierarchy for message table loading.

Lookups never raise: a missing key is a normal None result. Only load
operations that cannot obtain a mapping from their source raise, and
they do so before touching any table.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "MessageTableError",
    "ResourceNotFoundError",
    "SourceParseError",
]


class MessageTableError(Exception):
    """Base exception for all blockmessages errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageTableError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def resource_id(self) -> str | None:
        """Resource identifier from the attached diagnostic, if any."""
        return self.diagnostic.resource_id if self.diagnostic is not None else None


class ResourceNotFoundError(MessageTableError):
    """The named source could not be located by the loader.

    Expected for optional sources such as locale overlays; callers that
    bootstrap several resources usually record it and continue.
    """


class SourceParseError(MessageTableError):
    """The source was located but could not be read or decoded into a mapping.

    Covers I/O failures, invalid encodings, malformed JSON and documents
    whose top level is not an object.
    """
