"""Custom exceptions for podcast_feed_generator.

Advisory findings about a feed (missing artwork, duplicate GUIDs, ...) are
never raised; they are collected as diagnostics. The exceptions below cover
the cases where no document can be produced, or where a caller explicitly
asked for findings to be treated as failures.

Exception Hierarchy:
    FeedGeneratorError (base)
    ├── FeedStructureError - Input is not shaped like a feed
    ├── InputFileError - Input file missing, unreadable or unparsable
    └── StrictModeError - Diagnostics reported while running in strict mode
"""

from typing import Optional


class FeedGeneratorError(Exception):
    """Base exception for all podcast_feed_generator errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
    """

    def __init__(self, message: str, suggestion: Optional[str] = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with the suggestion appended."""
        parts = [self.message]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " ".join(parts)


class FeedStructureError(FeedGeneratorError):
    """Raised when required structural input is malformed.

    Common causes:
    - The top-level value or ``podcast`` is not a mapping
    - ``episodes`` is not a list, or one of its entries is not a mapping
    - A field holds a list/mapping where a plain value is expected

    Example:
        >>> raise FeedStructureError(
        ...     message="Episode entry must be a mapping, got str",
        ...     path="episodes[2]",
        ... )
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.path = path
        if path and path not in message:
            message = f"{message} (at: {path})"
        super().__init__(message=message, suggestion=suggestion)


class InputFileError(FeedGeneratorError):
    """Raised when the feed description file cannot be loaded."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.path = path
        if path and path not in message:
            message = f"{message}: {path}"
        super().__init__(message=message, suggestion=suggestion)


class StrictModeError(FeedGeneratorError):
    """Raised after generation when strict mode is on and diagnostics were reported.

    Attributes:
        diagnostic_count: Number of diagnostics reported for the feed
    """

    def __init__(self, diagnostic_count: int) -> None:
        self.diagnostic_count = diagnostic_count
        super().__init__(
            message=f"Feed generated with {diagnostic_count} warning(s) in strict mode",
            suggestion="Fix the reported warnings or run without --strict",
        )
