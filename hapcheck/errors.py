"""Exceptions for hapcheck.

Parse failures subclass ValueError so callers that already guard
input parsing with ``except ValueError`` keep working.
"""

from typing import Optional


class HapcheckError(Exception):
    """Base exception for hapcheck errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class MalformedInputError(HapcheckError, ValueError):
    """Raised when a sample's input cannot be parsed.

    Aborts construction of that one sample only. ``sample_id`` names the
    affected sample when it is known.
    """

    def __init__(
        self,
        message: str,
        sample_id: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.sample_id = sample_id
        if sample_id:
            message = f"Sample '{sample_id}': {message}"
        super().__init__(message, suggestion)


class InvalidColumnCountError(MalformedInputError):
    """Raised when an HSD line has fewer than the required columns."""

    def __init__(self, count: int, sample_id: Optional[str] = None) -> None:
        super().__init__(
            f"expected at least 3 tab-separated columns, got {count}",
            sample_id=sample_id,
            suggestion="HSD lines are: ID<tab>RANGE<tab>HAPLOGROUP<tab>POLYMORPHISMS...",
        )
        self.count = count


class MalformedPathError(HapcheckError, ValueError):
    """Raised when a search result path cannot be merged into a tree."""
