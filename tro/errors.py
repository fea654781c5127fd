"""Custom exceptions for tro."""

from __future__ import annotations


class TroError(Exception):
    """Base exception type for tro command errors."""


class ConfigError(TroError):
    """Raised when the configuration file is missing or invalid."""


class InvalidPatternError(TroError):
    """Raised when a name filter does not compile as a regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class NotFoundError(TroError):
    """Raised when no object matches a name filter."""

    def __init__(self, type_label: str, pattern: str) -> None:
        self.type_label = type_label
        self.pattern = pattern
        super().__init__(
            f"{type_label} not found. Specify a more precise filter than '{pattern}'"
        )


class AmbiguousMatchError(TroError):
    """Raised when more than one object matches a name filter."""

    def __init__(self, type_label: str, pattern: str, candidates: list[str]) -> None:
        self.type_label = type_label
        self.pattern = pattern
        self.candidates = list(candidates)
        found = ", ".join(f"'{name}'" for name in self.candidates)
        super().__init__(
            f"More than one {type_label} found. "
            f"Specify a more precise filter than '{pattern}' (Found {found})"
        )


class WildcardRequiresCardError(TroError):
    """Raised when the '-' list wildcard is used without a card filter."""

    def __init__(self) -> None:
        super().__init__("Card name must be specified with list '-' wildcard")


class MalformedDocumentError(TroError):
    """Raised when edited card text cannot be parsed back into a card."""


class EditorError(TroError):
    """Raised when the external editor cannot be launched."""


class TrelloAPIError(TroError):
    """Raised for transport failures and error responses from Trello."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} [HTTP {self.status_code}]"
        return self.message


class NestedNotLoadedError(RuntimeError):
    """Raised when nested lists/cards are read before being fetched."""
