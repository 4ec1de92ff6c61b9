"""Custom exception hierarchy for the transliteration E2E suite."""
from __future__ import annotations

from typing import Any, Optional


class TranslitError(Exception):
    """Base exception for all suite errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Browser-related exceptions
class BrowserError(TranslitError):
    """Base exception for browser automation errors."""

    pass


class NavigationError(BrowserError):
    """Raised when page navigation fails."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        details = {}
        if url:
            details["url"] = url
        if timeout:
            details["timeout"] = timeout
        super().__init__(message, details)
        self.url = url
        self.timeout = timeout


class BrowserNotStartedError(BrowserError):
    """Raised when attempting to use browser before starting."""

    def __init__(self):
        super().__init__("Browser has not been started. Call start() first.")


# Test data exceptions
class TestDataError(TranslitError):
    """Base exception for fixture and catalog loading errors."""

    __test__ = False


class FixtureLoadError(TestDataError):
    """Raised when the fixture spreadsheet cannot be read."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        details = {"file_path": file_path} if file_path else {}
        super().__init__(message, details)
        self.file_path = file_path


class CatalogLoadError(TestDataError):
    """Raised when the canonical case list cannot be loaded or is malformed."""

    def __init__(self, message: str, file_path: Optional[str] = None, index: Optional[int] = None):
        details: dict[str, Any] = {}
        if file_path:
            details["file_path"] = file_path
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
        self.file_path = file_path
        self.index = index


# Scenario exceptions
class ScenarioError(TranslitError):
    """Base exception for scenario execution failures."""

    pass


class OutputMismatchError(ScenarioError):
    """Raised when the transliterated output differs from the expected text."""

    def __init__(self, expected: str, actual: str, title: Optional[str] = None):
        details = {"expected": expected, "actual": actual}
        if title:
            details["title"] = title
        super().__init__(
            f"Output mismatch: expected {expected!r}, got {actual!r}",
            details,
        )
        self.expected = expected
        self.actual = actual
        self.title = title


# Configuration exceptions
class ConfigurationError(TranslitError):
    """Raised when configuration is invalid."""

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a required config file is not found."""

    def __init__(self, file_path: str):
        super().__init__(f"Configuration file not found: {file_path}", {"file_path": file_path})
        self.file_path = file_path
