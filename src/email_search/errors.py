"""Custom exceptions for the search domain."""


class SearchError(Exception):
    """Base exception for this project."""


class ConfigError(SearchError):
    """Raised when runtime configuration is invalid."""


class ResultSinkError(SearchError):
    """Raised when the results file cannot be created or written."""
