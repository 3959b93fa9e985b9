"""Custom exceptions for story loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when story files are missing or unreadable."""


class DataValidationError(DataError):
    """Raised when story content fails structural validation."""
