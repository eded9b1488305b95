"""
Domain-specific exception hierarchy for the meeting finder application.
"""


class MeetingFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeRangeError(MeetingFinderError, ValueError):
    """Raised when a time range would not satisfy 0 <= start < end."""


class EventSourceError(MeetingFinderError):
    """Raised when calendar events cannot be loaded or parsed."""


class ConfigurationError(MeetingFinderError, ValueError):
    """Raised when the configuration file is invalid or incomplete."""
