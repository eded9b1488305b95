"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    ConfigurationError,
    EventSourceError,
    InvalidTimeRangeError,
    MeetingFinderError,
)
from .meeting_query import MeetingQuery, merge_overlapping
from .models import (
    WHOLE_DAY,
    AttendeeTier,
    Availability,
    Event,
    MeetingRequest,
    MeetingSlot,
    TimeRange,
)

__all__ = [
    "WHOLE_DAY",
    "AttendeeTier",
    "Availability",
    "ConfigurationError",
    "Event",
    "EventSourceError",
    "InvalidTimeRangeError",
    "MeetingFinderError",
    "MeetingQuery",
    "MeetingRequest",
    "MeetingSlot",
    "TimeRange",
    "merge_overlapping",
]
