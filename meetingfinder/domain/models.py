"""
Domain models for time range and meeting calculations.

All times are integer minutes measured from the start of a single day.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Union

from .exceptions import InvalidTimeRangeError


START_OF_DAY = 0
MINUTES_PER_DAY = 24 * 60


def get_time_in_minutes(hours: int, minutes: int) -> int:
    """Convert a wall clock time (e.g. 9:30) into minutes since midnight."""
    if not 0 <= hours <= 24 or not 0 <= minutes <= 59 or (hours == 24 and minutes):
        raise ValueError(f"Invalid clock time {hours}:{minutes:02d}")
    return hours * 60 + minutes


END_OF_DAY = get_time_in_minutes(23, 59)


def format_minutes(value: int) -> str:
    """Render minutes since midnight as HH:mm."""
    return f"{value // 60:02d}:{value % 60:02d}"


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable, half-open time range [start, end).

    Invariant: 0 <= start < end.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise InvalidTimeRangeError(f"Start time {self.start} must not be negative")
        if self.start >= self.end:
            raise InvalidTimeRangeError(
                f"Start time {self.start} must be before end time {self.end}"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        """
        Build a range from two boundaries.

        With ``inclusive=True`` the end minute itself belongs to the range,
        so the stored (exclusive) end becomes ``end + 1``.
        """
        return cls(start=start, end=end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Build a range of ``duration`` minutes beginning at ``start``."""
        return cls(start=start, end=start + duration)

    def duration(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range shares at least one minute with another."""
        return self.start < other.end and other.start < self.end

    def contains(self, item: Union[int, "TimeRange"]) -> bool:
        """
        Check whether a minute, or a whole range, lies inside this range.
        """
        if isinstance(item, TimeRange):
            return self.start <= item.start and item.end <= self.end
        return self.start <= item < self.end

    def intersect(self, other: "TimeRange") -> "TimeRange | None":
        """
        Calculate the intersection of two time ranges.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeRange(start=max(self.start, other.start), end=min(self.end, other.end))

    def format_clock(self) -> str:
        return f"{format_minutes(self.start)} - {format_minutes(self.end)}"

    def __str__(self) -> str:
        return self.format_clock()


WHOLE_DAY = TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, inclusive=True)


def by_start(time_range: TimeRange) -> int:
    """Sort key: earliest start first."""
    return time_range.start


def by_end(time_range: TimeRange) -> int:
    """Sort key: earliest end first."""
    return time_range.end


def _as_attendee_set(attendees: Iterable[str]) -> FrozenSet[str]:
    if isinstance(attendees, str):
        # A bare string would otherwise be split into characters
        return frozenset([attendees])
    return frozenset(attendees)


@dataclass(frozen=True)
class Event:
    """
    An already scheduled event occupying its attendees during ``when``.
    """
    when: TimeRange
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    title: str = ""

    def __post_init__(self):
        object.__setattr__(self, "attendees", _as_attendee_set(self.attendees))

    def involves_any(self, attendees: FrozenSet[str]) -> bool:
        """True if at least one of ``attendees`` takes part in this event."""
        return not self.attendees.isdisjoint(attendees)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request for a meeting of ``duration_minutes`` minutes.

    ``attendees`` must be able to attend; ``optional_attendees`` are invited
    only if a time exists that suits all of them too.
    """
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)
    duration_minutes: int = 30

    def __post_init__(self):
        object.__setattr__(self, "attendees", _as_attendee_set(self.attendees))
        object.__setattr__(
            self, "optional_attendees", _as_attendee_set(self.optional_attendees)
        )

    @property
    def all_attendees(self) -> FrozenSet[str]:
        return self.attendees | self.optional_attendees

    def has_attendees(self) -> bool:
        return bool(self.attendees or self.optional_attendees)


class AttendeeTier(str, Enum):
    """Which group of attendees a set of available ranges was computed for."""
    ALL = "all"
    MANDATORY = "mandatory"


@dataclass
class Availability:
    """
    Result of a meeting query: the free ranges and the tier they honor.
    """
    ranges: List[TimeRange]
    tier: AttendeeTier = AttendeeTier.ALL

    @property
    def includes_optional(self) -> bool:
        return self.tier is AttendeeTier.ALL


@dataclass
class MeetingSlot:
    """
    Represents a found available time slot.
    """
    time_range: TimeRange
    attendees: List[str]  # Identifiers of the attendees honored

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: HH:mm – HH:mm (N minutes)
        """
        start = format_minutes(self.time_range.start)
        end = format_minutes(self.time_range.end)
        duration = self.time_range.duration()

        return f"{start} – {end} ({duration} minutes)"
