"""
Tests for domain models.
"""

import pytest

from meetingfinder.domain.exceptions import InvalidTimeRangeError
from meetingfinder.domain.models import (
    END_OF_DAY,
    MINUTES_PER_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    MeetingSlot,
    TimeRange,
    by_end,
    by_start,
    get_time_in_minutes,
)


class TestTimeRange:
    """Tests for TimeRange model."""

    def test_create_valid_time_range(self):
        """Test creating a valid time range."""
        tr = TimeRange(start=540, end=1020)

        assert tr.start == 540
        assert tr.end == 1020
        assert tr.duration() == 480  # 8 hours

    def test_invalid_time_range_raises_error(self):
        """Test that creating an invalid time range raises ValueError."""
        with pytest.raises(ValueError, match="Start time .* must be before end time"):
            TimeRange(start=1020, end=540)

    def test_empty_time_range_raises_error(self):
        """A range needs at least one minute."""
        with pytest.raises(InvalidTimeRangeError):
            TimeRange(start=60, end=60)

    def test_negative_start_raises_error(self):
        with pytest.raises(InvalidTimeRangeError, match="must not be negative"):
            TimeRange(start=-5, end=10)

    def test_whole_day(self):
        """The whole day spans [0, 1440)."""
        assert WHOLE_DAY == TimeRange(0, MINUTES_PER_DAY)
        assert WHOLE_DAY.duration() == 1440
        assert END_OF_DAY == 1439

    def test_from_start_end_exclusive(self):
        tr = TimeRange.from_start_end(60, 120, inclusive=False)

        assert tr == TimeRange(60, 120)
        assert not tr.contains(120)

    def test_from_start_end_inclusive(self):
        """An inclusive end minute belongs to the range."""
        tr = TimeRange.from_start_end(60, 120, inclusive=True)

        assert tr == TimeRange(60, 121)
        assert tr.contains(120)
        assert tr.duration() == 61

    def test_from_start_duration(self):
        assert TimeRange.from_start_duration(90, 30) == TimeRange(90, 120)

    def test_overlaps(self):
        """Test overlap detection."""
        tr1 = TimeRange(540, 720)
        tr2 = TimeRange(660, 840)
        tr3 = TimeRange(840, 1020)

        assert tr1.overlaps(tr2)
        assert tr2.overlaps(tr1)
        assert not tr2.overlaps(tr3)  # adjacent ranges do not overlap
        assert not tr1.overlaps(tr3)

    def test_nested_ranges_overlap(self):
        outer = TimeRange(0, 600)
        inner = TimeRange(100, 200)

        assert outer.overlaps(inner)
        assert inner.overlaps(outer)

    def test_contains_point(self):
        tr = TimeRange(60, 120)

        assert tr.contains(60)
        assert tr.contains(119)
        assert not tr.contains(120)
        assert not tr.contains(59)

    def test_contains_range(self):
        tr = TimeRange(60, 120)

        assert tr.contains(TimeRange(60, 120))
        assert tr.contains(TimeRange(70, 80))
        assert not tr.contains(TimeRange(50, 80))
        assert not tr.contains(TimeRange(100, 121))

    def test_intersect(self):
        """Test intersection calculation."""
        intersection = TimeRange(540, 720).intersect(TimeRange(660, 840))

        assert intersection == TimeRange(660, 720)

    def test_intersect_no_overlap(self):
        """Test intersection with no overlap returns None."""
        assert TimeRange(540, 720).intersect(TimeRange(720, 840)) is None

    def test_sort_keys(self):
        ranges = [TimeRange(30, 200), TimeRange(0, 300), TimeRange(100, 150)]

        assert [r.start for r in sorted(ranges, key=by_start)] == [0, 30, 100]
        assert [r.end for r in sorted(ranges, key=by_end)] == [150, 200, 300]

    def test_str_uses_clock_format(self):
        assert str(TimeRange(570, 1440)) == "09:30 - 24:00"


class TestClockHelpers:
    """Tests for minute conversion helpers."""

    def test_get_time_in_minutes(self):
        assert get_time_in_minutes(0, 0) == 0
        assert get_time_in_minutes(9, 30) == 570
        assert get_time_in_minutes(24, 0) == 1440

    @pytest.mark.parametrize("hours,minutes", [(25, 0), (10, 60), (24, 1), (-1, 0)])
    def test_get_time_in_minutes_rejects_invalid(self, hours, minutes):
        with pytest.raises(ValueError, match="Invalid clock time"):
            get_time_in_minutes(hours, minutes)


class TestEventAndRequest:
    """Tests for Event and MeetingRequest."""

    def test_event_normalizes_attendees(self):
        event = Event(when=TimeRange(0, 30), attendees=["A", "B", "A"], title="Sync")

        assert event.attendees == frozenset({"A", "B"})
        assert event.involves_any(frozenset({"B", "C"}))
        assert not event.involves_any(frozenset({"C"}))

    def test_event_single_attendee_string(self):
        """A bare string is one attendee, not a set of characters."""
        event = Event(when=TimeRange(0, 30), attendees="Bob")

        assert event.attendees == frozenset({"Bob"})

    def test_event_without_attendees_involves_nobody(self):
        event = Event(when=TimeRange(0, 30))

        assert not event.involves_any(frozenset({"A"}))

    def test_request_all_attendees(self):
        request = MeetingRequest(
            attendees=["A"],
            optional_attendees={"B", "C"},
            duration_minutes=45,
        )

        assert request.all_attendees == frozenset({"A", "B", "C"})
        assert request.has_attendees()

    def test_request_without_attendees(self):
        assert not MeetingRequest(duration_minutes=10).has_attendees()

    def test_request_is_hashable(self):
        """Requests are immutable value objects."""
        first = MeetingRequest(attendees=["A"], duration_minutes=30)
        second = MeetingRequest(attendees={"A"}, duration_minutes=30)

        assert first == second
        assert hash(first) == hash(second)


class TestMeetingSlot:
    """Tests for MeetingSlot display."""

    def test_format_display(self):
        slot = MeetingSlot(time_range=TimeRange(570, 630), attendees=["a@example.com"])

        assert slot.format_display() == "09:30 – 10:30 (60 minutes)"
