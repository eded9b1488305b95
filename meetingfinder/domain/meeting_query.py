"""
Core business logic for finding meeting times within a single day.

Pure domain logic without any external dependencies (no API calls,
no database, no I/O).
"""

import logging
from typing import FrozenSet, Iterable, List

from .models import (
    WHOLE_DAY,
    AttendeeTier,
    Availability,
    Event,
    MeetingRequest,
    TimeRange,
    by_start,
)

logger = logging.getLogger(__name__)


def merge_overlapping(ranges: Iterable[TimeRange]) -> List[TimeRange]:
    """
    Fold time ranges into a set of pairwise non-overlapping ranges.

    Each incoming range absorbs every accumulated range it overlaps, so a
    single range may bridge several earlier ones. Ranges that merely touch
    (``a.end == b.start``) stay separate.

    Example: [09:00-10:00, 09:30-11:00, 11:00-12:00]
          -> [09:00-11:00, 11:00-12:00]
    """
    merged: List[TimeRange] = []

    for candidate in ranges:
        overlapping = [taken for taken in merged if candidate.overlaps(taken)]

        if not overlapping:
            merged = merged + [candidate]
            continue

        span = TimeRange(
            start=min([candidate.start] + [taken.start for taken in overlapping]),
            end=max([candidate.end] + [taken.end for taken in overlapping]),
        )
        merged = [taken for taken in merged if not candidate.overlaps(taken)] + [span]

    return merged


class MeetingQuery:
    """
    Finds the times of a day at which a requested meeting can take place.

    Algorithm:
    1. Collect the ranges of all events involving the relevant attendees
    2. Merge overlapping ranges into busy blocks
    3. Take the gaps between busy blocks that fit the meeting duration
    4. Prefer the gaps that suit every attendee, optional ones included;
       fall back to mandatory attendees only when there are none
    """

    def __init__(self, day: TimeRange = WHOLE_DAY):
        self.day = day

    def query(
        self,
        events: Iterable[Event],
        request: MeetingRequest
    ) -> List[TimeRange]:
        """
        Return the ranges in which the requested meeting could be scheduled.

        Args:
            events: Already scheduled events
            request: The meeting to find a time for

        Returns:
            Non-overlapping ranges sorted by start, each at least
            ``request.duration_minutes`` long
        """
        return self.find_availability(events, request).ranges

    def find_availability(
        self,
        events: Iterable[Event],
        request: MeetingRequest
    ) -> Availability:
        """
        Like :meth:`query`, but also report which attendee tier was honored.
        """
        duration = request.duration_minutes

        if duration > self.day.duration():
            logger.debug(
                "Requested %d minutes exceed the day length of %d minutes",
                duration,
                self.day.duration()
            )
            return Availability(ranges=[], tier=AttendeeTier.ALL)

        if not request.has_attendees():
            return Availability(ranges=[self.day], tier=AttendeeTier.ALL)

        # Events may be a one-shot iterable; both passes need them
        events = list(events)

        available_mandatory = self.find_free_ranges(
            self.collect_busy_ranges(events, request.attendees),
            duration
        )
        available_all = self.find_free_ranges(
            self.collect_busy_ranges(events, request.all_attendees),
            duration
        )

        if available_all:
            return Availability(ranges=available_all, tier=AttendeeTier.ALL)

        if request.attendees:
            logger.info(
                "No time suits the optional attendees %s, ignoring them",
                sorted(request.optional_attendees)
            )
            return Availability(ranges=available_mandatory, tier=AttendeeTier.MANDATORY)

        return Availability(ranges=[], tier=AttendeeTier.ALL)

    def collect_busy_ranges(
        self,
        events: Iterable[Event],
        attendees: FrozenSet[str]
    ) -> List[TimeRange]:
        """
        Merge the ranges of all events attended by at least one of
        ``attendees`` into non-overlapping busy blocks (in no particular
        order). Ranges are clipped to the day.
        """
        candidates: List[TimeRange] = []

        for event in events:
            if not event.involves_any(attendees):
                continue

            clipped = event.when.intersect(self.day)
            if clipped is None:
                logger.debug("Ignoring event %r outside of %s", event.title, self.day)
                continue

            candidates.append(clipped)

        return merge_overlapping(candidates)

    def find_free_ranges(
        self,
        busy_ranges: List[TimeRange],
        duration_minutes: int
    ) -> List[TimeRange]:
        """
        Derive the free gaps of the day around the busy blocks.

        Example:
        Day: 00:00 - 24:00
        Busy: [10:00-11:00, 14:00-15:00]
        Result: [00:00-10:00, 11:00-14:00, 15:00-24:00]
        """
        if not busy_ranges:
            return [self.day]

        sorted_busy = sorted(busy_ranges, key=by_start)
        free_ranges: List[TimeRange] = []
        current_start = self.day.start

        for busy in sorted_busy:
            # Free time before this busy block
            if self._fits(current_start, busy.start, duration_minutes):
                free_ranges.append(
                    TimeRange.from_start_end(current_start, busy.start, inclusive=False)
                )

            current_start = max(current_start, busy.end)

        # Remaining free time after the last busy block
        if self._fits(current_start, self.day.end, duration_minutes):
            free_ranges.append(
                TimeRange.from_start_end(current_start, self.day.end, inclusive=False)
            )

        return free_ranges

    @staticmethod
    def _fits(gap_start: int, gap_end: int, duration_minutes: int) -> bool:
        """A gap qualifies if it is non-empty and long enough for the meeting."""
        length = gap_end - gap_start
        return length > 0 and length >= duration_minutes
