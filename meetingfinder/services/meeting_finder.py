"""
Application services for finding meeting times.

The service coordinates fetching events via an event source adapter and
delegates the actual availability calculation to the domain-level
``MeetingQuery``. This keeps the CLI thin and allows the event source to be
replaced by a stub in tests via a simple protocol.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol, Sequence, Tuple

from ..domain.meeting_query import MeetingQuery
from ..domain.models import (
    AttendeeTier,
    Availability,
    Event,
    MeetingRequest,
    MeetingSlot,
)

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    async def get_events(self) -> List[Event]:
        """Return the already scheduled events of the day."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and the meeting query.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        meeting_query: MeetingQuery,
    ) -> None:
        self._event_source = event_source
        self._meeting_query = meeting_query

    async def find_slots(
        self,
        *,
        attendees: Sequence[str],
        optional_attendees: Sequence[str] = (),
        duration_minutes: int,
    ) -> Tuple[List[MeetingSlot], AttendeeTier]:
        """
        Retrieve events and compute the slots for the requested meeting.

        Returns the slots together with the attendee tier they honor.
        """
        request = MeetingRequest(
            attendees=frozenset(attendees),
            optional_attendees=frozenset(optional_attendees),
            duration_minutes=duration_minutes,
        )
        events = await self.fetch_events()
        availability = self.find_availability(events, request)

        honored = request.all_attendees if availability.includes_optional else request.attendees
        slots = [
            MeetingSlot(time_range=time_range, attendees=sorted(honored))
            for time_range in availability.ranges
        ]

        return slots, availability.tier

    async def fetch_events(self) -> List[Event]:
        """Fetch the events from the configured source."""
        events = await self._event_source.get_events()
        logger.debug("Fetched %d events", len(events))
        return list(events)

    def find_availability(
        self,
        events: Iterable[Event],
        request: MeetingRequest,
    ) -> Availability:
        """Run the meeting query on already fetched events."""
        return self._meeting_query.find_availability(events, request)
