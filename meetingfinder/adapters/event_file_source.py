"""
Calendar file adapter: loads the events of a day from YAML or JSON.

Example (YAML):

    events:
      - title: Standup
        start: "09:00"
        end: "09:15"
        attendees: [alice@example.com, bob@example.com]
      - title: Lunch
        start: 720
        end: 779
        inclusive: true
        attendees: [alice@example.com]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pendulum
import yaml

from ..domain.exceptions import EventSourceError
from ..domain.models import MINUTES_PER_DAY, Event, TimeRange

logger = logging.getLogger(__name__)


def parse_clock_time(value: Any) -> int:
    """
    Convert an event boundary into minutes since midnight.

    Accepts integer minutes or an ``HH:mm`` string; ``"24:00"`` denotes the
    end of the day.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")

    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"Invalid time value: {value!r}")

    text = value.strip()
    if text == "24:00":
        return MINUTES_PER_DAY

    parsed = pendulum.from_format(text, "HH:mm")
    return parsed.hour * 60 + parsed.minute


class EventFileSource:
    """
    Event source backed by a calendar file.

    The file holds either a list of events or a mapping with an ``events``
    key. YAML is used unless the file ends with ``.json``.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_events(self) -> List[Event]:
        """Load the events (see :meth:`load_events`)."""
        return self.load_events()

    def load_events(self) -> List[Event]:
        """
        Read and validate all events from the calendar file.

        Raises:
            EventSourceError: If the file is missing, unreadable or an
                entry is malformed
        """
        raw_events = self._read_entries()

        events: List[Event] = []
        for index, entry in enumerate(raw_events):
            try:
                events.append(self._parse_event(entry))
            except (KeyError, TypeError, ValueError) as exc:
                raise EventSourceError(
                    f"Invalid event #{index + 1} in {self.path}: {exc}"
                ) from exc

        logger.info("Loaded %d events from %s", len(events), self.path)
        return events

    def _read_entries(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            raise EventSourceError(f"Calendar file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise EventSourceError(f"Could not parse {self.path}: {exc}") from exc

        if data is None:
            return []

        if isinstance(data, dict):
            data = data.get("events") or []

        if not isinstance(data, list):
            raise EventSourceError(
                f"{self.path} must contain a list of events or an 'events' mapping."
            )

        return data

    def _parse_event(self, entry: Dict[str, Any]) -> Event:
        if not isinstance(entry, dict):
            raise TypeError(f"expected a mapping, got {type(entry).__name__}")

        start = parse_clock_time(entry["start"])
        end = parse_clock_time(entry["end"])
        inclusive = bool(entry.get("inclusive", False))

        attendees = entry.get("attendees") or []
        if isinstance(attendees, str):
            attendees = [attendees]

        when = TimeRange.from_start_end(start, end, inclusive=inclusive)

        return Event(
            when=when,
            attendees=frozenset(str(a).lower() for a in attendees),
            title=str(entry.get("title", "")),
        )
