"""
Adapters layer - External integrations (calendar files).
"""

from .event_file_source import EventFileSource, parse_clock_time

__all__ = ["EventFileSource", "parse_clock_time"]
