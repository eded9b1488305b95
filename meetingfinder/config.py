"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import ConfigurationError
from .domain.models import MINUTES_PER_DAY, TimeRange


class DefaultsConfig(BaseModel):
    """Default settings for a search."""
    duration_minutes: int = 30
    day_start: int = 0  # Minutes since midnight
    day_end: int = MINUTES_PER_DAY

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is not negative."""
        if value < 0:
            raise ValueError("duration_minutes must not be negative")
        return value

    @field_validator("day_start", "day_end")
    @classmethod
    def validate_minute(cls, v: int) -> int:
        """Validate a day boundary lies between 00:00 and 24:00."""
        if not 0 <= v <= MINUTES_PER_DAY:
            raise ValueError(f"Day boundary must be between 0 and {MINUTES_PER_DAY}, got {v}")
        return v

    @model_validator(mode="after")
    def validate_day_order(self) -> "DefaultsConfig":
        """Ensure the configured day opens before it closes."""
        if self.day_end <= self.day_start:
            raise ValueError("day_end must be later than day_start")
        return self

    def get_day(self) -> TimeRange:
        """Get the searchable part of the day as a time range."""
        return TimeRange(start=self.day_start, end=self.day_end)


class Person(BaseModel):
    """Person/attendee configuration."""
    name: str  # Used as alias
    email: str


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    events_file: str = "events.yaml"
    log_level: str = "WARNING"
    people: List[Person] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept the standard logging level names in any case."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("people")
    @classmethod
    def validate_people(cls, value: List[Person]) -> List[Person]:
        """Ensure aliases and emails are unique."""
        seen_names: set[str] = set()
        seen_emails: set[str] = set()
        for person in value:
            name_key = person.name.lower()
            email_key = person.email.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate person name detected: {person.name}")
            if email_key in seen_emails:
                raise ValueError(f"Duplicate person email detected: {person.email}")
            seen_names.add(name_key)
            seen_emails.add(email_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    def get_events_path(self, config_path: Path | None = None) -> Path:
        """
        Resolve the calendar file. Relative paths are taken relative to the
        directory of the config file, if one is given.
        """
        events_path = Path(self.events_file).expanduser()
        if events_path.is_absolute() or config_path is None:
            return events_path
        return config_path.parent / events_path

    def find_person_by_name(self, name: str) -> Person | None:
        """Find a person by their name (alias)."""
        for person in self.people:
            if person.name.lower() == name.lower():
                return person
        return None

    def resolve_attendee(self, identifier: str) -> str:
        """
        Resolve an attendee identifier (name/alias or email) to an email address.

        Args:
            identifier: Name/alias or email address

        Returns:
            Email address

        Raises:
            ConfigurationError: If identifier cannot be resolved
        """
        # Check if it's an email (contains @)
        if "@" in identifier:
            return identifier.lower()

        person = self.find_person_by_name(identifier)
        if person:
            return person.email.lower()

        raise ConfigurationError(
            f"Unknown attendee identifier: '{identifier}'. "
            f"Use an email address or a configured name."
        )

    def resolve_attendees(self, identifiers: Sequence[str]) -> List[str]:
        """
        Resolve multiple attendee identifiers, ensuring uniqueness.

        Args:
            identifiers: Iterable of aliases or email addresses (may be empty)

        Returns:
            List of unique email addresses, in input order
        """
        resolved_emails: List[str] = []
        unknown_identifiers: List[str] = []

        for identifier in identifiers:
            try:
                email = self.resolve_attendee(identifier)
            except ConfigurationError:
                unknown_identifiers.append(identifier)
                continue

            if email not in resolved_emails:
                resolved_emails.append(email)

        if unknown_identifiers:
            missing = ", ".join(sorted(set(unknown_identifiers)))
            raise ConfigurationError(
                f"Unknown attendee identifier(s): {missing}. "
                "Ensure they exist in the configuration or provide valid email addresses."
            )

        return resolved_emails


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
