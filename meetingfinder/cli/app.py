"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.event_file_source import EventFileSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import MeetingFinderError
from ..domain.meeting_query import MeetingQuery
from ..domain.models import AttendeeTier
from ..logging_config import setup_logging
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="meetingfinder",
    help="Find the times of a day at which a meeting can take place",
    add_completion=False
)

console = Console()


def _load_config(config_file: Optional[Path]) -> Tuple[AppConfig, Optional[Path]]:
    """
    Load the configuration.

    An explicitly given file must exist; without one the default location is
    tried and built-in defaults are used if nothing is found there.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file), config_file

    config_path = get_default_config_path()
    if not config_path.exists():
        return AppConfig(), None

    return AppConfig.load_from_yaml(config_path), config_path


def _resolve_events_path(
    config: AppConfig,
    config_path: Optional[Path],
    events_file: Optional[Path]
) -> Path:
    if events_file is not None:
        return events_file
    return config.get_events_path(config_path)


@app.command()
def find(
    attendees: Annotated[Optional[List[str]], typer.Argument(help="Mandatory attendees (names or email addresses).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optional attendee; repeat for several.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", min=0, help="Meeting duration in minutes")] = None,
    events_file: Annotated[Optional[Path], typer.Option("--events", "-e", help="Calendar file (YAML or JSON). Defaults to events_file from the config")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Find available meeting times.

    Examples:

        # Alice and Bob must both attend
        meetingfinder find alice bob --duration 60

        # Bob joins only if a time suits him as well
        meetingfinder find alice --optional bob

        # Use a different calendar file
        meetingfinder find alice -e calendar.json
    """
    try:
        config, config_path = _load_config(config_file)
        setup_logging(logging.DEBUG if verbose else config.log_level)

        mandatory = config.resolve_attendees(attendees or [])
        optional_emails = [
            email for email in config.resolve_attendees(optional or [])
            if email not in mandatory
        ]
        min_duration = duration if duration is not None else config.defaults.duration_minutes
        day = config.defaults.get_day()
        events_path = _resolve_events_path(config, config_path, events_file)

        console.print(f"\n[bold cyan]🗓️  Meetingfinder[/bold cyan] [dim]({events_path})[/dim]\n")
        console.print(f"   Attendees: {', '.join(mandatory) or '-'}")
        console.print(f"   Optional:  {', '.join(optional_emails) or '-'}")
        console.print(f"   Duration:  {min_duration} minutes")
        console.print(f"   Day:       {day}")
        console.print()

        service = MeetingFinderService(
            event_source=EventFileSource(events_path),
            meeting_query=MeetingQuery(day=day)
        )

        slots, tier = asyncio.run(
            service.find_slots(
                attendees=mandatory,
                optional_attendees=optional_emails,
                duration_minutes=min_duration
            )
        )

        if not slots:
            console.print(
                "[yellow]⚠ No available time slots found.[/yellow]\n"
                "Try a shorter duration or fewer attendees."
            )
        else:
            console.print(f"[bold green]✓ {len(slots)} available time slot(s) found:[/bold green]\n")

            for slot in slots:
                console.print(f"  {slot.format_display()}")

            if tier is AttendeeTier.MANDATORY:
                console.print(
                    "\n[yellow]No time suits every optional attendee.\n"
                    "Showing times for mandatory attendees only.[/yellow]"
                )

        console.print()

    except (FileNotFoundError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_people(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured people.
    """
    try:
        config, _ = _load_config(config_file)

        if not config.people:
            console.print("[yellow]No people defined in the config file.[/yellow]")
            return

        table = Table(
            title="Configured people",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("E-Mail", style="dim")

        for person in config.people:
            table.add_row(person.name, person.email)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def show_events(
    events_file: Optional[Path] = typer.Option(
        None,
        "--events", "-e",
        help="Calendar file (YAML or JSON)"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Show the events of the calendar file.
    """
    try:
        config, config_path = _load_config(config_file)
        setup_logging(config.log_level)

        events_path = _resolve_events_path(config, config_path, events_file)
        events = EventFileSource(events_path).load_events()

        if not events:
            console.print("[yellow]The calendar contains no events.[/yellow]")
            return

        table = Table(
            title=f"Events in {events_path.name}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Time", style="bold yellow")
        table.add_column("Title")
        table.add_column("Attendees", style="dim")

        for event in sorted(events, key=lambda e: (e.when.start, e.when.end)):
            table.add_row(
                event.when.format_clock(),
                event.title or "-",
                ", ".join(sorted(event.attendees))
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
