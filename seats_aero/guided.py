"""
Prompt-driven interactive mode.

A menu loop built on typer prompts: pick an action, fill in its fields,
see the results and optionally export them.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, TypeVar

import typer

from seats_aero.client import Client
from seats_aero.config import Config
from seats_aero.errors import SeatsAeroError
from seats_aero.export import ExportFormat, export_to_file
from seats_aero.models import (
    VALID_SOURCES,
    Availability,
    AvailabilityParams,
    Cabin,
    RoutesParams,
    SearchParams,
    parse_list,
    source_display_name,
)
from seats_aero.render import availability_table, routes_table, trip_details

V = TypeVar("V")

CABIN_OPTIONS: List[Tuple[str, Optional[Cabin]]] = [("All cabins", None)] + [
    (cabin.display_name, cabin) for cabin in Cabin
]


def choose(title: str, options: Sequence[Tuple[str, V]], default: int = 1) -> V:
    """
    Show a numbered menu and return the value of the chosen option.

    Args:
        title: Question shown above the options
        options: (label, value) pairs
        default: 1-based option selected on empty input

    Returns:
        Value of the selected option
    """
    typer.echo(title)
    for index, (label, _) in enumerate(options, start=1):
        typer.echo(f"  {index}. {label}")
    while True:
        choice = typer.prompt("Choice", default=default, type=int)
        if 1 <= choice <= len(options):
            return options[choice - 1][1]
        typer.echo(f"Please enter a number between 1 and {len(options)}")


def _required(label: str, default: str = "") -> str:
    while True:
        value = typer.prompt(label, default=default, show_default=bool(default)).strip()
        if value:
            return value
        typer.echo(f"{label} is required")


def _optional(label: str, default: str = "") -> str:
    return typer.prompt(label, default=default, show_default=bool(default)).strip()


def _show(lines: List[str]) -> None:
    typer.echo()
    for line in lines:
        typer.echo(line)
    typer.echo()


def prompt_export(data: Sequence[Availability]) -> Optional[Path]:
    export_format = choose(
        "Export results?",
        [("No", None), ("JSON", ExportFormat.JSON), ("CSV", ExportFormat.CSV)],
    )
    if export_format is None:
        return None

    filename = _required("Filename")
    path = export_to_file(Path(filename), data, export_format)
    typer.echo(f"Exported to {path}\n")
    return path


def guided_search(config: Config, client: Client) -> None:
    origin = _required("Origin airport(s), e.g. SFO, LAX", ", ".join(config.preferred_airports))
    destination = _required("Destination airport(s), e.g. NRT, HND")
    start_date = _optional("Start date (YYYY-MM-DD)")
    end_date = _optional("End date (YYYY-MM-DD, optional)")
    cabin = choose("Cabin class", CABIN_OPTIONS)
    source = _optional(
        "Mileage program(s) (optional), e.g. aeroplan, united",
        ", ".join(config.default_sources),
    )

    typer.echo("\nSearching...")
    results = client.search_all(
        SearchParams(
            origin_airports=tuple(parse_list(origin)),
            destination_airports=tuple(parse_list(destination)),
            start_date=start_date,
            end_date=end_date,
            cabin=cabin,
            sources=tuple(parse_list(source, upper=False)),
        )
    )
    _show(availability_table(results))
    if results:
        prompt_export(results)


def guided_availability(config: Config, client: Client) -> None:
    source = choose(
        "Mileage program",
        [(source_display_name(s), s) for s in VALID_SOURCES],
    )
    cabin = choose("Cabin class", CABIN_OPTIONS)

    typer.echo("\nFetching availability...")
    results = client.get_availability_all(AvailabilityParams(source=source, cabin=cabin))
    _show(availability_table(results))
    if results:
        prompt_export(results)


def guided_routes(config: Config, client: Client) -> None:
    source = choose(
        "Mileage program",
        [("All programs", "")] + [(source_display_name(s), s) for s in VALID_SOURCES],
    )
    origin = _optional("Origin airport (optional), e.g. SFO")

    typer.echo("\nFetching routes...")
    routes = client.get_routes(RoutesParams(source=source, origin=origin.upper()))
    _show(routes_table(routes))


def guided_trips(config: Config, client: Client) -> None:
    availability_id = _required("Availability ID (from search or availability results)")

    typer.echo("\nFetching trip details...")
    _show(trip_details(client.get_trips(availability_id)))


ACTIONS = [
    ("Search for flights", guided_search),
    ("View bulk availability", guided_availability),
    ("List routes", guided_routes),
    ("Get trip details", guided_trips),
    ("Exit", None),
]


def run_guided(config: Config, client: Client) -> None:
    """Run the menu loop until the user picks Exit or aborts."""
    typer.secho("seats.aero CLI", fg="magenta", bold=True)
    typer.secho("Search for award flight availability\n", fg="bright_black")

    while True:
        action = choose("What would you like to do?", ACTIONS)
        if action is None:
            typer.echo("Goodbye!")
            return
        try:
            action(config, client)
        except SeatsAeroError as e:
            typer.secho(f"Error: {e}\n", fg="red", err=True)
        except OSError as e:
            typer.secho(f"Error: failed to write file: {e}\n", fg="red", err=True)
