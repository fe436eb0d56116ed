"""
Command-line interface for seats.aero award availability.

Run without a subcommand to open the terminal UI.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from seats_aero import export, tui
from seats_aero.client import Client
from seats_aero.config import (
    Config,
    default_config_path,
    load_config,
    mask_api_key,
    write_sample_config,
)
from seats_aero.errors import ConfigError, SeatsAeroError
from seats_aero.guided import run_guided
from seats_aero.logging_config import setup_logging
from seats_aero.models import (
    Availability,
    AvailabilityParams,
    Cabin,
    RoutesParams,
    SearchParams,
    parse_list,
)
from seats_aero.render import availability_table, routes_table, trip_details

app = typer.Typer(help="Search for award flight availability on seats.aero")
config_app = typer.Typer(help="View and manage configuration")
app.add_typer(config_app, name="config")


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class State:
    """Per-invocation state shared with subcommands through the typer context."""

    config: Optional[Config] = None
    config_error: Optional[ConfigError] = None


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _config(ctx: typer.Context) -> Config:
    state: State = ctx.obj
    if state.config is None:
        raise _fail(f"configuration not loaded: {state.config_error}")
    return state.config


def _client(ctx: typer.Context) -> Client:
    config = _config(ctx)
    try:
        config.validate()
    except ConfigError as e:
        raise _fail(str(e))
    return Client(config.api_key)


def _parse_cabin(value: Optional[str]) -> Optional[Cabin]:
    try:
        return Cabin.parse_optional(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--cabin")


def _echo_lines(lines: List[str]) -> None:
    for line in lines:
        typer.echo(line)


def _emit_availability(results: List[Availability], output: OutputFormat) -> None:
    if output is OutputFormat.JSON:
        export.to_json(sys.stdout, results, pretty=True)
    elif output is OutputFormat.CSV:
        export.to_csv(sys.stdout, results)
    else:
        _echo_lines(availability_table(results))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            help="Config file (default is the seats-aero app dir config.yaml)",
        ),
    ] = None,
    log_level: Annotated[
        LogLevel, typer.Option("--log-level", help="Logging level (logs go to stderr)")
    ] = LogLevel.WARNING,
):
    """Search for award flight availability on seats.aero."""
    setup_logging(log_level.value)

    state = State()
    try:
        state.config = load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Warning: {e}", err=True)
        state.config_error = e
    ctx.obj = state

    if ctx.invoked_subcommand is None:
        run_tui(ctx)


@app.command("tui")
def run_tui(ctx: typer.Context):
    """Launch the interactive terminal UI."""
    client = _client(ctx)
    tui.run(_config(ctx), client)


@app.command()
def guided(ctx: typer.Context):
    """Step-by-step prompts for searches, availability, routes and trips."""
    config = _config(ctx)
    try:
        config.validate()
    except ConfigError as e:
        typer.secho(f"Error: {e}\n", fg="red", err=True)
        typer.echo("Set your API key:")
        typer.echo('  export SEATS_AERO_API_KEY="your-api-key"')
        typer.echo(f"\nOr create a config file at {default_config_path()}")
        raise typer.Exit(1)

    try:
        run_guided(config, Client(config.api_key))
    except typer.Abort:
        typer.echo("\nGoodbye!")


@app.command()
def search(
    ctx: typer.Context,
    origin: Annotated[
        str, typer.Option("--from", help="Origin airport(s), comma-separated")
    ],
    destination: Annotated[
        str, typer.Option("--to", help="Destination airport(s), comma-separated")
    ],
    start_date: Annotated[
        str, typer.Option("--start-date", help="Start date (YYYY-MM-DD)")
    ] = "",
    end_date: Annotated[
        str, typer.Option("--end-date", help="End date (YYYY-MM-DD)")
    ] = "",
    cabin: Annotated[
        Optional[str],
        typer.Option("--cabin", help="Cabin class: Y/economy, W/premium, J/business, F/first"),
    ] = None,
    source: Annotated[
        str, typer.Option("--source", help="Mileage program source(s), comma-separated")
    ] = "",
    direct_only: Annotated[
        bool, typer.Option("--direct-only", help="Only show direct flights")
    ] = False,
    output: Annotated[
        OutputFormat, typer.Option("--output", "-o", help="Output format")
    ] = OutputFormat.TABLE,
    first_page: Annotated[
        bool, typer.Option("--first-page", help="Fetch only the first page of results")
    ] = False,
):
    """Search cached award availability between airports.

    Examples:

      seats search --from SFO --to NRT --start-date 2024-06-01

      seats search --from SFO,LAX --to NRT,HND --cabin J --source united,aeroplan

      seats search --from SFO --to NRT --direct-only --output csv > results.csv
    """
    params = SearchParams(
        origin_airports=tuple(parse_list(origin)),
        destination_airports=tuple(parse_list(destination)),
        start_date=start_date.strip(),
        end_date=end_date.strip(),
        cabin=_parse_cabin(cabin),
        sources=tuple(parse_list(source, upper=False)),
        direct_only=direct_only,
    )
    client = _client(ctx)

    try:
        if first_page:
            results = client.search(params).data
        else:
            results = client.search_all(params)
    except SeatsAeroError as e:
        raise _fail(str(e))

    _emit_availability(results, output)


@app.command()
def availability(
    ctx: typer.Context,
    source: Annotated[str, typer.Option("--source", help="Mileage program source")],
    cabin: Annotated[
        Optional[str], typer.Option("--cabin", help="Cabin class: Y, W, J, F")
    ] = None,
    origin_region: Annotated[
        str, typer.Option("--origin-region", help="Origin region filter")
    ] = "",
    destination_region: Annotated[
        str, typer.Option("--dest-region", help="Destination region filter")
    ] = "",
    start_date: Annotated[
        str, typer.Option("--start-date", help="Start date (YYYY-MM-DD)")
    ] = "",
    end_date: Annotated[
        str, typer.Option("--end-date", help="End date (YYYY-MM-DD)")
    ] = "",
    output: Annotated[
        OutputFormat, typer.Option("--output", "-o", help="Output format")
    ] = OutputFormat.TABLE,
    first_page: Annotated[
        bool, typer.Option("--first-page", help="Fetch only the first page of results")
    ] = False,
):
    """Bulk availability for one mileage program.

    Examples:

      seats availability --source aeroplan

      seats availability --source delta --origin-region "North America" --dest-region Europe
    """
    params = AvailabilityParams(
        source=source.strip().lower(),
        cabin=_parse_cabin(cabin),
        origin_region=origin_region.strip(),
        destination_region=destination_region.strip(),
        start_date=start_date.strip(),
        end_date=end_date.strip(),
    )
    client = _client(ctx)

    try:
        if first_page:
            results = client.get_availability(params).data
        else:
            results = client.get_availability_all(params)
    except SeatsAeroError as e:
        raise _fail(str(e))

    _emit_availability(results, output)


@app.command()
def routes(
    ctx: typer.Context,
    source: Annotated[str, typer.Option("--source", help="Mileage program source")] = "",
    origin: Annotated[
        str, typer.Option("--origin", help="Filter by origin airport")
    ] = "",
    output: Annotated[
        OutputFormat, typer.Option("--output", "-o", help="Output format")
    ] = OutputFormat.TABLE,
):
    """List routes available for a mileage program."""
    params = RoutesParams(source=source.strip().lower(), origin=origin.strip().upper())
    client = _client(ctx)

    try:
        found = client.get_routes(params)
    except SeatsAeroError as e:
        raise _fail(str(e))

    if output is OutputFormat.JSON:
        export.routes_to_json(sys.stdout, found)
    elif output is OutputFormat.CSV:
        export.routes_to_csv(sys.stdout, found)
    else:
        _echo_lines(routes_table(found))


@app.command()
def trips(
    ctx: typer.Context,
    availability_id: Annotated[
        str, typer.Argument(help="Availability ID from search or availability results")
    ],
    output: Annotated[
        OutputFormat, typer.Option("--output", "-o", help="Output format")
    ] = OutputFormat.TABLE,
):
    """Flight-level trip details for one availability."""
    client = _client(ctx)

    try:
        found = client.get_trips(availability_id.strip())
    except SeatsAeroError as e:
        raise _fail(str(e))

    if output is OutputFormat.JSON:
        export.trips_to_json(sys.stdout, found)
    elif output is OutputFormat.CSV:
        export.trips_to_csv(sys.stdout, found)
    else:
        _echo_lines(trip_details(found))


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Show the current configuration."""
    state: State = ctx.obj
    config = state.config
    if config is None:
        typer.echo("No configuration loaded")
        return

    typer.echo("Configuration:")
    typer.echo(f"  API Key: {mask_api_key(config.api_key)}")
    typer.echo(f"  Default Sources: {config.default_sources}")
    typer.echo(f"  Default Cabins: {config.default_cabins}")
    typer.echo(f"  Preferred Airports: {config.preferred_airports}")
    typer.echo(f"\nConfig file path: {config.path or default_config_path()}")


@config_app.command("init")
def config_init(
    config_path: Annotated[
        Optional[Path], typer.Option("--path", help="Where to create the config file")
    ] = None,
):
    """Create a sample YAML configuration file."""
    if config_path is None:
        config_path = default_config_path()

    if config_path.exists():
        overwrite = typer.confirm(
            f"Configuration file {config_path} already exists. Overwrite?"
        )
        if not overwrite:
            typer.echo("Operation cancelled.")
            raise typer.Exit()

    write_sample_config(config_path)
    typer.echo(f"✅ Sample configuration created at: {config_path}")
    typer.echo("💡 Add your partner API key as api_key, or set SEATS_AERO_API_KEY.")


if __name__ == "__main__":
    app()
