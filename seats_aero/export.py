"""
JSON and CSV export of availability, trip and route records.
"""

import csv
import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, TextIO

from seats_aero.models import Availability, Cabin, Route, Trip

AVAILABILITY_CSV_HEADER = ["ID", "Date", "Origin", "Destination", "Source"] + [
    f"{cabin.code}_{column}"
    for cabin in Cabin
    for column in ("Available", "Miles", "Seats", "Direct")
]

TRIPS_CSV_HEADER = [
    "ID",
    "Cabin",
    "Carriers",
    "Flight_Numbers",
    "Stops",
    "Duration_Min",
    "Miles",
    "Taxes",
    "Seats",
    "Departs",
    "Arrives",
    "Source",
]

ROUTES_CSV_HEADER = ["ID", "Origin", "Destination", "Distance", "Source"]

TIME_FORMAT = "%Y-%m-%d %H:%M"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _time(value) -> str:
    return value.strftime(TIME_FORMAT) if value else ""


def _write_json(stream: TextIO, items: List[Dict[str, Any]], pretty: bool) -> None:
    if pretty:
        json.dump(items, stream, indent=2)
    else:
        json.dump(items, stream)
    stream.write("\n")


def _writer(stream: TextIO):
    return csv.writer(stream, lineterminator="\n")


def to_json(stream: TextIO, data: Sequence[Availability], pretty: bool = True) -> None:
    """Write availability records as a JSON array in API wire format."""
    _write_json(stream, [item.to_dict() for item in data], pretty)


def availability_from_json(stream: TextIO) -> List[Availability]:
    """Read availability records written by ``to_json``."""
    return [Availability.from_dict(item) for item in json.load(stream)]


def to_csv(stream: TextIO, data: Sequence[Availability]) -> None:
    """Write availability records as CSV with one column group per cabin."""
    writer = _writer(stream)
    writer.writerow(AVAILABILITY_CSV_HEADER)
    for item in data:
        row = [item.id, item.date, item.origin, item.destination, item.source]
        for cabin in Cabin:
            info = item.cabin(cabin)
            row += [
                _bool(info.available),
                info.mileage_cost,
                str(info.remaining_seats),
                _bool(info.direct),
            ]
        writer.writerow(row)


def trips_to_json(stream: TextIO, data: Sequence[Trip], pretty: bool = True) -> None:
    _write_json(stream, [trip.to_dict() for trip in data], pretty)


def trips_to_csv(stream: TextIO, data: Sequence[Trip]) -> None:
    writer = _writer(stream)
    writer.writerow(TRIPS_CSV_HEADER)
    for trip in data:
        writer.writerow(
            [
                trip.id,
                trip.cabin,
                trip.carriers,
                trip.flight_numbers,
                str(trip.stops),
                str(trip.total_duration),
                str(trip.mileage_cost),
                str(trip.total_taxes),
                str(trip.remaining_seats),
                _time(trip.departs_at),
                _time(trip.arrives_at),
                trip.source,
            ]
        )


def routes_to_json(stream: TextIO, data: Sequence[Route], pretty: bool = True) -> None:
    _write_json(stream, [route.to_dict() for route in data], pretty)


def routes_to_csv(stream: TextIO, data: Sequence[Route]) -> None:
    writer = _writer(stream)
    writer.writerow(ROUTES_CSV_HEADER)
    for route in data:
        writer.writerow(
            [
                route.id,
                route.origin_airport,
                route.destination_airport,
                str(route.distance),
                route.source,
            ]
        )


def export_to_file(
    path: Path, data: Sequence[Availability], export_format: ExportFormat
) -> Path:
    """
    Save availability records to a file.

    Args:
        path: Target file; the format's extension is appended when missing
        data: Records to save
        export_format: JSON or CSV

    Returns:
        Path actually written
    """
    suffix = f".{export_format.value}"
    if path.suffix != suffix:
        path = path.with_name(path.name + suffix)

    with open(path, "w", newline="") as f:
        if export_format is ExportFormat.CSV:
            to_csv(f, data)
        else:
            to_json(f, data, pretty=True)
    return path
