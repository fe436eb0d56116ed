"""Plain-text rendering of API records for the command line."""

from typing import List, Sequence

from seats_aero.models import (
    Availability,
    Cabin,
    CabinAvailability,
    Route,
    Trip,
    source_display_name,
)

TIME_FORMAT = "%Y-%m-%d %H:%M"

_ROW = "{:<12} {:<5} {:<5} {:<15} {:<8} {:<8} {:<8} {:<8}"


def format_miles(miles: str) -> str:
    """Abbreviate a mileage string: "50000" -> "50k", unknown -> "?"."""
    if not miles or miles == "0":
        return "?"
    if len(miles) > 3:
        return f"{miles[:-3]}k"
    return miles


def format_cabin_info(info: CabinAvailability) -> str:
    """Compact table cell: "-" unavailable, "(seats)" without a price, else "50k"."""
    if not info.available:
        return "-"
    if not info.mileage_cost or info.mileage_cost == "0":
        return f"({info.remaining_seats})"
    return format_miles(info.mileage_cost)


def format_cabin_cell(info: CabinAvailability) -> str:
    if not info.available:
        return "-"
    return f"{format_miles(info.mileage_cost)} ({info.remaining_seats})"


def availability_table(results: Sequence[Availability]) -> List[str]:
    if not results:
        return ["No results found."]

    lines = [f"Found {len(results)} results:", ""]
    lines.append(_ROW.format("Date", "From", "To", "Source", *(c.code for c in Cabin)))
    lines.append("-" * 80)
    for item in results:
        lines.append(
            _ROW.format(
                item.date,
                item.origin,
                item.destination,
                item.source,
                *(format_cabin_info(item.cabin(c)) for c in Cabin),
            )
        )
    return lines


def routes_table(routes: Sequence[Route]) -> List[str]:
    if not routes:
        return ["No routes found."]

    lines = [f"Found {len(routes)} routes:", ""]
    lines.append(f"{'From':<5} {'To':<5} {'Distance':<8} {'Source':<20}")
    lines.append("-" * 45)
    for route in routes:
        lines.append(
            f"{route.origin_airport:<5} {route.destination_airport:<5} "
            f"{route.distance:<8d} {source_display_name(route.source):<20}"
        )
    return lines


def _time(value) -> str:
    return value.strftime(TIME_FORMAT) if value else "-"


def trip_details(trips: Sequence[Trip]) -> List[str]:
    """
    Render trips as indented detail blocks.

    Args:
        trips: Trips to render, in display order

    Returns:
        Output lines
    """
    if not trips:
        return ["No trips found."]

    lines = [f"Found {len(trips)} trips:", ""]
    for index, trip in enumerate(trips, start=1):
        hours, minutes = divmod(trip.total_duration, 60)
        lines.append(f"Trip {index}: {trip.cabin}")
        lines.append(f"  Flights: {trip.flight_numbers}")
        lines.append(f"  Carriers: {trip.carriers}")
        lines.append(f"  Stops: {trip.stops}")
        lines.append(f"  Duration: {hours}h {minutes}m")
        lines.append(f"  Miles: {trip.mileage_cost}")
        if trip.total_taxes > 0:
            lines.append(f"  Taxes: {trip.taxes_currency_symbol}{trip.total_taxes / 100:.2f}")
        lines.append(f"  Seats: {trip.remaining_seats}")
        lines.append(f"  Departs: {_time(trip.departs_at)}")
        lines.append(f"  Arrives: {_time(trip.arrives_at)}")

        if trip.segments:
            lines.append("  Segments:")
            for segment in trip.segments:
                departs = segment.departs_at.strftime("%H:%M") if segment.departs_at else "-"
                lines.append(
                    f"    {segment.flight_number}: {segment.origin_airport} -> "
                    f"{segment.destination_airport} ({segment.aircraft_code} {departs})"
                )
        lines.append("")
    return lines


def availability_details(item: Availability) -> List[str]:
    """Per-cabin breakdown of one availability record."""
    lines = [
        f"{item.origin} -> {item.destination} on {item.date}",
        f"Source: {source_display_name(item.source)}",
        "",
    ]
    for cabin in Cabin:
        info = item.cabin(cabin)
        if not info.available:
            continue
        direct = " (direct)" if info.direct else ""
        line = f"{cabin.display_name}: {format_miles(info.mileage_cost)} miles, {info.remaining_seats} seats{direct}"
        if info.airlines:
            line += f" - {info.airlines}"
        lines.append(line)
    return lines
