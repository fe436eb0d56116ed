"""
Typed records for the seats.aero partner API.

Records are decoded from, and encoded back to, the API's wire format
(PascalCase keys such as ``JMileageCost``), so exported JSON can be read
back into the same records. Missing keys and JSON nulls both decode to
the field's zero value.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_FRACTION = re.compile(r"(?<=\d\d:\d\d:\d\d)\.(\d+)")


class Cabin(Enum):
    """Fare compartment, mapped to both wire vocabularies."""

    ECONOMY = ("Y", "economy", "Economy")
    PREMIUM = ("W", "premium", "Premium Economy")
    BUSINESS = ("J", "business", "Business")
    FIRST = ("F", "first", "First")

    def __init__(self, code: str, api_name: str, display_name: str):
        self.code = code
        self.api_name = api_name
        self.display_name = display_name

    @classmethod
    def parse(cls, text: str) -> "Cabin":
        """
        Parse a cabin code (Y/W/J/F) or name (economy/premium/business/first).

        Args:
            text: Cabin code or name, any case

        Returns:
            Matching Cabin

        Raises:
            ValueError: If the text names no cabin
        """
        value = text.strip()
        for cabin in cls:
            if value.upper() == cabin.code or value.lower() == cabin.api_name:
                return cabin
        raise ValueError(f"unknown cabin class: {text!r}")

    @classmethod
    def parse_optional(cls, text: Optional[str]) -> Optional["Cabin"]:
        if text is None or not text.strip():
            return None
        return cls.parse(text)


VALID_SOURCES = [
    "eurobonus",
    "virginatlantic",
    "aeromexico",
    "american",
    "delta",
    "etihad",
    "united",
    "emirates",
    "aeroplan",
    "alaska",
    "velocity",
    "qantas",
    "connectmiles",
    "azul",
    "smiles",
    "flyingblue",
    "jetblue",
    "qatar",
    "turkish",
    "singapore",
    "ethiopian",
    "saudia",
    "finnair",
    "lufthansa",
]

SOURCE_DISPLAY_NAMES = {
    "eurobonus": "SAS EuroBonus",
    "virginatlantic": "Virgin Atlantic",
    "aeromexico": "Aeromexico",
    "american": "American Airlines",
    "delta": "Delta SkyMiles",
    "etihad": "Etihad Guest",
    "united": "United MileagePlus",
    "emirates": "Emirates Skywards",
    "aeroplan": "Air Canada Aeroplan",
    "alaska": "Alaska Mileage Plan",
    "velocity": "Virgin Australia",
    "qantas": "Qantas",
    "connectmiles": "Copa ConnectMiles",
    "azul": "Azul TudoAzul",
    "smiles": "GOL Smiles",
    "flyingblue": "Flying Blue",
    "jetblue": "JetBlue TrueBlue",
    "qatar": "Qatar Privilege Club",
    "turkish": "Turkish Miles&Smiles",
    "singapore": "Singapore KrisFlyer",
    "ethiopian": "Ethiopian ShebaMiles",
    "saudia": "Saudi AlFursan",
    "finnair": "Finnair Plus",
    "lufthansa": "Lufthansa Miles&More",
}


def source_display_name(source: str) -> str:
    """Human-readable program name, or the source itself when unknown."""
    return SOURCE_DISPLAY_NAMES.get(source, source)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; the API may send up to 9 fractional digits."""
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    return datetime.fromisoformat(text)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Route:
    """Origin/destination pair served by a mileage program."""

    id: str = ""
    origin_airport: str = ""
    destination_airport: str = ""
    num_days_out: int = 0
    distance: int = 0
    source: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Route":
        return cls(
            id=data.get("ID") or "",
            origin_airport=data.get("OriginAirport") or "",
            destination_airport=data.get("DestinationAirport") or "",
            num_days_out=data.get("NumDaysOut") or 0,
            distance=data.get("Distance") or 0,
            source=data.get("Source") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "OriginAirport": self.origin_airport,
            "DestinationAirport": self.destination_airport,
            "NumDaysOut": self.num_days_out,
            "Distance": self.distance,
            "Source": self.source,
        }


@dataclass(frozen=True)
class CabinAvailability:
    """Availability summary for one cabin on one route and date."""

    available: bool = False
    mileage_cost: str = ""
    remaining_seats: int = 0
    airlines: str = ""
    direct: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any], code: str) -> "CabinAvailability":
        return cls(
            available=bool(data.get(f"{code}Available")),
            mileage_cost=data.get(f"{code}MileageCost") or "",
            remaining_seats=data.get(f"{code}RemainingSeats") or 0,
            airlines=data.get(f"{code}Airlines") or "",
            direct=bool(data.get(f"{code}Direct")),
        )

    def to_dict(self, code: str) -> Dict[str, Any]:
        return {
            f"{code}Available": self.available,
            f"{code}MileageCost": self.mileage_cost,
            f"{code}RemainingSeats": self.remaining_seats,
            f"{code}Airlines": self.airlines,
            f"{code}Direct": self.direct,
        }


@dataclass(frozen=True)
class Availability:
    """Summarized award availability for a route on a given date.

    One CabinAvailability is kept per cabin; ``cabin()`` looks one up by
    Cabin instead of by attribute name.
    """

    id: str = ""
    route_id: str = ""
    route: Route = field(default_factory=Route)
    date: str = ""
    source: str = ""
    economy: CabinAvailability = field(default_factory=CabinAvailability)
    premium: CabinAvailability = field(default_factory=CabinAvailability)
    business: CabinAvailability = field(default_factory=CabinAvailability)
    first: CabinAvailability = field(default_factory=CabinAvailability)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def cabin(self, cabin: Cabin) -> CabinAvailability:
        return {
            Cabin.ECONOMY: self.economy,
            Cabin.PREMIUM: self.premium,
            Cabin.BUSINESS: self.business,
            Cabin.FIRST: self.first,
        }[cabin]

    @property
    def origin(self) -> str:
        return self.route.origin_airport

    @property
    def destination(self) -> str:
        return self.route.destination_airport

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Availability":
        return cls(
            id=data.get("ID") or "",
            route_id=data.get("RouteID") or "",
            route=Route.from_dict(data.get("Route") or {}),
            date=data.get("Date") or "",
            source=data.get("Source") or "",
            economy=CabinAvailability.from_dict(data, Cabin.ECONOMY.code),
            premium=CabinAvailability.from_dict(data, Cabin.PREMIUM.code),
            business=CabinAvailability.from_dict(data, Cabin.BUSINESS.code),
            first=CabinAvailability.from_dict(data, Cabin.FIRST.code),
            created_at=parse_timestamp(data.get("CreatedAt")),
            updated_at=parse_timestamp(data.get("UpdatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "ID": self.id,
            "RouteID": self.route_id,
            "Route": self.route.to_dict(),
            "Date": self.date,
        }
        for cabin in Cabin:
            result.update(self.cabin(cabin).to_dict(cabin.code))
        result["Source"] = self.source
        result["CreatedAt"] = format_timestamp(self.created_at)
        result["UpdatedAt"] = format_timestamp(self.updated_at)
        return result


@dataclass(frozen=True)
class Segment:
    """A single flight leg within a trip."""

    id: str = ""
    flight_number: str = ""
    aircraft_name: str = ""
    aircraft_code: str = ""
    fare_class: str = ""
    distance: int = 0
    origin_airport: str = ""
    destination_airport: str = ""
    departs_at: Optional[datetime] = None
    arrives_at: Optional[datetime] = None
    source: str = ""
    order: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        return cls(
            id=data.get("ID") or "",
            flight_number=data.get("FlightNumber") or "",
            aircraft_name=data.get("AircraftName") or "",
            aircraft_code=data.get("AircraftCode") or "",
            fare_class=data.get("FareClass") or "",
            distance=data.get("Distance") or 0,
            origin_airport=data.get("OriginAirport") or "",
            destination_airport=data.get("DestinationAirport") or "",
            departs_at=parse_timestamp(data.get("DepartsAt")),
            arrives_at=parse_timestamp(data.get("ArrivesAt")),
            source=data.get("Source") or "",
            order=data.get("Order") or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "FlightNumber": self.flight_number,
            "AircraftName": self.aircraft_name,
            "AircraftCode": self.aircraft_code,
            "FareClass": self.fare_class,
            "Distance": self.distance,
            "OriginAirport": self.origin_airport,
            "DestinationAirport": self.destination_airport,
            "DepartsAt": format_timestamp(self.departs_at),
            "ArrivesAt": format_timestamp(self.arrives_at),
            "Source": self.source,
            "Order": self.order,
        }


@dataclass(frozen=True)
class Trip:
    """A bookable itinerary; ``segments`` are kept in travel order."""

    id: str = ""
    route_id: str = ""
    availability_id: str = ""
    segments: Tuple[Segment, ...] = ()
    total_duration: int = 0
    stops: int = 0
    carriers: str = ""
    remaining_seats: int = 0
    mileage_cost: int = 0
    total_taxes: int = 0
    taxes_currency: str = ""
    taxes_currency_symbol: str = ""
    flight_numbers: str = ""
    departs_at: Optional[datetime] = None
    arrives_at: Optional[datetime] = None
    cabin: str = ""
    source: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trip":
        return cls(
            id=data.get("ID") or "",
            route_id=data.get("RouteID") or "",
            availability_id=data.get("AvailabilityID") or "",
            segments=tuple(
                Segment.from_dict(item)
                for item in data.get("AvailabilitySegments") or []
            ),
            total_duration=data.get("TotalDuration") or 0,
            stops=data.get("Stops") or 0,
            carriers=data.get("Carriers") or "",
            remaining_seats=data.get("RemainingSeats") or 0,
            mileage_cost=data.get("MileageCost") or 0,
            total_taxes=data.get("TotalTaxes") or 0,
            taxes_currency=data.get("TaxesCurrency") or "",
            taxes_currency_symbol=data.get("TaxesCurrencySymbol") or "",
            flight_numbers=data.get("FlightNumbers") or "",
            departs_at=parse_timestamp(data.get("DepartsAt")),
            arrives_at=parse_timestamp(data.get("ArrivesAt")),
            cabin=data.get("Cabin") or "",
            source=data.get("Source") or "",
            created_at=parse_timestamp(data.get("CreatedAt")),
            updated_at=parse_timestamp(data.get("UpdatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "RouteID": self.route_id,
            "AvailabilityID": self.availability_id,
            "AvailabilitySegments": [segment.to_dict() for segment in self.segments],
            "TotalDuration": self.total_duration,
            "Stops": self.stops,
            "Carriers": self.carriers,
            "RemainingSeats": self.remaining_seats,
            "MileageCost": self.mileage_cost,
            "TotalTaxes": self.total_taxes,
            "TaxesCurrency": self.taxes_currency,
            "TaxesCurrencySymbol": self.taxes_currency_symbol,
            "FlightNumbers": self.flight_numbers,
            "DepartsAt": format_timestamp(self.departs_at),
            "ArrivesAt": format_timestamp(self.arrives_at),
            "Cabin": self.cabin,
            "Source": self.source,
            "CreatedAt": format_timestamp(self.created_at),
            "UpdatedAt": format_timestamp(self.updated_at),
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing."""

    data: List[T]
    count: int = 0
    cursor: int = 0
    has_more: bool = False

    @classmethod
    def from_dict(
        cls, payload: Dict[str, Any], decode: Callable[[Dict[str, Any]], T]
    ) -> "Page[T]":
        """
        Build a page from a decoded response body.

        Args:
            payload: JSON object returned by the API
            decode: Converts one element of ``data`` into a record

        Returns:
            Page holding the decoded records in response order
        """
        return cls(
            data=[decode(item) for item in payload.get("data") or []],
            count=payload.get("count") or 0,
            cursor=payload.get("cursor") or 0,
            has_more=bool(payload.get("hasMore", False)),
        )


def _int_query(value: int) -> str:
    return str(value) if value > 0 else ""


@dataclass(frozen=True)
class SearchParams:
    """Parameters for the cached search endpoint."""

    origin_airports: Tuple[str, ...] = ()
    destination_airports: Tuple[str, ...] = ()
    start_date: str = ""
    end_date: str = ""
    cabin: Optional[Cabin] = None
    sources: Tuple[str, ...] = ()
    direct_only: bool = False
    take: int = 0
    skip: int = 0
    cursor: int = 0

    def to_query(self) -> Dict[str, str]:
        """Convert to query parameters; empty values are dropped by the client."""
        return {
            "origin_airport": ",".join(self.origin_airports),
            "destination_airport": ",".join(self.destination_airports),
            "start_date": self.start_date,
            "end_date": self.end_date,
            "cabin": self.cabin.api_name if self.cabin else "",
            "source": ",".join(self.sources),
            "direct": "true" if self.direct_only else "",
            "take": _int_query(self.take),
            "skip": _int_query(self.skip),
            "cursor": _int_query(self.cursor),
        }


@dataclass(frozen=True)
class AvailabilityParams:
    """Parameters for the bulk availability endpoint."""

    source: str = ""
    cabin: Optional[Cabin] = None
    origin_region: str = ""
    destination_region: str = ""
    start_date: str = ""
    end_date: str = ""
    take: int = 0
    skip: int = 0
    cursor: int = 0

    def to_query(self) -> Dict[str, str]:
        return {
            "source": self.source,
            "cabin": self.cabin.api_name if self.cabin else "",
            "origin_region": self.origin_region,
            "destination_region": self.destination_region,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "take": _int_query(self.take),
            "skip": _int_query(self.skip),
            "cursor": _int_query(self.cursor),
        }


@dataclass(frozen=True)
class RoutesParams:
    """Parameters for the routes endpoint."""

    source: str = ""
    origin: str = ""

    def to_query(self) -> Dict[str, str]:
        return {"source": self.source, "origin": self.origin}


def parse_list(text: str, upper: bool = True) -> List[str]:
    """
    Split a comma-separated list of codes.

    Args:
        text: Raw user input such as "sfo, lax"
        upper: Upper-case entries (airports) or lower-case them (sources)

    Returns:
        Non-empty trimmed entries
    """
    result = []
    for part in (text or "").split(","):
        part = part.strip()
        if part:
            result.append(part.upper() if upper else part.lower())
    return result
