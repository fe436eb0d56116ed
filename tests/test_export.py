import csv
import io
import json
from datetime import datetime, timezone

from seats_aero.export import (
    AVAILABILITY_CSV_HEADER,
    ExportFormat,
    availability_from_json,
    export_to_file,
    routes_to_csv,
    to_csv,
    to_json,
    trips_to_csv,
    trips_to_json,
)
from seats_aero.models import Availability, Route, Segment, Trip

from conftest import availability_record


def _records(count=2):
    return [Availability.from_dict(availability_record(i)) for i in range(count)]


def test_json_export_reads_back_every_field():
    original = _records(3)
    buffer = io.StringIO()

    to_json(buffer, original)
    buffer.seek(0)

    assert availability_from_json(buffer) == original


def test_json_export_uses_wire_keys():
    buffer = io.StringIO()

    to_json(buffer, _records(1))

    text = buffer.getvalue()
    assert text.startswith("[\n  {")
    assert text.endswith("]\n")
    item = json.loads(text)[0]
    assert item["JMileageCost"] == "88000"
    assert item["Route"]["OriginAirport"] == "SFO"
    assert item["CreatedAt"] == "2024-05-01T10:00:00Z"


def test_json_export_of_nothing_is_empty_array():
    buffer = io.StringIO()

    to_json(buffer, [], pretty=False)

    assert buffer.getvalue() == "[]\n"


def test_csv_header_has_a_column_group_per_cabin():
    assert len(AVAILABILITY_CSV_HEADER) == 21
    assert AVAILABILITY_CSV_HEADER[:7] == [
        "ID",
        "Date",
        "Origin",
        "Destination",
        "Source",
        "Y_Available",
        "Y_Miles",
    ]
    assert AVAILABILITY_CSV_HEADER[-1] == "F_Direct"


def test_csv_rows():
    buffer = io.StringIO()

    to_csv(buffer, _records(2))

    rows = list(csv.reader(io.StringIO(buffer.getvalue())))
    assert rows[0] == AVAILABILITY_CSV_HEADER
    assert len(rows) == 3
    row = dict(zip(rows[0], rows[1]))
    assert row["ID"] == "avail-0"
    assert row["Origin"] == "SFO"
    assert row["Y_Available"] == "true"
    assert row["Y_Direct"] == "true"
    assert row["J_Miles"] == "88000"
    assert row["J_Seats"] == "2"
    assert row["F_Available"] == "false"


def _trip():
    departs = datetime(2024, 6, 1, 11, 5, tzinfo=timezone.utc)
    return Trip(
        id="trip-1",
        segments=(Segment(flight_number="UA837", order=0),),
        total_duration=655,
        stops=0,
        carriers="UA",
        remaining_seats=2,
        mileage_cost=88000,
        total_taxes=5600,
        flight_numbers="UA837",
        departs_at=departs,
        cabin="business",
        source="united",
    )


def test_trips_csv():
    buffer = io.StringIO()

    trips_to_csv(buffer, [_trip()])

    lines = buffer.getvalue().splitlines()
    assert lines[0].startswith("ID,Cabin,Carriers,Flight_Numbers")
    assert lines[1] == "trip-1,business,UA,UA837,0,655,88000,5600,2,2024-06-01 11:05,,united"


def test_trips_json_keeps_segments():
    buffer = io.StringIO()

    trips_to_json(buffer, [_trip()])

    item = json.loads(buffer.getvalue())[0]
    assert item["AvailabilitySegments"][0]["FlightNumber"] == "UA837"
    assert item["DepartsAt"] == "2024-06-01T11:05:00Z"


def test_routes_csv():
    buffer = io.StringIO()

    routes_to_csv(buffer, [Route(id="r1", origin_airport="SFO", destination_airport="NRT", distance=5130, source="united")])

    assert buffer.getvalue() == "ID,Origin,Destination,Distance,Source\nr1,SFO,NRT,5130,united\n"


def test_export_to_file_appends_extension(tmp_path):
    written = export_to_file(tmp_path / "results", _records(2), ExportFormat.CSV)

    assert written == tmp_path / "results.csv"
    assert written.read_text().splitlines()[0].startswith("ID,Date,Origin")


def test_export_to_file_keeps_matching_extension(tmp_path):
    written = export_to_file(tmp_path / "out.json", _records(1), ExportFormat.JSON)

    assert written == tmp_path / "out.json"
    assert len(json.loads(written.read_text())) == 1
