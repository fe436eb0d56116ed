import json
from typing import Any, Dict, List, Optional

import pytest

from seats_aero.client import Client


class FakeResponse:
    """Stands in for requests.Response in client tests."""

    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append(
            {"url": url, "headers": dict(headers or {}), "params": dict(params or {}), "timeout": timeout}
        )
        if not self.responses:
            raise AssertionError(f"unexpected request to {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def availability_record(index: int, **overrides: Any) -> Dict[str, Any]:
    record = {
        "ID": f"avail-{index}",
        "RouteID": f"route-{index}",
        "Route": {
            "ID": f"route-{index}",
            "OriginAirport": "SFO",
            "DestinationAirport": "NRT",
            "NumDaysOut": 60,
            "Distance": 5130,
            "Source": "united",
        },
        "Date": "2024-06-01",
        "YAvailable": True,
        "YMileageCost": "35000",
        "YRemainingSeats": 9,
        "YAirlines": "UA",
        "YDirect": True,
        "WAvailable": False,
        "WMileageCost": "0",
        "WRemainingSeats": 0,
        "WAirlines": "",
        "WDirect": False,
        "JAvailable": True,
        "JMileageCost": "88000",
        "JRemainingSeats": 2,
        "JAirlines": "UA, NH",
        "JDirect": False,
        "FAvailable": False,
        "FMileageCost": "",
        "FRemainingSeats": 0,
        "FAirlines": "",
        "FDirect": False,
        "Source": "united",
        "CreatedAt": "2024-05-01T10:00:00Z",
        "UpdatedAt": "2024-05-02T11:30:00.5Z",
    }
    record.update(overrides)
    return record


def page_payload(
    start: int, size: int, has_more: bool, cursor: int = 0
) -> Dict[str, Any]:
    return {
        "data": [availability_record(i) for i in range(start, start + size)],
        "count": size,
        "cursor": cursor,
        "hasMore": has_more,
    }


@pytest.fixture
def make_client():
    def _make(responses: List[Any]):
        session = FakeSession(responses)
        return Client("test-key", base_url="https://api.test/partnerapi", session=session), session

    return _make


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.yaml"


@pytest.fixture
def fake_api(monkeypatch):
    """Route every Client built by the CLI through one FakeSession."""
    from seats_aero import cli

    session = FakeSession([])

    def factory(api_key):
        return Client(api_key, base_url="https://api.test/partnerapi", session=session)

    monkeypatch.setattr(cli, "Client", factory)
    return session
