"""
HTTP client for the seats.aero partner API.
"""

import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests

from seats_aero.errors import ErrorKind, SeatsAeroError
from seats_aero.models import (
    Availability,
    AvailabilityParams,
    Page,
    Route,
    RoutesParams,
    SearchParams,
    Trip,
)
from seats_aero.pagination import fetch_all

logger = logging.getLogger(__name__)

BASE_URL = "https://seats.aero/partnerapi"
DEFAULT_TIMEOUT = 30

R = TypeVar("R")


def _records(decode: Callable[[Dict[str, Any]], R], payload: Dict[str, Any]) -> List[R]:
    return [decode(item) for item in payload.get("data") or []]


class Client:
    """seats.aero partner API client.

    One instance is built per program invocation and passed to whatever
    needs it. Every call is a single blocking GET with no retries.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Partner API key sent as ``Partner-Authorization``
            base_url: API root, overridable for testing
            timeout: Per-request timeout in seconds
            session: HTTP session to reuse (a new one by default)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.headers = {
            "accept": "application/json",
            "Partner-Authorization": api_key,
        }

    def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Perform one authenticated GET and decode the JSON object body.

        Args:
            endpoint: Path below the base URL, e.g. ``/search``
            params: Query parameters; empty values are not sent

        Returns:
            Decoded response object

        Raises:
            SeatsAeroError: TRANSPORT, API or DECODE failure
        """
        url = f"{self.base_url}{endpoint}"
        query = {key: value for key, value in (params or {}).items() if value}
        logger.debug("GET %s %s", url, query)

        try:
            response = self.session.get(
                url, headers=self.headers, params=query, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise SeatsAeroError(ErrorKind.TRANSPORT, f"request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise SeatsAeroError(
                ErrorKind.API,
                f"API error (status {response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SeatsAeroError(
                ErrorKind.DECODE, f"failed to parse response: {e}"
            ) from e

        if not isinstance(payload, dict):
            raise SeatsAeroError(
                ErrorKind.DECODE,
                "failed to parse response: expected a JSON object, "
                f"got {type(payload).__name__}",
            )
        return payload

    def _fetch(
        self,
        context: str,
        endpoint: str,
        params: Optional[Dict[str, str]],
        decode: Callable[[Dict[str, Any]], R],
    ) -> R:
        """GET ``endpoint`` and decode it, prefixing any failure with ``context``."""
        try:
            payload = self._get(endpoint, params)
            try:
                return decode(payload)
            except (AttributeError, TypeError, ValueError) as e:
                raise SeatsAeroError(
                    ErrorKind.DECODE, f"failed to parse response: {e}"
                ) from e
        except SeatsAeroError as e:
            raise e.wrap(context) from e

    def search(self, params: SearchParams) -> Page[Availability]:
        """
        Fetch one page of cached search results.

        Args:
            params: Search filters and pagination state

        Returns:
            Page of availability records
        """
        return self._fetch(
            "search failed",
            "/search",
            params.to_query(),
            partial(Page.from_dict, decode=Availability.from_dict),
        )

    def search_all(self, params: SearchParams) -> List[Availability]:
        """Fetch every page of a cached search."""
        return fetch_all(self.search, params)

    def get_availability(self, params: AvailabilityParams) -> Page[Availability]:
        """
        Fetch one page of bulk availability for a mileage program.

        Args:
            params: Program, region and date filters plus pagination state

        Returns:
            Page of availability records
        """
        return self._fetch(
            "get availability failed",
            "/availability",
            params.to_query(),
            partial(Page.from_dict, decode=Availability.from_dict),
        )

    def get_availability_all(self, params: AvailabilityParams) -> List[Availability]:
        """Fetch every page of bulk availability."""
        return fetch_all(self.get_availability, params)

    def get_routes(self, params: RoutesParams) -> List[Route]:
        return self._fetch(
            "get routes failed",
            "/routes",
            params.to_query(),
            partial(_records, Route.from_dict),
        )

    def get_trips(self, availability_id: str) -> List[Trip]:
        """
        Fetch the bookable trips behind one availability record.

        Args:
            availability_id: ID from a search or availability result

        Returns:
            Trips in server order, each with segments in travel order
        """
        return self._fetch(
            "get trips failed",
            f"/trips/{availability_id}",
            None,
            partial(_records, Trip.from_dict),
        )
