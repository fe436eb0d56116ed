"""
Bulk fetching across paginated endpoints.

Both paginated listings (cached search and bulk availability) share the same
paging contract: ``take``/``skip`` offsets plus a server-issued ``cursor``
that the client only forwards.
"""

import logging
from dataclasses import replace
from typing import Callable, List, TypeVar

from seats_aero.errors import ErrorKind, SeatsAeroError
from seats_aero.models import Page

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

P = TypeVar("P")
T = TypeVar("T")


def fetch_all(fetch_page: Callable[[P], Page[T]], params: P) -> List[T]:
    """
    Fetch every page of a listing and return the records in order.

    The caller's ``take`` and ``skip`` are replaced with a fresh paging
    sequence; all other fields, including a nonzero ``cursor``, are sent as
    given. The first cursor returned by the server is adopted and then
    forwarded unchanged for the rest of the run.

    Args:
        fetch_page: Performs one page request for the given parameters
        params: Frozen parameters dataclass with take/skip/cursor fields

    Returns:
        All records across all pages, in server order

    Raises:
        SeatsAeroError: If any page request fails; no partial results are
            returned
    """
    params = replace(params, take=PAGE_SIZE, skip=0)
    results: List[T] = []
    page_number = 0

    while True:
        page_number += 1
        page = fetch_page(params)
        received = len(page.data)
        logger.debug(
            "page %d: skip=%d cursor=%d received=%d has_more=%s",
            page_number,
            params.skip,
            params.cursor,
            received,
            page.has_more,
        )

        if received > params.take:
            raise SeatsAeroError(
                ErrorKind.AGGREGATION,
                f"page {page_number} returned {received} records, "
                f"more than the requested {params.take}",
            )

        results.extend(page.data)

        # an empty page ends the run even if the server claims more
        if not page.has_more or received == 0:
            break

        params = replace(
            params,
            skip=params.skip + received,
            cursor=params.cursor or page.cursor,
        )

    logger.info("fetched %d records in %d pages", len(results), page_number)
    return results
