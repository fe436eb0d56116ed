"""
Error types raised by the seats.aero client and its collaborators.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a client failure."""

    TRANSPORT = "transport"
    API = "api"
    DECODE = "decode"
    AGGREGATION = "aggregation"


class SeatsAeroError(Exception):
    """Failure talking to the seats.aero partner API.

    Callers branch on ``kind`` rather than on the message text. The lower
    level exception, when there is one, is chained as ``__cause__``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.body = body

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def wrap(self, context: str) -> "SeatsAeroError":
        """
        Return a copy of this error with ``context`` prefixed to the message.

        Args:
            context: Short description of the failing operation

        Returns:
            New error of the same kind, status code and body
        """
        return SeatsAeroError(
            self.kind,
            f"{context}: {self.message}",
            status_code=self.status_code,
            body=self.body,
        )


class ConfigError(Exception):
    """Configuration file could not be read or is incomplete."""
