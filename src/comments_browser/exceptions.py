from __future__ import annotations

from dataclasses import dataclass


class InvalidParameter(ValueError):
    """Query builder called with a non-positive page or page size."""


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    request_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        request = f" request_id={self.request_id}" if self.request_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{request}"


class NetworkError(ApiError):
    """Transport failure before an HTTP response was returned."""


class RequestCancelled(NetworkError):
    """Request superseded by a newer one before its result could be used."""


class ServerError(ApiError):
    """Non-2xx response from the comments API."""


class DecodeError(ApiError):
    """Malformed body or missing total-count header."""
