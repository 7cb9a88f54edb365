from __future__ import annotations

from typing import Mapping

from .exceptions import ServerError


def _default_code(status_code: int) -> str:
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 429:
        return "RATE_LIMITED"
    if 400 <= status_code < 500:
        return "CLIENT_ERROR"
    if status_code >= 500:
        return "SERVER_ERROR"
    return "HTTP_ERROR"


def map_error(status_code: int, payload: Mapping[str, object] | None, request_id: str | None) -> ServerError:
    payload = payload or {}
    code = str(payload.get("code") or _default_code(status_code))
    message = str(payload.get("message") or f"Request failed with status {status_code}")
    return ServerError(
        code=code,
        message=message,
        details=payload.get("details"),
        request_id=request_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
