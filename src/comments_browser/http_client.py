from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import DecodeError, NetworkError, RequestCancelled

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    headers: Mapping[str, str]
    payload: Any
    request_id: str


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    _context_versions: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> ApiResponse:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_id = str(uuid.uuid4())
        request_headers = {"Accept": "application/json", REQUEST_ID_HEADER: request_id}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        if context_key and context_version is None:
            context_version = self.get_context_version(context_key)
        if context_key and not self._context_is_current(context_key, context_version):
            raise RequestCancelled(
                code="REQUEST_CANCELLED",
                message="Request cancelled before dispatch",
                details={"type": "superseded", "context_key": context_key},
                request_id=request_id,
                status_code=0,
            )

        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    params=dict(params) if params else None,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    raise NetworkError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        request_id=request_id,
                        status_code=0,
                    ) from exc
                logger.warning(
                    "http_retry",
                    extra={"request_id": request_id, "attempt": attempt + 1, "error": type(exc).__name__},
                )
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
                logger.warning(
                    "http_retry",
                    extra={"request_id": request_id, "attempt": attempt + 1, "status_code": response.status_code},
                )
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request finished without a response")

        if context_key and not self._context_is_current(context_key, context_version):
            raise RequestCancelled(
                code="REQUEST_CANCELLED",
                message="Response discarded after a newer request was issued",
                details={"type": "superseded", "context_key": context_key},
                request_id=request_id,
                status_code=response.status_code,
            )

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = {"message": response.text}
            raise map_error(response.status_code, payload if isinstance(payload, dict) else None, request_id)

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError as exc:
                raise DecodeError(
                    code="INVALID_JSON",
                    message="Response body is not valid JSON",
                    details={"error": str(exc)},
                    request_id=request_id,
                    status_code=response.status_code,
                    raw_payload=response.text,
                ) from exc
        return ApiResponse(
            status_code=response.status_code,
            headers=response.headers,
            payload=body,
            request_id=request_id,
        )

    def switch_context(self, context_key: str) -> int:
        new_version = self.get_context_version(context_key) + 1
        self._context_versions[context_key] = new_version
        return new_version

    def get_context_version(self, context_key: str) -> int:
        return self._context_versions.get(context_key, 0)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()

    def _context_is_current(self, context_key: str, context_version: int | None) -> bool:
        if context_version is None:
            return True
        return self.get_context_version(context_key) == context_version

