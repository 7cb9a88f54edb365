from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError
from .http_client import ApiResponse, HttpClient
from .models import Comment, CommentPage

TOTAL_COUNT_HEADER = "X-Total-Count"
COMMENTS_PATH = "/comments"

_COMMENT_LIST = TypeAdapter(list[Comment])


@dataclass
class CommentsClient:
    http: HttpClient
    context_key: str = "comments"

    def list_comments(
        self,
        params: Mapping[str, str],
        *,
        require_total: bool = True,
        context_version: int | None = None,
    ) -> CommentPage:
        response = self.http.request(
            "GET",
            COMMENTS_PATH,
            params=params,
            context_key=self.context_key,
            context_version=context_version,
        )
        rows = parse_rows(response)
        total = parse_total(response, required=require_total)
        return CommentPage(rows=rows, total=total, request_id=response.request_id)

    def supersede(self) -> int:
        """Start a new request generation; older in-flight calls become stale."""
        return self.http.switch_context(self.context_key)


def parse_rows(response: ApiResponse) -> list[Comment]:
    if not isinstance(response.payload, list):
        raise DecodeError(
            code="UNEXPECTED_BODY",
            message="Expected comments response to be a JSON array",
            details={"type": type(response.payload).__name__},
            request_id=response.request_id,
            status_code=response.status_code,
            raw_payload=response.payload,
        )
    try:
        return _COMMENT_LIST.validate_python(response.payload)
    except PydanticValidationError as exc:
        issue = exc.errors()[0] if exc.errors() else {"loc": ("rows",), "msg": "Invalid comment"}
        raise DecodeError(
            code="INVALID_COMMENT",
            message="Comment record failed validation",
            details={"loc": ".".join(str(part) for part in issue.get("loc", ())), "msg": issue.get("msg")},
            request_id=response.request_id,
            status_code=response.status_code,
            raw_payload=response.payload,
        ) from exc


def parse_total(response: ApiResponse, *, required: bool = True) -> int | None:
    raw = response.headers.get(TOTAL_COUNT_HEADER)
    if raw is None:
        if not required:
            return None
        raise DecodeError(
            code="MISSING_TOTAL_COUNT",
            message=f"Response is missing the {TOTAL_COUNT_HEADER} header",
            details=None,
            request_id=response.request_id,
            status_code=response.status_code,
        )
    try:
        total = int(str(raw).strip())
    except ValueError as exc:
        raise DecodeError(
            code="INVALID_TOTAL_COUNT",
            message=f"{TOTAL_COUNT_HEADER} is not an integer",
            details={"value": raw},
            request_id=response.request_id,
            status_code=response.status_code,
        ) from exc
    if total < 0:
        raise DecodeError(
            code="INVALID_TOTAL_COUNT",
            message=f"{TOTAL_COUNT_HEADER} must not be negative",
            details={"value": raw},
            request_id=response.request_id,
            status_code=response.status_code,
        )
    return total
