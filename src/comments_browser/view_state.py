from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    NO_MATCH = "no_match"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"


@dataclass(frozen=True)
class ViewState:
    """What the comments table should show, plus the search box hint."""

    status: ViewStateStatus
    message: str | None = None
    row_count: int = 0
    search_hint: str | None = None

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "row_count": self.row_count,
            "search_hint": self.search_hint,
        }


def resolve_state(
    *,
    is_loading: bool,
    error: str | None,
    row_count: int,
    searching: bool = False,
    search_error: str | None = None,
) -> ViewState:
    if is_loading:
        status, message = ViewStateStatus.LOADING, "Loading comments..."
    elif error:
        # Rows from the last good page stay on screen under the error.
        status = ViewStateStatus.PARTIAL_ERROR if row_count else ViewStateStatus.FATAL_ERROR
        message = error
    elif not row_count:
        if searching:
            status, message = ViewStateStatus.NO_MATCH, "No comments from this email"
        else:
            status, message = ViewStateStatus.EMPTY, "No comments"
    else:
        status, message = ViewStateStatus.SUCCESS, None
    return ViewState(status, message, row_count=row_count, search_hint=search_error)
