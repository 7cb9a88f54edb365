"""Request lifecycle for the comments table.

The coordinator is the single owner of ``TableState`` and the visible rows.
UI events go through ``on_*`` methods, which commit the next state and
return a ``FetchCommand``. The caller runs the command (``execute`` may be
moved off the UI thread) and hands the outcome back to ``resolve``. Only the
most recently issued command can change visible state; anything older is
dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

from .comments_client import CommentsClient
from .exceptions import ApiError, RequestCancelled
from .models import Comment, CommentPage, TableState, initial_state
from .notifications import GENERIC_FAILURE_MESSAGE, Notification, NotificationCenter, fetch_failed_notification
from .pagination import total_pages
from .query_builder import QueryPlan
from .transitions import (
    SEARCH_SOURCE_INPUT,
    TableChange,
    Transition,
    apply_search,
    apply_table_change,
    clamp_to_total,
    mount,
    reconcile_total,
)
from .view_state import resolve_state

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchCommand:
    generation: int
    state: TableState
    plan: QueryPlan
    search_text: str = ""

    @property
    def params(self) -> dict[str, str]:
        return self.plan.as_dict()


@dataclass(frozen=True)
class FetchOutcome:
    page: CommentPage | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.page is not None


@dataclass(frozen=True)
class Resolution:
    applied: bool
    notification: Notification | None = None
    follow_up: FetchCommand | None = None


class FetchCoordinator:
    def __init__(
        self,
        client: CommentsClient,
        *,
        page_size: int = 5,
        notifications: NotificationCenter | None = None,
    ) -> None:
        self.client = client
        self.notifications = notifications or NotificationCenter()
        self.state: TableState = initial_state(page_size)
        self.search_text = ""
        self.search_invalid = False
        self.search_error: str | None = None
        self.rows: list[Comment] | None = None
        self.status = FetchStatus.IDLE
        self.error_message: str | None = None
        self.selected: Comment | None = None
        self._generation = 0

    @property
    def loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def generation(self) -> int:
        return self._generation

    def start(self) -> FetchCommand:
        return self._issue(mount(self.state, self.search_text))

    def on_table_change(
        self,
        pagination: Mapping[str, Any],
        filters: Mapping[str, Sequence[Any] | None] | None = None,
        sorter: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None = None,
    ) -> FetchCommand:
        change = TableChange.from_widget(pagination, filters, sorter)
        return self._issue(apply_table_change(self.state, change))

    def on_search(self, text: str, source: str = SEARCH_SOURCE_INPUT) -> FetchCommand | None:
        transition = apply_search(self.state, text, source, current_text=self.search_text)
        if transition.plan is None:
            self.search_invalid = True
            self.search_error = transition.validation.error if transition.validation else None
            logger.info("search_rejected", extra={"source": source, "length": len(text)})
            return None
        return self._issue(transition)

    def select_row(self, comment: Comment) -> Comment:
        self.selected = comment
        return comment

    def close_detail(self) -> None:
        self.selected = None

    def execute(self, command: FetchCommand) -> FetchOutcome:
        try:
            page = self.client.list_comments(
                command.params,
                require_total=command.plan.ranged,
                context_version=command.generation,
            )
        except ApiError as exc:
            return FetchOutcome(error=exc)
        return FetchOutcome(page=page)

    def resolve(self, command: FetchCommand, outcome: FetchOutcome) -> Resolution:
        if command.generation != self._generation or isinstance(outcome.error, RequestCancelled):
            logger.info(
                "fetch_discarded_stale",
                extra={"generation": command.generation, "latest_generation": self._generation},
            )
            return Resolution(applied=False)

        if outcome.page is None:
            return Resolution(applied=True, notification=self._fail(command, outcome.error))

        page = outcome.page
        self.state = reconcile_total(self.state, page.total)
        if command.plan.ranged:
            clamped = clamp_to_total(self.state)
            if clamped is not self.state:
                # The result set shrank below the requested page; show its last page instead.
                logger.info(
                    "fetch_page_out_of_range",
                    extra={
                        "generation": command.generation,
                        "requested_page": self.state.pagination.current,
                        "page": clamped.pagination.current,
                        "total": page.total,
                    },
                )
                follow_up = self._issue(mount(clamped, self.search_text))
                return Resolution(applied=True, follow_up=follow_up)
        if command.plan.provisional and page.total is not None:
            # The descending window needed the total; fetch the mirrored slice now.
            logger.info("fetch_refine_descending", extra={"generation": command.generation, "total": page.total})
            follow_up = self._issue(mount(self.state, self.search_text))
            return Resolution(applied=True, follow_up=follow_up)

        rows = list(page.rows)
        if command.plan.reverse_rows:
            rows.reverse()
        self.rows = rows
        self.status = FetchStatus.SUCCESS
        self.error_message = None
        logger.info(
            "fetch_succeeded",
            extra={
                "generation": command.generation,
                "request_id": page.request_id,
                "rows": len(rows),
                "total": page.total,
            },
        )
        return Resolution(applied=True)

    def fetch_data(self, command: FetchCommand) -> list[Notification]:
        """Run a command to completion, following up provisional windows."""
        emitted: list[Notification] = []
        pending: FetchCommand | None = command
        while pending is not None:
            resolution = self.resolve(pending, self.execute(pending))
            if resolution.notification is not None:
                emitted.append(resolution.notification)
            pending = resolution.follow_up
        return emitted

    def snapshot(self) -> dict[str, Any]:
        rows = self.rows or []
        view = resolve_state(
            is_loading=self.loading,
            error=self.error_message,
            row_count=len(rows),
            searching=self.state.is_search,
            search_error=self.search_error,
        )
        pagination = self.state.pagination
        return {
            "mode": self.state.mode.value,
            "status": self.status.value,
            "loading": self.loading,
            "rows": [row.model_dump() for row in rows],
            "pagination": {
                "current": pagination.current,
                "page_size": pagination.page_size,
                "total": pagination.total,
                "pages": total_pages(pagination),
            },
            "sort": {
                "field": self.state.sort.field,
                "order": self.state.sort.order.value if self.state.sort.order else None,
            },
            "search_text": self.search_text,
            "search_invalid": self.search_invalid,
            "search_error": self.search_error,
            "selected": self.selected.model_dump() if self.selected else None,
            "view_state": view.render(),
            "notifications": self.notifications.render(),
        }

    def close(self) -> None:
        self.client.supersede()
        self.client.http.close()

    def _issue(self, transition: Transition) -> FetchCommand:
        plan = transition.plan
        if plan is None:
            raise ValueError("Transition carries no query to issue")
        self.state = transition.state
        self.search_text = transition.search_text
        self.search_invalid = False
        self.search_error = None
        if transition.clear_rows:
            self.rows = []
        self._generation = self.client.supersede()
        self.status = FetchStatus.LOADING
        self.error_message = None
        command = FetchCommand(
            generation=self._generation,
            state=transition.state,
            plan=plan,
            search_text=transition.search_text,
        )
        logger.info(
            "fetch_issued",
            extra={
                "generation": command.generation,
                "mode": command.state.mode.value,
                # Search params hold the user's email address.
                "params": command.params if plan.ranged else sorted(command.params),
            },
        )
        return command

    def _fail(self, command: FetchCommand, error: ApiError | None) -> Notification:
        self.status = FetchStatus.FAILED
        self.error_message = GENERIC_FAILURE_MESSAGE
        request_id = error.request_id if error else None
        logger.warning(
            "fetch_failed",
            extra={
                "generation": command.generation,
                "error_type": type(error).__name__ if error else None,
                "code": error.code if error else None,
                "status_code": error.status_code if error else None,
                "detail": error.message if error else None,
                "request_id": request_id,
            },
        )
        return self.notifications.push(fetch_failed_notification(request_id))
