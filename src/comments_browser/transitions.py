"""Pure state transitions for the comments table.

Each user action maps the current state to a ``Transition``: the next state
plus the query that must be fetched for it. Nothing here performs I/O; the
coordinator executes the returned plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Sequence

from .models import Pagination, SortOrder, SortState, TableMode, TableState
from .pagination import clamp_page, page_count
from .query_builder import QueryPlan, build_query
from .search_validator import SearchValidation, validate

SEARCH_SOURCE_INPUT = "input"
SEARCH_SOURCE_CLEAR = "clear"


@dataclass(frozen=True)
class TableChange:
    current: int
    page_size: int
    sort_field: str | None = None
    sort_order: SortOrder | None = None
    filters: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_widget(
        cls,
        pagination: Mapping[str, Any],
        filters: Mapping[str, Sequence[Any] | None] | None,
        sorter: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None,
    ) -> TableChange:
        """Normalize the table widget's change event payload."""
        if isinstance(sorter, Sequence) and not isinstance(sorter, Mapping):
            # Multi-column sort: the backend honours one sort key, keep the first.
            sorter = sorter[0] if sorter else None
        sorter = sorter or {}
        order = SortOrder.parse(sorter.get("order"))
        sort_field = sorter.get("field") or sorter.get("columnKey")
        normalized_filters = {
            str(key): tuple(str(value) for value in values)
            for key, values in (filters or {}).items()
            if values
        }
        return cls(
            current=int(pagination.get("current") or 1),
            page_size=int(pagination.get("pageSize") or pagination.get("page_size") or 0),
            sort_field=str(sort_field) if sort_field and order is not None else None,
            sort_order=order,
            filters=normalized_filters,
        )


@dataclass(frozen=True)
class Transition:
    state: TableState
    search_text: str
    plan: QueryPlan | None
    clear_rows: bool = False
    search_invalid: bool = False
    validation: SearchValidation | None = None


def mount(state: TableState, search_text: str = "") -> Transition:
    return Transition(state=state, search_text=search_text, plan=build_query(state, search_text))


def apply_table_change(state: TableState, change: TableChange) -> Transition:
    page_size = change.page_size if change.page_size > 0 else state.pagination.page_size
    # A total measured under another mode or filter set cannot anchor a mirrored window.
    same_result_set = not state.is_search and dict(change.filters) == dict(state.filters)
    total = state.pagination.total if same_result_set else None
    current = change.current
    if total is not None:
        current = clamp_page(current, page_count(total, page_size))
    next_state = TableState(
        mode=TableMode.BROWSE,
        pagination=Pagination(current=current, page_size=page_size, total=total),
        sort=SortState(field=change.sort_field, order=change.sort_order),
        filters=dict(change.filters),
    )
    return Transition(
        state=next_state,
        search_text="",
        plan=build_query(next_state),
        clear_rows=page_size != state.pagination.page_size,
    )


def apply_search(state: TableState, text: str, source: str = SEARCH_SOURCE_INPUT, current_text: str = "") -> Transition:
    page_reset = Pagination(current=1, page_size=state.pagination.page_size)
    if source == SEARCH_SOURCE_CLEAR or (source != SEARCH_SOURCE_INPUT and not text.strip()):
        next_state = TableState(mode=TableMode.BROWSE, pagination=page_reset)
        return Transition(state=next_state, search_text="", plan=build_query(next_state))

    validation = validate(text)
    if not validation.valid:
        return Transition(
            state=state,
            search_text=current_text,
            plan=None,
            search_invalid=True,
            validation=validation,
        )
    next_state = replace(state, mode=TableMode.SEARCH, pagination=page_reset, sort=SortState(), filters={})
    return Transition(
        state=next_state,
        search_text=validation.text,
        plan=build_query(next_state, validation.text),
        validation=validation,
    )


def reconcile_total(state: TableState, total: int | None) -> TableState:
    return replace(state, pagination=state.pagination.with_total(total))


def clamp_to_total(state: TableState) -> TableState:
    """Pull ``current`` back onto the last page once the total is known."""
    pagination = state.pagination
    if pagination.total is None:
        return state
    current = clamp_page(pagination.current, page_count(pagination.total, pagination.page_size))
    if current == pagination.current:
        return state
    return replace(state, pagination=replace(pagination, current=current))
