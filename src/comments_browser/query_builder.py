"""Translate table state into range-query parameters for the comments API.

The API only orders by ascending id when slicing with ``_start``/``_end``.
Descending pages are served with a mirrored window: the page's position is
counted from the end of the ascending collection, that slice is fetched, and
the caller reverses the rows locally.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidParameter
from .models import Pagination, SortOrder, TableState


@dataclass(frozen=True)
class RangeWindow:
    start: int
    end: int
    # Set when a descending page was requested before the total was known.
    provisional: bool = False


@dataclass(frozen=True)
class QueryPlan:
    params: tuple[tuple[str, str], ...]
    reverse_rows: bool = False
    provisional: bool = False
    ranged: bool = True

    def as_dict(self) -> dict[str, str]:
        return dict(self.params)


def compute_range(pagination: Pagination, sort_order: SortOrder | None) -> RangeWindow:
    if pagination.page_size <= 0:
        raise InvalidParameter(f"page_size must be positive, got {pagination.page_size}")
    if pagination.current <= 0:
        raise InvalidParameter(f"current page must be positive, got {pagination.current}")

    offset = (pagination.current - 1) * pagination.page_size
    if sort_order is not SortOrder.DESCEND:
        return RangeWindow(start=offset, end=offset + pagination.page_size)
    if pagination.total is None:
        return RangeWindow(start=offset, end=offset + pagination.page_size, provisional=True)

    end = max(pagination.total - offset, 0)
    start = max(end - pagination.page_size, 0)
    return RangeWindow(start=start, end=end)


def build_query(state: TableState, search_text: str | None = None) -> QueryPlan:
    if state.is_search and search_text:
        return QueryPlan(params=(("email", search_text),), ranged=False)

    order = state.sort.order
    window = compute_range(state.pagination, order)
    params: list[tuple[str, str]] = [("_start", str(window.start)), ("_end", str(window.end))]
    if state.sort.field and order is not None:
        params.append(("_sort", state.sort.field))
        # The window is already mirrored for descending pages.
        params.append(("_order", "asc"))
    for key in sorted(state.filters):
        values = state.filters[key]
        if values:
            params.append((key, ",".join(str(value) for value in values)))
    return QueryPlan(
        params=tuple(params),
        reverse_rows=order is SortOrder.DESCEND and not window.provisional,
        provisional=window.provisional,
    )
