from __future__ import annotations

from .models import Pagination


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 1
    return max(1, (total + page_size - 1) // page_size)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def total_pages(pagination: Pagination) -> int | None:
    """Page count for the controls, or None while the total is unknown."""
    if pagination.total is None:
        return None
    return page_count(pagination.total, pagination.page_size)


def selectable_pages(pagination: Pagination) -> list[int]:
    pages = total_pages(pagination)
    if pages is None:
        return [pagination.current]
    return list(range(1, pages + 1))
