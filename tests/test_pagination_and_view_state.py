from __future__ import annotations

from comments_browser.models import Pagination
from comments_browser.notifications import NotificationCenter, fetch_failed_notification
from comments_browser.pagination import clamp_page, page_count, selectable_pages, total_pages
from comments_browser.view_state import ViewStateStatus, resolve_state


def test_page_count_rounds_up_partial_pages() -> None:
    assert page_count(12, 5) == 3
    assert page_count(10, 5) == 2
    assert page_count(0, 5) == 1


def test_clamp_page_bounds() -> None:
    assert clamp_page(0, 3) == 1
    assert clamp_page(4, 3) == 3
    assert clamp_page(2, 0) == 1


def test_unknown_total_exposes_only_current_page() -> None:
    pagination = Pagination(current=2, page_size=5)

    assert total_pages(pagination) is None
    assert selectable_pages(pagination) == [2]


def test_known_total_makes_all_pages_selectable() -> None:
    assert selectable_pages(Pagination(current=2, page_size=5, total=12)) == [1, 2, 3]


def test_resolve_state_priorities() -> None:
    assert resolve_state(is_loading=True, error=None, row_count=5).status is ViewStateStatus.LOADING
    assert resolve_state(is_loading=False, error="x", row_count=5).status is ViewStateStatus.PARTIAL_ERROR
    assert resolve_state(is_loading=False, error="x", row_count=0).status is ViewStateStatus.FATAL_ERROR
    assert resolve_state(is_loading=False, error=None, row_count=0).status is ViewStateStatus.EMPTY
    assert resolve_state(is_loading=False, error=None, row_count=5).render()["status"] == "success"


def test_empty_search_result_is_reported_as_no_match() -> None:
    view = resolve_state(is_loading=False, error=None, row_count=0, searching=True)

    assert view.status is ViewStateStatus.NO_MATCH
    assert view.message == "No comments from this email"


def test_search_error_is_carried_as_hint() -> None:
    view = resolve_state(is_loading=False, error=None, row_count=3, search_error="Please enter the valid email")

    assert view.render() == {
        "status": "success",
        "message": None,
        "row_count": 3,
        "search_hint": "Please enter the valid email",
    }


def test_notification_center_collects_and_drains() -> None:
    center = NotificationCenter()
    center.push(fetch_failed_notification("req-1"))

    assert center.render() == {
        "count": 1,
        "messages": [{"level": "error", "message": "Something went wrong.", "request_id": "req-1"}],
    }
    assert len(center.drain()) == 1
    assert center.render()["count"] == 0
