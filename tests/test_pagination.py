"""Tests for cursor pagination parameters and traversal."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from convertkit_api import InvalidArgumentError, ListPage, PaginationParams, iterate_items, iterate_pages
from convertkit_api.pagination import pagination_query
from convertkit_api.response_parser import parse_list_page


def test_to_query_emits_only_set_options() -> None:
    assert PaginationParams().to_query() == {}
    assert PaginationParams(per_page=10, after_cursor="WzFd").to_query() == {"after": "WzFd", "per_page": 10}
    assert PaginationParams(before_cursor="WzJd", include_total_count=True).to_query() == {
        "before": "WzJd",
        "include_total_count": True,
    }


def test_both_cursors_raise_invalid_argument() -> None:
    """Given both an after and a before cursor, when params are constructed, then
    `InvalidArgumentError` (also a `ValueError`) is raised before any request."""
    with pytest.raises(InvalidArgumentError) as excinfo:
        PaginationParams(after_cursor="a", before_cursor="b")

    assert isinstance(excinfo.value, ValueError)
    with pytest.raises(InvalidArgumentError):
        pagination_query(after_cursor="a", before_cursor="b")


def test_both_cursors_rejected_the_same_way_through_model_validate() -> None:
    with pytest.raises(InvalidArgumentError) as excinfo:
        PaginationParams.model_validate({"after_cursor": "a", "before_cursor": "b"})

    assert excinfo.value.argument == "before_cursor"
    assert PaginationParams.model_validate({"after_cursor": "a"}).to_query() == {"after": "a"}


def test_per_page_is_not_clamped() -> None:
    assert PaginationParams(per_page=5000).to_query() == {"per_page": 5000}


def _pages() -> dict[str | None, dict]:
    return {
        None: {
            "tags": [{"id": 1}, {"id": 2}],
            "pagination": {
                "has_previous_page": False,
                "has_next_page": True,
                "start_cursor": "WzFd",
                "end_cursor": "WzJd",
                "per_page": 2,
            },
        },
        "WzJd": {
            "tags": [{"id": 3}],
            "pagination": {
                "has_previous_page": True,
                "has_next_page": False,
                "start_cursor": "WzNd",
                "end_cursor": "WzNd",
                "per_page": 2,
            },
        },
    }


def test_iterate_pages_follows_end_cursor() -> None:
    pages = _pages()
    seen: list[PaginationParams] = []

    def fetch(params: PaginationParams) -> ListPage:
        seen.append(params)
        return parse_list_page(pages[params.after_cursor], "tags")

    result = list(iterate_pages(fetch, PaginationParams(per_page=2)))

    assert [len(page.items) for page in result] == [2, 1]
    assert [params.after_cursor for params in seen] == [None, "WzJd"]
    assert all(params.per_page == 2 for params in seen)


def test_previous_page_uses_start_cursor() -> None:
    page = parse_list_page(_pages()["WzJd"], "tags")
    params = PaginationParams(per_page=2, after_cursor="WzJd")

    previous = params.previous_page(page)

    assert previous is not None
    assert previous.before_cursor == "WzNd"
    assert previous.after_cursor is None
    assert params.next_page(page) is None


def test_subscriber_traversal_over_transport(make_client: Callable) -> None:
    """Given two pages of subscribers, when every item is iterated, then each
    request carries the previous page's end cursor as `after`."""
    pages = {
        None: {
            "subscribers": [{"id": 1}],
            "pagination": {
                "has_previous_page": False,
                "has_next_page": True,
                "start_cursor": "WzFd",
                "end_cursor": "WzFd",
                "per_page": 1,
                "total_count": 2,
            },
        },
        "WzFd": {
            "subscribers": [{"id": 2}],
            "pagination": {
                "has_previous_page": True,
                "has_next_page": False,
                "start_cursor": "WzJd",
                "end_cursor": "WzJd",
                "per_page": 1,
                "total_count": 2,
            },
        },
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=pages[request.url.params.get("after")], request=request)

    client, recorder = make_client(handler)

    items = list(
        iterate_items(
            lambda params: client.get_subscribers(pagination=params),
            PaginationParams(per_page=1, include_total_count=True),
        )
    )

    assert [item["id"] for item in items] == [1, 2]
    assert [dict(request.url.params) for request in recorder.requests] == [
        {"include_total_count": "true", "per_page": "1"},
        {"after": "WzFd", "include_total_count": "true", "per_page": "1"},
    ]
