"""Cursor pagination parameters and page iteration."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidArgumentError
from .models import ListPage


def _reject_both_cursors(data: Mapping[str, Any]) -> None:
    if data.get("after_cursor") and data.get("before_cursor"):
        raise InvalidArgumentError(
            "after_cursor and before_cursor cannot be combined",
            argument="before_cursor",
        )


class PaginationParams(BaseModel):
    """Pagination options accepted by every list endpoint.

    ``after_cursor`` and ``before_cursor`` are mutually exclusive; the remote
    behaviour when both are sent is undefined, so the combination is rejected
    here. ``per_page`` is passed through unchanged; out-of-range values are
    rejected by the API.
    """

    model_config = ConfigDict(frozen=True)

    per_page: int | None = Field(default=None, description="Page size")
    after_cursor: str | None = Field(default=None, description="end_cursor of the previous page")
    before_cursor: str | None = Field(default=None, description="start_cursor of the next page")
    include_total_count: bool = False

    def __init__(self, **data: Any) -> None:
        _reject_both_cursors(data)
        super().__init__(**data)

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> PaginationParams:
        if isinstance(obj, Mapping):
            _reject_both_cursors(obj)
        return super().model_validate(obj, **kwargs)

    def to_query(self) -> dict[str, Any]:
        """Return the query parameters for the set options only."""
        query: dict[str, Any] = {}
        if self.after_cursor:
            query["after"] = self.after_cursor
        if self.before_cursor:
            query["before"] = self.before_cursor
        if self.include_total_count:
            query["include_total_count"] = True
        if self.per_page is not None:
            query["per_page"] = self.per_page
        return query

    def next_page(self, page: ListPage) -> PaginationParams | None:
        """Params for the page after ``page``, or None at the last page."""
        if not page.pagination.has_next_page:
            return None
        return PaginationParams(
            per_page=self.per_page,
            after_cursor=page.pagination.end_cursor,
            include_total_count=self.include_total_count,
        )

    def previous_page(self, page: ListPage) -> PaginationParams | None:
        """Params for the page before ``page``, or None at the first page."""
        if not page.pagination.has_previous_page:
            return None
        return PaginationParams(
            per_page=self.per_page,
            before_cursor=page.pagination.start_cursor,
            include_total_count=self.include_total_count,
        )


def pagination_query(
    per_page: int | None = None,
    after_cursor: str | None = None,
    before_cursor: str | None = None,
    include_total_count: bool = False,
) -> dict[str, Any]:
    """Validate pagination options and return their query parameters."""
    params = PaginationParams(
        per_page=per_page,
        after_cursor=after_cursor,
        before_cursor=before_cursor,
        include_total_count=include_total_count,
    )
    return params.to_query()


def iterate_pages(
    fetch: Callable[[PaginationParams], ListPage],
    params: PaginationParams | None = None,
) -> Iterator[ListPage]:
    """Yield pages forward, following ``end_cursor`` until ``has_next_page`` is false."""
    current: PaginationParams | None = params or PaginationParams()
    while current is not None:
        page = fetch(current)
        yield page
        current = current.next_page(page)


def iterate_items(
    fetch: Callable[[PaginationParams], ListPage],
    params: PaginationParams | None = None,
) -> Iterator[dict[str, Any]]:
    """Yield every item across all pages."""
    for page in iterate_pages(fetch, params):
        yield from page.items


__all__ = ["PaginationParams", "pagination_query", "iterate_pages", "iterate_items"]
