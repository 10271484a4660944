"""Request helpers shared by the resource mixins."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models import HTTPMethod, ListPage, LogEntry, RequestSpec, ResponseEnvelope
from ..pagination import PaginationParams
from ..response_parser import parse_list_page


def compact(values: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None`` values so optional fields are omitted from a body."""
    return {key: value for key, value in values.items() if value is not None}


class ResourceMixin:
    """Base for resource families; ``ConvertKitClient`` provides ``execute``."""

    def execute(self, spec: RequestSpec) -> ResponseEnvelope:
        raise NotImplementedError

    def log(self, level: str, message: str) -> LogEntry | None:
        raise NotImplementedError

    def _call(
        self,
        method: HTTPMethod,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        spec = RequestSpec(method=method, path=path, query=dict(query or {}), body=dict(body or {}))
        return self.execute(spec).body

    def _list(
        self,
        path: str,
        key: str,
        pagination: PaginationParams | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> ListPage:
        params: dict[str, Any] = dict(query or {})
        if pagination is not None:
            params.update(pagination.to_query())
        body = self._call("GET", path, query=params)
        return parse_list_page(body, key)


__all__ = ["ResourceMixin", "compact"]
