"""Tag endpoints."""

from __future__ import annotations

from typing import Any

from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_email, validate_id, validate_non_empty
from .base import ResourceMixin
from .filters import SubscriptionFilters


class TagsMixin(ResourceMixin):
    def get_tags(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("tags", "tags", pagination)

    def create_tag(self, name: str) -> dict[str, Any]:
        validate_non_empty(name, "name")
        return self._call("POST", "tags", body={"name": name})

    def create_tags(self, names: list[str], callback_url: str | None = None) -> dict[str, Any]:
        validate_non_empty(names, "names")
        body: dict[str, Any] = {"tags": [{"name": validate_non_empty(name, "names")} for name in names]}
        if callback_url:
            body["callback_url"] = callback_url
        return self._call("POST", "bulk/tags", body=body)

    def update_tag_name(self, tag_id: int, name: str) -> dict[str, Any]:
        validate_id(tag_id, "tag_id")
        validate_non_empty(name, "name")
        return self._call("PUT", f"tags/{tag_id}", body={"name": name})

    def tag_subscriber(self, tag_id: int, subscriber_id: int) -> dict[str, Any]:
        validate_id(tag_id, "tag_id")
        validate_id(subscriber_id, "subscriber_id")
        return self._call("POST", f"tags/{tag_id}/subscribers/{subscriber_id}")

    def tag_subscriber_by_email(self, tag_id: int, email_address: str) -> dict[str, Any]:
        validate_id(tag_id, "tag_id")
        email_address = validate_email(email_address)
        return self._call("POST", f"tags/{tag_id}/subscribers", body={"email_address": email_address})

    def remove_tag_from_subscriber(self, tag_id: int, subscriber_id: int) -> None:
        validate_id(tag_id, "tag_id")
        validate_id(subscriber_id, "subscriber_id")
        self._call("DELETE", f"tags/{tag_id}/subscribers/{subscriber_id}")

    def remove_tag_from_subscriber_by_email(self, tag_id: int, email_address: str) -> None:
        validate_id(tag_id, "tag_id")
        email_address = validate_email(email_address)
        self._call("DELETE", f"tags/{tag_id}/subscribers", body={"email_address": email_address})

    def get_tag_subscriptions(
        self,
        tag_id: int,
        filters: SubscriptionFilters | None = None,
        pagination: PaginationParams | None = None,
    ) -> ListPage:
        validate_id(tag_id, "tag_id")
        query = filters.to_query() if filters is not None else {}
        return self._list(f"tags/{tag_id}/subscribers", "subscribers", pagination, query)


__all__ = ["TagsMixin"]
