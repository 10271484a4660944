"""Subscriber endpoints."""

from __future__ import annotations

from typing import Any

from ..constants import SUBSCRIBER_STATES
from ..exceptions import ClientError
from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_choice, validate_email, validate_id, validate_non_empty
from .base import ResourceMixin, compact
from .filters import SubscriberFilters


class SubscribersMixin(ResourceMixin):
    def get_subscribers(
        self,
        filters: SubscriberFilters | None = None,
        pagination: PaginationParams | None = None,
    ) -> ListPage:
        query = filters.to_query() if filters is not None else {}
        return self._list("subscribers", "subscribers", pagination, query)

    def create_subscriber(
        self,
        email_address: str,
        first_name: str | None = None,
        subscriber_state: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a subscriber, or update the first name and fields of an existing one."""
        email_address = validate_email(email_address)
        if subscriber_state is not None:
            validate_choice(subscriber_state, SUBSCRIBER_STATES, "subscriber_state")
        body = compact(
            {
                "email_address": email_address,
                "first_name": first_name,
                "state": subscriber_state,
                "fields": fields or None,
            }
        )
        return self._call("POST", "subscribers", body=body)

    def create_subscribers(
        self, subscribers: list[dict[str, Any]], callback_url: str | None = None
    ) -> dict[str, Any]:
        """Bulk create; each entry needs at least ``email_address``."""
        validate_non_empty(subscribers, "subscribers")
        for subscriber in subscribers:
            validate_email(subscriber.get("email_address"))
        body: dict[str, Any] = {"subscribers": list(subscribers)}
        if callback_url:
            body["callback_url"] = callback_url
        return self._call("POST", "bulk/subscribers", body=body)

    def get_subscriber_id(self, email_address: str) -> int | None:
        """Return the ID of the subscriber with ``email_address``, or None if there is none."""
        email_address = validate_email(email_address)
        page = self._list(
            "subscribers", "subscribers", query={"email_address": email_address, "status": "all"}
        )
        if not page.items:
            return None
        return page.items[0]["id"]

    def get_subscriber(self, subscriber_id: int) -> dict[str, Any]:
        validate_id(subscriber_id, "subscriber_id")
        return self._call("GET", f"subscribers/{subscriber_id}")

    def update_subscriber(
        self,
        subscriber_id: int,
        first_name: str | None = None,
        email_address: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        validate_id(subscriber_id, "subscriber_id")
        if email_address is not None:
            email_address = validate_email(email_address)
        body = compact({"first_name": first_name, "email_address": email_address, "fields": fields or None})
        return self._call("PUT", f"subscribers/{subscriber_id}", body=body)

    def unsubscribe(self, subscriber_id: int) -> None:
        validate_id(subscriber_id, "subscriber_id")
        self._call("POST", f"subscribers/{subscriber_id}/unsubscribe")

    def unsubscribe_by_email(self, email_address: str) -> None:
        """Unsubscribe by email address.

        Raises:
            ClientError: If no subscriber has that address (reported as 404).
        """
        subscriber_id = self.get_subscriber_id(email_address)
        if subscriber_id is None:
            raise ClientError(
                "Subscriber not found",
                404,
                None,
                {"operation": "unsubscribe_by_email"},
            )
        self.unsubscribe(subscriber_id)

    def get_subscriber_tags(self, subscriber_id: int, pagination: PaginationParams | None = None) -> ListPage:
        validate_id(subscriber_id, "subscriber_id")
        return self._list(f"subscribers/{subscriber_id}/tags", "tags", pagination)

    def get_subscriber_stats(self, subscriber_id: int) -> dict[str, Any]:
        validate_id(subscriber_id, "subscriber_id")
        return self._call("GET", f"subscribers/{subscriber_id}/stats")


__all__ = ["SubscribersMixin"]
