"""Form and landing page endpoints."""

from __future__ import annotations

from typing import Any

from ..constants import FORM_STATUSES
from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_choice, validate_email, validate_id, validate_non_empty
from .base import ResourceMixin
from .filters import SubscriptionFilters


class FormsMixin(ResourceMixin):
    def get_forms(self, status: str = "active", pagination: PaginationParams | None = None) -> ListPage:
        """List embedded forms. Landing pages are listed by :meth:`get_landing_pages`."""
        validate_choice(status, FORM_STATUSES, "status")
        return self._list("forms", "forms", pagination, {"status": status, "type": "embed"})

    def get_landing_pages(
        self, status: str = "active", pagination: PaginationParams | None = None
    ) -> ListPage:
        validate_choice(status, FORM_STATUSES, "status")
        return self._list("forms", "forms", pagination, {"status": status, "type": "hosted"})

    def get_form_subscriptions(
        self,
        form_id: int,
        filters: SubscriptionFilters | None = None,
        pagination: PaginationParams | None = None,
    ) -> ListPage:
        validate_id(form_id, "form_id")
        query = filters.to_query() if filters is not None else {}
        return self._list(f"forms/{form_id}/subscribers", "subscribers", pagination, query)

    def add_subscriber_to_form(self, form_id: int, subscriber_id: int) -> dict[str, Any]:
        validate_id(form_id, "form_id")
        validate_id(subscriber_id, "subscriber_id")
        return self._call("POST", f"forms/{form_id}/subscribers/{subscriber_id}")

    def add_subscriber_to_form_by_email(self, form_id: int, email_address: str) -> dict[str, Any]:
        """Add an existing subscriber to a form, looked up by email address."""
        validate_id(form_id, "form_id")
        email_address = validate_email(email_address)
        return self._call(
            "POST", f"forms/{form_id}/subscribers", body={"email_address": email_address}
        )

    def add_subscribers_to_forms(
        self, additions: list[dict[str, int]], callback_url: str | None = None
    ) -> dict[str, Any]:
        """Bulk add; each addition is ``{"form_id": ..., "subscriber_id": ...}``."""
        validate_non_empty(additions, "additions")
        for addition in additions:
            validate_id(addition.get("form_id"), "form_id")
            validate_id(addition.get("subscriber_id"), "subscriber_id")
        body: dict[str, Any] = {"additions": list(additions)}
        if callback_url:
            body["callback_url"] = callback_url
        return self._call("POST", "bulk/forms/subscribers", body=body)


__all__ = ["FormsMixin"]
