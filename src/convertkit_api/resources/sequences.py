"""Sequence endpoints."""

from __future__ import annotations

from typing import Any

from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_email, validate_id
from .base import ResourceMixin
from .filters import SubscriptionFilters


class SequencesMixin(ResourceMixin):
    def get_sequences(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("sequences", "sequences", pagination)

    def get_sequence_subscriptions(
        self,
        sequence_id: int,
        filters: SubscriptionFilters | None = None,
        pagination: PaginationParams | None = None,
    ) -> ListPage:
        validate_id(sequence_id, "sequence_id")
        query = filters.to_query() if filters is not None else {}
        return self._list(f"sequences/{sequence_id}/subscribers", "subscribers", pagination, query)

    def add_subscriber_to_sequence(self, sequence_id: int, subscriber_id: int) -> dict[str, Any]:
        validate_id(sequence_id, "sequence_id")
        validate_id(subscriber_id, "subscriber_id")
        return self._call("POST", f"sequences/{sequence_id}/subscribers/{subscriber_id}")

    def add_subscriber_to_sequence_by_email(self, sequence_id: int, email_address: str) -> dict[str, Any]:
        validate_id(sequence_id, "sequence_id")
        email_address = validate_email(email_address)
        return self._call(
            "POST", f"sequences/{sequence_id}/subscribers", body={"email_address": email_address}
        )


__all__ = ["SequencesMixin"]
