"""Per-call filter options for list and stats endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..constants import SORT_ORDERS, SUBSCRIBER_SORT_FIELDS, SUBSCRIBER_STATES
from ..exceptions import InvalidArgumentError
from ..validators import format_timestamp, validate_choice, validate_email


def _check_range(after: date | None, before: date | None, argument: str) -> None:
    if after is not None and before is not None and after > before:
        raise InvalidArgumentError(f"{argument} range is empty", argument=argument)


class SubscriberFilters(BaseModel):
    """Filters for ``GET subscribers``.

    Values are validated by :meth:`to_query`, before any request is built.
    """

    model_config = ConfigDict(frozen=True)

    email_address: str | None = None
    status: str | None = None
    created_after: datetime | date | None = None
    created_before: datetime | date | None = None
    updated_after: datetime | date | None = None
    updated_before: datetime | date | None = None
    sort_field: str | None = None
    sort_order: str | None = None

    def to_query(self) -> dict[str, Any]:
        if self.email_address is not None:
            validate_email(self.email_address)
        if self.status is not None:
            validate_choice(self.status, [*SUBSCRIBER_STATES, "all"], "status")
        if self.sort_field is not None:
            validate_choice(self.sort_field, SUBSCRIBER_SORT_FIELDS, "sort_field")
        if self.sort_order is not None:
            validate_choice(self.sort_order, SORT_ORDERS, "sort_order")

        return {
            "email_address": self.email_address,
            "status": self.status,
            "created_after": format_timestamp(self.created_after),
            "created_before": format_timestamp(self.created_before),
            "updated_after": format_timestamp(self.updated_after),
            "updated_before": format_timestamp(self.updated_before),
            "sort_field": self.sort_field,
            "sort_order": self.sort_order,
        }


class SubscriptionFilters(BaseModel):
    """Filters for the subscriber lists of a form, sequence or tag."""

    model_config = ConfigDict(frozen=True)

    subscriber_state: str | None = None
    created_after: datetime | date | None = None
    created_before: datetime | date | None = None
    added_after: datetime | date | None = None
    added_before: datetime | date | None = None

    def to_query(self) -> dict[str, Any]:
        if self.subscriber_state is not None:
            validate_choice(self.subscriber_state, SUBSCRIBER_STATES, "subscriber_state")
        return {
            "subscriber_state": self.subscriber_state,
            "created_after": format_timestamp(self.created_after),
            "created_before": format_timestamp(self.created_before),
            "added_after": format_timestamp(self.added_after),
            "added_before": format_timestamp(self.added_before),
        }


class GrowthStatsRange(BaseModel):
    """Date range for ``GET account/growth_stats``; the API defaults to the last 90 days."""

    model_config = ConfigDict(frozen=True)

    starting: date | None = None
    ending: date | None = None

    def to_query(self) -> dict[str, Any]:
        _check_range(self.starting, self.ending, "starting")
        return {
            "starting": format_timestamp(self.starting),
            "ending": format_timestamp(self.ending),
        }


__all__ = ["SubscriberFilters", "SubscriptionFilters", "GrowthStatsRange"]
