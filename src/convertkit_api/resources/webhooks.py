"""Webhook endpoints."""

from __future__ import annotations

from typing import Any

from ..constants import WEBHOOK_EVENT_PARAMETERS, WEBHOOK_EVENTS
from ..exceptions import InvalidArgumentError
from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_choice, validate_id, validate_url
from .base import ResourceMixin


def webhook_event(event: str, parameter: str | int | None = None) -> dict[str, Any]:
    """Build the ``event`` object for ``POST webhooks``.

    ``event`` is the qualified name (``subscriber.form_subscribe``); the API takes the
    name after the dot. Events listed in ``WEBHOOK_EVENT_PARAMETERS`` require
    ``parameter``.
    """
    validate_choice(event, WEBHOOK_EVENTS, "event")
    payload: dict[str, Any] = {"name": event.split(".", 1)[1]}
    key = WEBHOOK_EVENT_PARAMETERS.get(event)
    if key is not None:
        if parameter in (None, ""):
            raise InvalidArgumentError(f"{event} requires {key}", argument="parameter")
        payload[key] = parameter
    return payload


class WebhooksMixin(ResourceMixin):
    def get_webhooks(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("webhooks", "webhooks", pagination)

    def create_webhook(self, url: str, event: str, parameter: str | int | None = None) -> dict[str, Any]:
        validate_url(url, "url")
        body = {"target_url": url, "event": webhook_event(event, parameter)}
        return self._call("POST", "webhooks", body=body)

    def delete_webhook(self, webhook_id: int) -> None:
        validate_id(webhook_id, "webhook_id")
        self._call("DELETE", f"webhooks/{webhook_id}")


__all__ = ["WebhooksMixin", "webhook_event"]
