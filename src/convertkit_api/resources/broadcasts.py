"""Broadcast endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_id
from .base import ResourceMixin, compact


def _broadcast_body(
    subject: str | None,
    content: str | None,
    description: str | None,
    public: bool | None,
    published_at: datetime | None,
    send_at: datetime | None,
    email_address: str | None,
    email_template_id: int | None,
    thumbnail_alt: str | None,
    thumbnail_url: str | None,
    preview_text: str | None,
    subscriber_filter: list[dict[str, Any]] | None,
) -> dict[str, Any]:
    return compact(
        {
            "subject": subject,
            "content": content,
            "description": description,
            "public": public,
            "published_at": published_at.isoformat() if published_at else None,
            "send_at": send_at.isoformat() if send_at else None,
            "email_address": email_address,
            "email_template_id": email_template_id,
            "thumbnail_alt": thumbnail_alt,
            "thumbnail_url": thumbnail_url,
            "preview_text": preview_text,
            "subscriber_filter": subscriber_filter,
        }
    )


class BroadcastsMixin(ResourceMixin):
    def get_broadcasts(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("broadcasts", "broadcasts", pagination)

    def create_broadcast(
        self,
        subject: str | None = None,
        content: str | None = None,
        description: str | None = None,
        public: bool | None = None,
        published_at: datetime | None = None,
        send_at: datetime | None = None,
        email_address: str | None = None,
        email_template_id: int | None = None,
        thumbnail_alt: str | None = None,
        thumbnail_url: str | None = None,
        preview_text: str | None = None,
        subscriber_filter: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a draft broadcast, or schedule it when ``send_at`` is given."""
        body = _broadcast_body(
            subject,
            content,
            description,
            public,
            published_at,
            send_at,
            email_address,
            email_template_id,
            thumbnail_alt,
            thumbnail_url,
            preview_text,
            subscriber_filter,
        )
        return self._call("POST", "broadcasts", body=body)

    def get_broadcast(self, broadcast_id: int) -> dict[str, Any]:
        validate_id(broadcast_id, "broadcast_id")
        return self._call("GET", f"broadcasts/{broadcast_id}")

    def get_broadcast_stats(self, broadcast_id: int) -> dict[str, Any]:
        validate_id(broadcast_id, "broadcast_id")
        return self._call("GET", f"broadcasts/{broadcast_id}/stats")

    def get_broadcast_link_clicks(
        self, broadcast_id: int, pagination: PaginationParams | None = None
    ) -> dict[str, Any]:
        validate_id(broadcast_id, "broadcast_id")
        query = pagination.to_query() if pagination is not None else {}
        return self._call("GET", f"broadcasts/{broadcast_id}/clicks", query=query)

    def update_broadcast(
        self,
        broadcast_id: int,
        subject: str | None = None,
        content: str | None = None,
        description: str | None = None,
        public: bool | None = None,
        published_at: datetime | None = None,
        send_at: datetime | None = None,
        email_address: str | None = None,
        email_template_id: int | None = None,
        thumbnail_alt: str | None = None,
        thumbnail_url: str | None = None,
        preview_text: str | None = None,
        subscriber_filter: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        validate_id(broadcast_id, "broadcast_id")
        body = _broadcast_body(
            subject,
            content,
            description,
            public,
            published_at,
            send_at,
            email_address,
            email_template_id,
            thumbnail_alt,
            thumbnail_url,
            preview_text,
            subscriber_filter,
        )
        return self._call("PUT", f"broadcasts/{broadcast_id}", body=body)

    def delete_broadcast(self, broadcast_id: int) -> None:
        validate_id(broadcast_id, "broadcast_id")
        self._call("DELETE", f"broadcasts/{broadcast_id}")


__all__ = ["BroadcastsMixin"]
