"""Custom field endpoints."""

from __future__ import annotations

from typing import Any

from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_id, validate_non_empty
from .base import ResourceMixin


class CustomFieldsMixin(ResourceMixin):
    def get_custom_fields(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("custom_fields", "custom_fields", pagination)

    def create_custom_field(self, label: str) -> dict[str, Any]:
        validate_non_empty(label, "label")
        return self._call("POST", "custom_fields", body={"label": label})

    def create_custom_fields(self, labels: list[str]) -> dict[str, Any]:
        """Create several fields in one call. The response lists ``custom_fields`` and ``failures``."""
        validate_non_empty(labels, "labels")
        fields = [{"label": validate_non_empty(label, "labels")} for label in labels]
        return self._call("POST", "bulk/custom_fields", body={"custom_fields": fields})

    def update_custom_field(self, custom_field_id: int, label: str) -> dict[str, Any]:
        validate_id(custom_field_id, "custom_field_id")
        validate_non_empty(label, "label")
        return self._call("PUT", f"custom_fields/{custom_field_id}", body={"label": label})

    def delete_custom_field(self, custom_field_id: int) -> None:
        validate_id(custom_field_id, "custom_field_id")
        self._call("DELETE", f"custom_fields/{custom_field_id}")


__all__ = ["CustomFieldsMixin"]
