"""Email template endpoints."""

from __future__ import annotations

from ..models import ListPage
from ..pagination import PaginationParams
from .base import ResourceMixin


class EmailTemplatesMixin(ResourceMixin):
    def get_email_templates(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("email_templates", "email_templates", pagination)


__all__ = ["EmailTemplatesMixin"]
