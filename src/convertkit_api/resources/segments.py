"""Segment endpoints."""

from __future__ import annotations

from ..models import ListPage
from ..pagination import PaginationParams
from .base import ResourceMixin


class SegmentsMixin(ResourceMixin):
    def get_segments(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("segments", "segments", pagination)


__all__ = ["SegmentsMixin"]
