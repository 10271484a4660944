"""Cached resource lookups and legacy markup."""

from __future__ import annotations

from typing import Any

from ..cache import ResourceCache
from ..constants import RESOURCE_TYPES
from ..markup import absolutize_markup
from ..models import RequestSpec
from ..pagination import iterate_items
from ..validators import validate_choice, validate_url
from .base import ResourceMixin


def _active(item: dict[str, Any]) -> bool:
    return not item.get("archived")


class LookupsMixin(ResourceMixin):
    """``get_resources`` and ``get_resource``, both served from the client's ``cache``."""

    cache: ResourceCache

    def get_resources(self, resource: str) -> list[dict[str, Any]] | dict[int, int]:
        """Return every non-archived item of ``resource``, fetching it once per cache lifetime.

        ``resource`` is one of ``forms``, ``landing_pages``, ``subscription_forms`` or
        ``tags``. ``subscription_forms`` maps subscription form IDs to form IDs; the
        others are lists of items. Call ``cache.invalidate()`` to refetch.
        """
        validate_choice(resource, RESOURCE_TYPES, "resource")
        return self.cache.get_or_load(f"resources:{resource}", lambda: self._load_resources(resource))

    def _load_resources(self, resource: str) -> list[dict[str, Any]] | dict[int, int]:
        self.log("INFO", f"Loading resources {resource}")

        if resource == "subscription_forms":
            body = self._call("GET", "subscription_forms")
            mappings = body.get("subscription_forms", []) if isinstance(body, dict) else body or []
            return {item["id"]: item["form_id"] for item in mappings if _active(item)}

        if resource == "tags":
            return list(iterate_items(lambda params: self._list("tags", "tags", params)))

        items = iterate_items(lambda params: self._list("forms", "forms", params))
        if resource == "landing_pages":
            return [item for item in items if item.get("type") == "hosted" and _active(item)]
        return [item for item in items if _active(item)]

    def get_resource(self, url: str) -> str:
        """Fetch legacy form or landing page HTML with relative URLs made absolute.

        The markup is cached per URL.
        """
        url = validate_url(url, "url")
        return self.cache.get_or_load(f"markup:{url}", lambda: self._load_markup(url))

    def _load_markup(self, url: str) -> str:
        self.log("INFO", f"Getting resource {url}")
        spec = RequestSpec(method="GET", url=url, auth_required=False, content_type="text/html")
        envelope = self.execute(spec)
        return absolutize_markup(envelope.text, url)


__all__ = ["LookupsMixin"]
