"""Account endpoints."""

from __future__ import annotations

from typing import Any

from ..validators import validate_non_empty
from .base import ResourceMixin
from .filters import GrowthStatsRange


class AccountMixin(ResourceMixin):
    def get_account(self) -> dict[str, Any]:
        """Return the account the credential belongs to, including its ``user`` object."""
        return self._call("GET", "account")

    def get_account_colors(self) -> dict[str, Any]:
        return self._call("GET", "account/colors")

    def update_account_colors(self, colors: list[str]) -> dict[str, Any]:
        """Replace the account's saved colors with hex codes such as ``#111111``."""
        validate_non_empty(colors, "colors")
        return self._call("PUT", "account/colors", body={"colors": list(colors)})

    def get_creator_profile(self) -> dict[str, Any]:
        return self._call("GET", "account/creator_profile")

    def get_email_stats(self) -> dict[str, Any]:
        """Sending stats for the last 90 days."""
        return self._call("GET", "account/email_stats")

    def get_growth_stats(self, date_range: GrowthStatsRange | None = None) -> dict[str, Any]:
        query = date_range.to_query() if date_range is not None else {}
        return self._call("GET", "account/growth_stats", query=query)


__all__ = ["AccountMixin"]
