"""Purchase endpoints."""

from __future__ import annotations

from typing import Any

from ..models import ListPage
from ..pagination import PaginationParams
from ..validators import validate_email, validate_id, validate_non_empty
from .base import ResourceMixin, compact


class PurchasesMixin(ResourceMixin):
    def get_purchases(self, pagination: PaginationParams | None = None) -> ListPage:
        return self._list("purchases", "purchases", pagination)

    def get_purchase(self, purchase_id: int) -> dict[str, Any]:
        validate_id(purchase_id, "purchase_id")
        return self._call("GET", f"purchases/{purchase_id}")

    def create_purchase(
        self,
        email_address: str,
        transaction_id: str,
        products: list[dict[str, Any]],
        currency: str = "USD",
        transaction_time: str | None = None,
        subtotal: float = 0,
        tax: float = 0,
        shipping: float = 0,
        discount: float = 0,
        total: float = 0,
        status: str = "paid",
        first_name: str | None = None,
        integration: str | None = None,
    ) -> dict[str, Any]:
        """Record a purchase.

        Each product is a mapping with ``name``, ``pid``, ``lid``, ``quantity`` and
        ``unit_price``; ``sku`` is optional.
        """
        validate_email(email_address)
        validate_non_empty(transaction_id, "transaction_id")
        validate_non_empty(products, "products")
        body = compact(
            {
                "email_address": email_address,
                "first_name": first_name,
                "currency": currency,
                "transaction_id": transaction_id,
                "transaction_time": transaction_time,
                "subtotal": subtotal,
                "tax": tax,
                "shipping": shipping,
                "discount": discount,
                "total": total,
                "status": status,
                "products": list(products),
                "integration": integration,
            }
        )
        return self._call("POST", "purchases", body=body)


__all__ = ["PurchasesMixin"]
