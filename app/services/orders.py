"""Read purchase orders together with their lines and products."""

from __future__ import annotations

from typing import Any, Dict, List

from supabase import Client

from app.errors import ResourceNotFound
from app.types import Order, OrderLine

ORDERS_TABLE = "purchase_orders"
ORDER_SELECT = "*, supplier:suppliers(*), items:purchase_order_items(*, product:products(*))"


def _line_from_row(row: Dict[str, Any]) -> OrderLine:
    product = row.get("product") or {}
    return OrderLine(
        product_name=str(product.get("name") or row.get("product_name") or "-"),
        quantity=int(row.get("quantity_ordered") or row.get("quantity") or 0),
        ref_code=product.get("ref_code") or None,
    )


def order_from_row(row: Dict[str, Any]) -> Order:
    items: List[Dict[str, Any]] = row.get("items") or []
    return Order(
        id=str(row["id"]),
        po_number=str(row.get("po_number") or ""),
        supplier_id=row.get("supplier_id"),
        expected_delivery_date=row.get("expected_delivery_date") or row.get("expected_at") or None,
        lines=tuple(_line_from_row(item) for item in items),
        line_message_sent=bool(row.get("line_message_sent", False)),
    )


class OrderRepository:
    def __init__(self, client: Client) -> None:
        self.client = client

    def get(self, order_id: str) -> Order:
        """Load one order snapshot.

        Raises:
            ResourceNotFound: no purchase order has this id.
        """
        response = (
            self.client.table(ORDERS_TABLE)
            .select(ORDER_SELECT)
            .eq("id", order_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            raise ResourceNotFound(
                f"purchase order {order_id} not found",
                public_message="Purchase order not found",
            )
        return order_from_row(rows[0])
