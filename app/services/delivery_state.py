"""Stamp the "LINE message sent" marker on a purchase order."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from supabase import Client

logger = logging.getLogger(__name__)

ORDERS_TABLE = "purchase_orders"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeliveryStateRecorder:
    """Set `line_message_sent` once at least one delivery succeeded.

    The write is a plain "set to true" and never clears the flag, so
    repeating it is harmless. It is not transactional with the dispatch: if
    the process dies between delivery and this write, the marker stays unset.
    """

    def __init__(self, client: Client, clock: Callable[[], datetime] = _utcnow) -> None:
        self.client = client
        self.clock = clock

    def record_if_any_succeeded(self, order_id: str, success_count: int) -> bool:
        if success_count < 1:
            logger.info("No successful delivery, sent marker left unset", extra={"order_id": order_id})
            return False

        now = self.clock().isoformat()
        (
            self.client.table(ORDERS_TABLE)
            .update(
                {
                    "line_message_sent": True,
                    "line_message_sent_at": now,
                    "updated_at": now,
                }
            )
            .eq("id", order_id)
            .execute()
        )
        logger.info("Sent marker recorded", extra={"order_id": order_id, "sent_to": success_count})
        return True
