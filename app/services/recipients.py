"""Resolve which supplier contacts receive a broadcast."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from supabase import Client

from app.errors import NoActiveRecipients
from app.types import CONTACT_TYPE_RANK, UNRANKED_CONTACT, Recipient

logger = logging.getLogger(__name__)

CONTACTS_TABLE = "supplier_line_contacts"


def _rank(row: Dict[str, Any]) -> int:
    priority = row.get("priority")
    if isinstance(priority, int) and not isinstance(priority, bool):
        return priority
    return CONTACT_TYPE_RANK.get(str(row.get("contact_type") or "").lower(), UNRANKED_CONTACT)


def recipient_from_row(row: Dict[str, Any]) -> Recipient:
    return Recipient(
        id=str(row["id"]),
        channel_id=row.get("line_user_id") or None,
        rank=_rank(row),
        active=bool(row.get("is_active", False)),
        display_name=row.get("line_display_name"),
    )


def order_recipients(recipients: Iterable[Recipient]) -> List[Recipient]:
    """Keep active, reachable recipients, primary contact first, ties by id."""
    eligible = [r for r in recipients if r.active and r.channel_id]
    return sorted(eligible, key=lambda r: (r.rank, r.id))


class RecipientResolver:
    """Load the dispatch targets for a supplier."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def resolve(self, target_entity_id: str) -> List[Recipient]:
        response = (
            self.client.table(CONTACTS_TABLE)
            .select("*")
            .eq("supplier_id", target_entity_id)
            .eq("is_active", True)
            .execute()
        )
        rows = response.data or []
        recipients = order_recipients(recipient_from_row(row) for row in rows)

        skipped = len(rows) - len(recipients)
        if skipped:
            logger.info(
                "Skipped contacts without a LINE user id",
                extra={"supplier_id": target_entity_id, "skipped": skipped},
            )
        if not recipients:
            raise NoActiveRecipients(f"supplier {target_entity_id} has no reachable contacts")
        return recipients
