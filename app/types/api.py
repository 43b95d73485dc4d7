from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from .enums import DEFAULT_TEMPLATE_CATEGORY


class BroadcastRequest(BaseModel):
    """Request body for `POST /api/line/send-message`.

    Attributes:
        target_id: Supplier whose contacts receive the message.
        entity_id: Purchase order being announced.
        message_category: Template key, e.g. "urgent_order".

    The dashboard's own field names are accepted as well:

        {"po_id": "po-1", "supplier_id": "sup-1", "message_type": "urgent_order"}
    """

    target_id: str = Field(validation_alias=AliasChoices("target_id", "supplier_id"))
    entity_id: str = Field(validation_alias=AliasChoices("entity_id", "po_id"))
    message_category: str = Field(
        default=DEFAULT_TEMPLATE_CATEGORY.value,
        validation_alias=AliasChoices("message_category", "message_type"),
    )


class ScheduledMaintenanceResponse(BaseModel):
    success: bool
    data: Any = None
    executed_at: str
    duration_ms: int


class ManualMaintenanceResponse(BaseModel):
    success: bool
    data: Any = None
    triggered_by: str
    executed_at: str
