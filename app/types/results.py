from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SendResult(BaseModel):
    """Standardized result returned by gateways after a successful push.

    Attributes:
        message_id: Provider-assigned identifier (LINE's `x-line-request-id`).
        ok: Convenience flag for providers that report `{ "ok": true }`.
        data: Raw provider response payload for debugging.

    Example:
        >>> SendResult(message_id="m1", ok=True)
    """

    message_id: Optional[str] = None
    ok: Optional[bool] = None
    data: Optional[Dict[str, Any]] = None


class DeliveryOutcome(BaseModel):
    """Result of pushing one message to one recipient.

    Serialized with the field names the dashboard reads:
    `{"success", "contact_id", "error"}`.
    """

    model_config = ConfigDict(frozen=True)

    recipient_id: str = Field(
        validation_alias=AliasChoices("recipient_id", "contact_id"),
        serialization_alias="contact_id",
    )
    succeeded: bool = Field(
        validation_alias=AliasChoices("succeeded", "success"),
        serialization_alias="success",
    )
    error_detail: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("error_detail", "error"),
        serialization_alias="error",
    )


class BroadcastSummary(BaseModel):
    """Aggregate of a finished dispatch after the zero-success policy applied."""

    success: bool
    sent_to: int
    total_contacts: int
    results: List[DeliveryOutcome]


class MaintenanceResult(BaseModel):
    """Normalized outcome of one maintenance procedure call.

    Produced for every invocation, successful or not; never persisted here.
    """

    succeeded: bool
    payload: Any = None
    error_message: Optional[str] = None
    started_at: datetime
    finished_at: datetime
    duration_ms: int
