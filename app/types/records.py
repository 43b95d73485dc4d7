"""Snapshots of backend rows the dispatcher reads.

All records are frozen: a dispatch owns its snapshot for the duration of the
call and nothing mutates it.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class OrderLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_name: str
    quantity: int
    ref_code: Optional[str] = None


class Order(BaseModel):
    """Purchase order being announced to a supplier."""

    model_config = ConfigDict(frozen=True)

    id: str
    po_number: str
    supplier_id: Optional[str] = None
    expected_delivery_date: Optional[str] = None
    lines: Tuple[OrderLine, ...] = ()
    line_message_sent: bool = False


class Recipient(BaseModel):
    """Supplier contact reachable through the push gateway.

    Attributes:
        id: Contact row id.
        channel_id: LINE user id; contacts without one cannot be dispatched to.
        rank: Contact priority, lower is contacted first.
        active: Only active contacts are dispatch targets.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    channel_id: Optional[str] = None
    rank: int
    active: bool = True
    display_name: Optional[str] = None


class GatewaySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel_access_token: Optional[str] = None
    message_templates: Dict[str, str] = Field(default_factory=dict)
