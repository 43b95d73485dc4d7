"""Core types for the dispatch service.

This package centralizes enums, record snapshots, message models, gateway
protocols, and result/API schemas. Most modules should import types from here
rather than directly from submodules.

Usage:
    from app.types import Order, Recipient, TextPushMessage
"""

from .enums import (
    CONTACT_TYPE_RANK,
    DEFAULT_TEMPLATE_CATEGORY,
    UNRANKED_CONTACT,
    ContactType,
    Placeholder,
    TemplateCategory,
    TriggerSource,
    ZeroSuccessPolicy,
)
from .messages import PushMessage, TextPushMessage
from .records import GatewaySettings, Order, OrderLine, Recipient
from .principals import SYSTEM_ACTOR, AuthenticatedUser, Principal, TriggerPrincipal
from .protocols import IdentityService, PushGateway
from .results import BroadcastSummary, DeliveryOutcome, MaintenanceResult, SendResult
from .api import (
    BroadcastRequest,
    ManualMaintenanceResponse,
    ScheduledMaintenanceResponse,
)

__all__ = [
    "CONTACT_TYPE_RANK",
    "DEFAULT_TEMPLATE_CATEGORY",
    "UNRANKED_CONTACT",
    "ContactType",
    "Placeholder",
    "TemplateCategory",
    "TriggerSource",
    "ZeroSuccessPolicy",
    "PushMessage",
    "TextPushMessage",
    "GatewaySettings",
    "Order",
    "OrderLine",
    "Recipient",
    "SYSTEM_ACTOR",
    "AuthenticatedUser",
    "Principal",
    "TriggerPrincipal",
    "IdentityService",
    "PushGateway",
    "BroadcastSummary",
    "DeliveryOutcome",
    "MaintenanceResult",
    "SendResult",
    "BroadcastRequest",
    "ManualMaintenanceResponse",
    "ScheduledMaintenanceResponse",
]
