"""Services for the notification dispatch and maintenance trigger paths."""

from .auth_gate import AuthGate, BearerTokenCredential, Credential, SharedSecretCredential
from .delivery_state import DeliveryStateRecorder
from .dispatcher import BroadcastDispatcher, count_successes, summarize
from .maintenance import MaintenanceInvoker
from .recipients import RecipientResolver
from .templates import TemplateRenderer

__all__ = [
    "AuthGate",
    "BearerTokenCredential",
    "Credential",
    "SharedSecretCredential",
    "DeliveryStateRecorder",
    "BroadcastDispatcher",
    "count_successes",
    "summarize",
    "MaintenanceInvoker",
    "RecipientResolver",
    "TemplateRenderer",
]
