from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from supabase import Client

from app.adapters.registry import AdapterRegistry
from app.services.delivery_state import DeliveryStateRecorder
from app.services.dispatcher import BroadcastDispatcher, summarize
from app.services.line_settings import LineSettingsRepository
from app.services.orders import OrderRepository
from app.services.recipients import RecipientResolver
from app.services.supabase_client import get_supabase_client
from app.services.templates import TemplateRenderer
from app.types import BroadcastRequest, BroadcastSummary, TextPushMessage, ZeroSuccessPolicy
from server.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/line", tags=["line"])


def _zero_success_policy(settings: Settings) -> ZeroSuccessPolicy:
    try:
        return ZeroSuccessPolicy(settings.broadcast_zero_success_policy.strip().lower())
    except ValueError:
        logger.warning(
            "Unknown BROADCAST_ZERO_SUCCESS_POLICY, using report_success",
            extra={"value": settings.broadcast_zero_success_policy},
        )
        return ZeroSuccessPolicy.REPORT_SUCCESS


@router.post("/send-message", response_model=BroadcastSummary)
async def send_message(
    payload: BroadcastRequest,
    client: Client = Depends(get_supabase_client),
    settings: Settings = Depends(get_settings),
):
    """Announce a purchase order to every active LINE contact of its supplier.

    - Loads gateway settings, the order and the supplier's contacts
    - Renders the requested template (default template when missing)
    - Pushes to all contacts concurrently and waits for every result
    - Marks the order as sent when at least one push succeeded
    """
    gateway_settings = LineSettingsRepository(client, settings.line_channel_access_token).load()
    order = OrderRepository(client).get(payload.entity_id)
    recipients = RecipientResolver(client).resolve(payload.target_id)

    text = TemplateRenderer(gateway_settings.message_templates).render(payload.message_category, order)

    gateway = AdapterRegistry.get(
        "line",
        access_token=gateway_settings.channel_access_token,
        base_url=settings.line_api_base_url,
        timeout_seconds=settings.line_timeout_seconds,
    )
    dispatcher = BroadcastDispatcher(gateway, deadline_seconds=settings.broadcast_deadline_seconds)
    outcomes = await dispatcher.dispatch(TextPushMessage(text=text), recipients)
    summary = summarize(outcomes, _zero_success_policy(settings))

    try:
        DeliveryStateRecorder(client).record_if_any_succeeded(order.id, summary.sent_to)
    except Exception:
        # Delivery already happened; report it even when the marker write fails.
        logger.error(
            "Messages delivered but sent marker not recorded",
            exc_info=True,
            extra={"order_id": order.id, "sent_to": summary.sent_to},
        )

    logger.info(
        "Broadcast finished",
        extra={
            "order_id": order.id,
            "supplier_id": payload.target_id,
            "sent_to": summary.sent_to,
            "total_contacts": summary.total_contacts,
        },
    )
    if not summary.success:
        return JSONResponse(summary.model_dump(mode="json", by_alias=True), status_code=502)
    return summary
