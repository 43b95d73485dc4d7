"""Temporal activities for the scheduled maintenance trigger.

The activity goes through the same HTTP endpoint an external cron would use,
authenticating with the shared CRON_SECRET.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from temporalio import activity
from temporalio.exceptions import ApplicationError

from server.config import get_settings

logger = logging.getLogger(__name__)

TRIGGER_TIMEOUT_SECONDS = 75.0


@activity.defn
async def trigger_daily_maintenance() -> Dict[str, Any]:
    """Call `GET /api/cron/daily-maintenance` once and return its JSON body.

    Raises:
        ApplicationError: secret missing, request failed, or non-2xx answer.
            Marked non-retryable; maintenance must not run twice.
    """
    settings = get_settings()
    if not settings.cron_secret:
        raise ApplicationError("CRON_SECRET not configured", non_retryable=True)

    url = settings.resolved_maintenance_trigger_url
    try:
        async with httpx.AsyncClient(timeout=TRIGGER_TIMEOUT_SECONDS) as client:
            response = await client.get(url, headers={"Authorization": f"Bearer {settings.cron_secret}"})
    except httpx.RequestError as e:
        raise ApplicationError(f"Maintenance trigger unreachable: {e}", non_retryable=True) from e

    try:
        body = response.json()
    except ValueError:
        body = {"raw": response.text}

    if response.is_error:
        logger.error(
            "Scheduled maintenance failed",
            extra={"status": response.status_code, "body": body},
        )
        raise ApplicationError(
            f"Maintenance trigger answered HTTP {response.status_code}",
            body,
            non_retryable=True,
        )

    logger.info("Scheduled maintenance triggered", extra={"duration_ms": body.get("duration_ms")})
    return body
