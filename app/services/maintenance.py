"""Invoke the backend's daily maintenance procedure."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from postgrest.exceptions import APIError
from supabase import Client

from app.types import MaintenanceResult

logger = logging.getLogger(__name__)

DEFAULT_PROCEDURE = "run_daily_maintenance"


class MaintenanceInvoker:
    """Call one opaque remote procedure and normalize its outcome.

    The procedure is treated as a black box: no arguments, no retries here.
    Every outcome is returned as a `MaintenanceResult`; nothing is raised.
    """

    def __init__(self, client: Client, procedure: str = DEFAULT_PROCEDURE) -> None:
        self.client = client
        self.procedure = procedure

    def invoke(self) -> MaintenanceResult:
        started_at = datetime.now(timezone.utc)
        started = time.perf_counter()
        payload = None
        error_message = None

        try:
            response = self.client.rpc(self.procedure, {}).execute()
            payload = response.data
        except APIError as e:
            error_message = e.message or str(e)
            logger.error(
                "Maintenance procedure reported an error",
                extra={"procedure": self.procedure, "code": e.code, "error": error_message},
            )
        except Exception as e:
            error_message = str(e) or type(e).__name__
            logger.error(
                "Maintenance procedure unreachable",
                exc_info=True,
                extra={"procedure": self.procedure},
            )

        duration_ms = int((time.perf_counter() - started) * 1000)
        result = MaintenanceResult(
            succeeded=error_message is None,
            payload=payload,
            error_message=error_message,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            duration_ms=duration_ms,
        )
        if result.succeeded:
            logger.info(
                "Maintenance completed",
                extra={"procedure": self.procedure, "duration_ms": duration_ms},
            )
        return result
