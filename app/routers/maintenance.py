from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Security
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from app.errors import AuthenticationFailure
from app.services.auth_gate import AuthGate, BearerTokenCredential, Credential, SharedSecretCredential
from app.services.identity import SupabaseIdentityService
from app.services.maintenance import MaintenanceInvoker
from app.services.supabase_client import get_supabase_client
from app.types import ManualMaintenanceResponse, ScheduledMaintenanceResponse, TriggerPrincipal
from server.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["maintenance"])
security = HTTPBearer(auto_error=False)


def _authorize(gate: AuthGate, credential: Optional[Credential]) -> TriggerPrincipal:
    try:
        return gate.authorize(credential)
    except AuthenticationFailure as e:
        logger.warning(
            "Maintenance trigger rejected",
            extra={"reason": e.reason, "status": e.status_code},
        )
        raise


def require_scheduled_trigger(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    settings: Settings = Depends(get_settings),
) -> TriggerPrincipal:
    """Admit the scheduler holding the shared CRON_SECRET."""
    credential = SharedSecretCredential(credentials.credentials) if credentials else None
    return _authorize(AuthGate(cron_secret=settings.cron_secret), credential)


def require_admin_trigger(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    settings: Settings = Depends(get_settings),
    client: Client = Depends(get_supabase_client),
) -> TriggerPrincipal:
    """Admit a dashboard user whose role is an admin role."""
    credential = BearerTokenCredential(credentials.credentials) if credentials else None
    gate = AuthGate(
        admin_roles=settings.admin_roles,
        identity=SupabaseIdentityService(client),
    )
    return _authorize(gate, credential)


@router.get("/daily-maintenance", response_model=ScheduledMaintenanceResponse)
def run_scheduled_maintenance(
    trigger: TriggerPrincipal = Depends(require_scheduled_trigger),
    client: Client = Depends(get_supabase_client),
    settings: Settings = Depends(get_settings),
):
    """Run daily maintenance on behalf of the scheduler."""
    result = MaintenanceInvoker(client, settings.maintenance_procedure).invoke()
    executed_at = result.finished_at.isoformat()

    if not result.succeeded:
        return JSONResponse(
            {
                "success": False,
                "error": result.error_message,
                "executed_at": executed_at,
                "duration_ms": result.duration_ms,
            },
            status_code=500,
        )

    logger.info("Scheduled maintenance finished", extra={"triggered_by": trigger.triggered_by})
    return ScheduledMaintenanceResponse(
        success=True,
        data=result.payload,
        executed_at=executed_at,
        duration_ms=result.duration_ms,
    )


@router.post("/daily-maintenance", response_model=ManualMaintenanceResponse)
def run_manual_maintenance(
    trigger: TriggerPrincipal = Depends(require_admin_trigger),
    client: Client = Depends(get_supabase_client),
    settings: Settings = Depends(get_settings),
):
    """Run daily maintenance on demand from the admin panel."""
    logger.info("Manual maintenance requested", extra={"triggered_by": trigger.triggered_by})
    result = MaintenanceInvoker(client, settings.maintenance_procedure).invoke()

    if not result.succeeded:
        return JSONResponse({"success": False, "error": result.error_message}, status_code=500)

    return ManualMaintenanceResponse(
        success=True,
        data=result.payload,
        triggered_by=trigger.triggered_by,
        executed_at=result.finished_at.isoformat(),
    )
