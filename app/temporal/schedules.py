"""Temporal schedules for the clinic dispatch service."""

from __future__ import annotations

import logging

from temporalio.client import (
    Client,
    Schedule,
    ScheduleActionStartWorkflow,
    ScheduleOverlapPolicy,
    SchedulePolicy,
    ScheduleSpec,
)
from temporalio.service import RPCError, RPCStatusCode

from app.temporal.workflows import DailyMaintenanceWorkflow

logger = logging.getLogger(__name__)

TASK_QUEUE = "clinic-dispatch-tasks"
DAILY_MAINTENANCE_SCHEDULE_ID = "daily-maintenance-schedule"
DAILY_MAINTENANCE_CRON = "0 23 * * *"


def daily_maintenance_schedule() -> Schedule:
    return Schedule(
        action=ScheduleActionStartWorkflow(
            DailyMaintenanceWorkflow.run,
            id="daily-maintenance",
            task_queue=TASK_QUEUE,
        ),
        spec=ScheduleSpec(cron_expressions=[DAILY_MAINTENANCE_CRON]),
        policy=SchedulePolicy(overlap=ScheduleOverlapPolicy.SKIP),
    )


async def ensure_daily_maintenance_schedule(client: Client) -> bool:
    """Create the daily maintenance schedule unless it already exists.

    Returns:
        True when the schedule was created by this call.
    """
    try:
        await client.get_schedule_handle(DAILY_MAINTENANCE_SCHEDULE_ID).describe()
        logger.info("Daily maintenance schedule already exists")
        return False
    except RPCError as e:
        if e.status != RPCStatusCode.NOT_FOUND:
            raise

    await client.create_schedule(DAILY_MAINTENANCE_SCHEDULE_ID, daily_maintenance_schedule())
    logger.info(
        "Daily maintenance schedule created",
        extra={"schedule_id": DAILY_MAINTENANCE_SCHEDULE_ID, "cron": DAILY_MAINTENANCE_CRON},
    )
    return True


async def ensure_schedules(client: Client) -> None:
    """Ensure all required schedules are active."""
    await ensure_daily_maintenance_schedule(client)
