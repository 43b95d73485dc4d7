"""Temporal workflows for the clinic dispatch service."""

from datetime import timedelta
from typing import Any, Dict

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from app.temporal import activities


@workflow.defn
class DailyMaintenanceWorkflow:
    """Run the daily maintenance trigger exactly once.

    Started by the `daily-maintenance-schedule` schedule at 23:00 UTC
    (06:00 in the clinic's UTC+7).
    """

    @workflow.run
    async def run(self) -> Dict[str, Any]:
        return await workflow.execute_activity(
            activities.trigger_daily_maintenance,
            start_to_close_timeout=timedelta(seconds=90),
            retry_policy=RetryPolicy(maximum_attempts=1),
        )
