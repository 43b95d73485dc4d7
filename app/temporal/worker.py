"""Temporal worker for the clinic dispatch service.

The worker runs in a background task next to the FastAPI server.
"""

import asyncio
import logging
from typing import Optional

from temporalio.client import Client
from temporalio.worker import Worker

from app.temporal import activities
from app.temporal.schedules import TASK_QUEUE
from app.temporal.workflows import DailyMaintenanceWorkflow

logger = logging.getLogger(__name__)

_worker_task: Optional[asyncio.Task] = None


def build_worker(client: Client) -> Worker:
    return Worker(
        client,
        task_queue=TASK_QUEUE,
        workflows=[DailyMaintenanceWorkflow],
        activities=[activities.trigger_daily_maintenance],
    )


async def run_worker(client: Client) -> None:
    """Run the worker until cancelled."""
    logger.info("Temporal worker started", extra={"task_queue": TASK_QUEUE})
    try:
        await build_worker(client).run()
    except asyncio.CancelledError:
        logger.info("Temporal worker stopped")
        raise
    except Exception:
        logger.exception("Temporal worker crashed")


def start_worker_background(client: Client) -> asyncio.Task:
    """Start the worker on the running event loop."""
    global _worker_task
    if _worker_task is None or _worker_task.done():
        _worker_task = asyncio.get_running_loop().create_task(run_worker(client))
    return _worker_task


async def stop_worker() -> None:
    global _worker_task
    if _worker_task is None:
        return
    _worker_task.cancel()
    try:
        await _worker_task
    except asyncio.CancelledError:
        pass
    _worker_task = None
