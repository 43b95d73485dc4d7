"""Temporal workflows and activities for the scheduled maintenance trigger."""

from app.temporal.workflows import DailyMaintenanceWorkflow
from app.temporal import activities

__all__ = [
    "DailyMaintenanceWorkflow",
    "activities",
]
