"""Temporal client service.

Holds the connection used to register schedules and run the worker. The
service runs without Temporal when the server is unreachable; the shared
secret endpoint can still be driven by any external scheduler.
"""

import logging
from typing import Optional

from temporalio.client import Client as TemporalClient

from server.config import get_settings

logger = logging.getLogger(__name__)


class TemporalService:
    """Service for managing the Temporal client connection."""

    def __init__(self, host: str, namespace: str) -> None:
        self.host = host
        self.namespace = namespace
        self.client: Optional[TemporalClient] = None

    async def connect(self) -> None:
        """Connect to the Temporal server; leaves the service unavailable on failure."""
        if self.client is not None:
            return

        try:
            self.client = await TemporalClient.connect(self.host, namespace=self.namespace)
            logger.info("Temporal client connected", extra={"host": self.host, "namespace": self.namespace})
        except Exception as e:
            logger.warning("Failed to connect to Temporal at %s: %s", self.host, e)
            self.client = None

    async def close(self) -> None:
        """Drop the client; temporalio clients have nothing to close explicitly."""
        self.client = None

    def is_available(self) -> bool:
        return self.client is not None

    def get_client(self) -> Optional[TemporalClient]:
        return self.client


# Global Temporal service instance (singleton)
_temporal_service: Optional[TemporalService] = None


def get_temporal_service() -> TemporalService:
    """Get or create the Temporal service instance."""
    global _temporal_service
    if _temporal_service is None:
        settings = get_settings()
        _temporal_service = TemporalService(settings.temporal_host, settings.temporal_namespace)
    return _temporal_service
