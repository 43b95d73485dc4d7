"""Concurrent fan-out of one message to every resolved recipient.

Each recipient gets its own task. A failed push only affects that
recipient's `DeliveryOutcome`; the dispatcher waits for every task to settle
before returning, so callers always get one outcome per recipient.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from app.errors import DispatchDeadlineExceeded, DispatchError
from app.types import (
    BroadcastSummary,
    DeliveryOutcome,
    PushGateway,
    PushMessage,
    Recipient,
    ZeroSuccessPolicy,
)

logger = logging.getLogger(__name__)


class BroadcastDispatcher:
    def __init__(self, gateway: PushGateway, *, deadline_seconds: Optional[float] = None) -> None:
        self.gateway = gateway
        self.deadline_seconds = deadline_seconds

    async def _deliver(self, message: PushMessage, recipient: Recipient) -> DeliveryOutcome:
        try:
            await self.gateway.push(recipient.channel_id, message)
        except DispatchError as e:
            logger.warning(
                "Delivery failed",
                extra={"recipient_id": recipient.id, "error": e.reason},
            )
            return DeliveryOutcome(recipient_id=recipient.id, succeeded=False, error_detail=e.reason)
        except Exception as e:
            logger.exception("Unexpected delivery error", extra={"recipient_id": recipient.id})
            return DeliveryOutcome(
                recipient_id=recipient.id,
                succeeded=False,
                error_detail=str(e) or type(e).__name__,
            )
        return DeliveryOutcome(recipient_id=recipient.id, succeeded=True)

    async def dispatch(self, message: PushMessage, recipients: Sequence[Recipient]) -> List[DeliveryOutcome]:
        join = asyncio.gather(*(self._deliver(message, recipient) for recipient in recipients))
        if not self.deadline_seconds:
            return list(await join)
        try:
            return list(await asyncio.wait_for(join, timeout=self.deadline_seconds))
        except asyncio.TimeoutError as e:
            raise DispatchDeadlineExceeded(
                f"{len(recipients)} deliveries not settled after {self.deadline_seconds}s"
            ) from e


def count_successes(outcomes: Sequence[DeliveryOutcome]) -> int:
    return sum(1 for outcome in outcomes if outcome.succeeded)


def summarize(
    outcomes: Sequence[DeliveryOutcome],
    policy: ZeroSuccessPolicy = ZeroSuccessPolicy.REPORT_SUCCESS,
) -> BroadcastSummary:
    """Decide whether a finished broadcast counts as a success.

    Partial delivery is always a success. A broadcast where nobody received
    the message is a success only under `ZeroSuccessPolicy.REPORT_SUCCESS`.
    """
    sent_to = count_successes(outcomes)
    success = sent_to > 0 or policy is ZeroSuccessPolicy.REPORT_SUCCESS
    if sent_to == 0 and outcomes:
        logger.warning(
            "Broadcast reached no recipients",
            extra={"total_contacts": len(outcomes), "policy": policy.value},
        )
    return BroadcastSummary(
        success=success,
        sent_to=sent_to,
        total_contacts=len(outcomes),
        results=list(outcomes),
    )
