from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.errors import ConfigurationMissing, UpstreamTransportError
from app.types import PushGateway, PushMessage, SendResult, TextPushMessage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.line.me"
PUSH_PATH = "/v2/bot/message/push"
MAX_TEXT_LENGTH = 5000


class LineClient(PushGateway):
    """LINE Messaging API adapter implementing the PushGateway protocol.

    Pushes one message to one LINE user id per call. Every failure, whether
    an error status or a network problem, is raised as `UpstreamTransportError`
    with a short detail so the dispatcher can record it for that recipient.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.access_token = access_token or ""
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def push_endpoint(self) -> str:
        return f"{self.base_url}{PUSH_PATH}"

    def _build_payload(self, to: str, message: PushMessage) -> Dict[str, Any]:
        """Build the push body.

        See: https://developers.line.biz/en/reference/messaging-api/#send-push-message
        """
        return {"to": to, "messages": [message.to_payload()]}

    def _check_message(self, message: PushMessage) -> None:
        if isinstance(message, TextPushMessage):
            if not message.text.strip():
                raise UpstreamTransportError("LINE rejects empty text messages")
            if len(message.text) > MAX_TEXT_LENGTH:
                raise UpstreamTransportError(
                    f"text is {len(message.text)} characters, LINE allows {MAX_TEXT_LENGTH}"
                )

    async def push(self, to: str, message: PushMessage) -> SendResult:
        """Send a push message via LINE."""
        if not self.access_token:
            raise ConfigurationMissing(
                "LINE channel access token missing", public_message="LINE API not configured"
            )

        self._check_message(message)
        payload = self._build_payload(to, message)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.push_endpoint(), headers=self._headers(), json=payload)
        except httpx.TimeoutException as e:
            raise UpstreamTransportError(f"LINE push timed out: {e}") from e
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"LINE push failed: {e}") from e

        if response.is_error:
            detail = response.text
            logger.warning(
                "LINE push rejected",
                extra={"to": to, "status": response.status_code, "detail": detail[:300]},
            )
            raise UpstreamTransportError(detail or f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            data = None
        return SendResult(
            message_id=response.headers.get("x-line-request-id"),
            ok=True,
            data=data if isinstance(data, dict) else None,
        )
