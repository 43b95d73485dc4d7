from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel


class PushMessage(BaseModel):
    """Base class for messages pushed to an external recipient.

    Gateways translate a message into their own payload with `to_payload`.
    """

    message_type: str

    def to_payload(self) -> Dict[str, Any]:
        raise NotImplementedError


class TextPushMessage(PushMessage):
    """Plain text message.

    Length limits are checked by the gateway at send time.

    Example:
        >>> TextPushMessage(text="PO PO-100: 1. Implant A x2 (IA-1)").to_payload()
        {'type': 'text', 'text': 'PO PO-100: 1. Implant A x2 (IA-1)'}
    """

    text: str
    message_type: Literal["text"] = "text"

    def to_payload(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}
