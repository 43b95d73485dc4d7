from __future__ import annotations

from typing import Optional, Protocol

from .messages import PushMessage
from .principals import AuthenticatedUser
from .results import SendResult


class PushGateway(Protocol):
    """Protocol for external push providers.

    Implementations send one message to one channel identifier and raise
    `UpstreamTransportError` on any failure; the dispatcher turns that into a
    per-recipient outcome.

    Minimal example:
        >>> class EchoGateway:
        ...     def push_endpoint(self) -> str:
        ...         return "memory://echo"
        ...     async def push(self, to: str, message: PushMessage) -> SendResult:
        ...         return SendResult(ok=True, data={"to": to})
    """

    def push_endpoint(self) -> str:
        """Return the full URL used for pushing messages."""
        ...

    async def push(self, to: str, message: PushMessage) -> SendResult:
        """Push `message` to the recipient identified by `to`."""
        ...


class IdentityService(Protocol):
    """Collaborator that resolves user bearer tokens and roles."""

    def get_user(self, token: str) -> Optional[AuthenticatedUser]:
        """Return the user for `token`, or None if the token is not valid."""
        ...

    def role_for(self, user_id: str) -> Optional[str]:
        """Return the role name assigned to `user_id`, if any."""
        ...
