"""Error taxonomy for the dispatch and trigger endpoints.

Every error carries the HTTP status and the message that is safe to show to
callers. The `reason` is for server-side logs only and never reaches the
response body.
"""

from __future__ import annotations

from typing import Optional


class DispatchError(Exception):
    """Base class for all errors raised on the trigger and broadcast paths."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, reason: Optional[str] = None, *, public_message: Optional[str] = None) -> None:
        self.reason = reason or self.public_message
        if public_message is not None:
            self.public_message = public_message
        super().__init__(self.reason)


class AuthenticationFailure(DispatchError):
    """Missing, malformed or rejected credential."""

    status_code = 401
    public_message = "Unauthorized"


class InsufficientRole(AuthenticationFailure):
    """Credential is valid but the user's role may not trigger maintenance."""

    status_code = 403
    public_message = "Admin access required"


class ConfigurationMissing(DispatchError):
    """Gateway credential, shared secret or backend is not configured."""

    status_code = 400
    public_message = "Service not configured"


class ResourceNotFound(DispatchError):
    status_code = 404
    public_message = "Resource not found"


class NoActiveRecipients(DispatchError):
    status_code = 404
    public_message = "No active LINE contact found for this supplier"


class TemplateMissing(DispatchError):
    """Neither the requested nor the default message template exists."""

    status_code = 500
    public_message = "Message template not configured"


class UpstreamTransportError(DispatchError):
    """A single external call failed. Contained per recipient, never fatal."""

    status_code = 502
    public_message = "Upstream error"


class InternalError(DispatchError):
    status_code = 500
    public_message = "Internal server error"


class DispatchDeadlineExceeded(InternalError):
    """Deliveries were still pending when the request deadline fired."""


__all__ = [
    "DispatchError",
    "AuthenticationFailure",
    "InsufficientRole",
    "ConfigurationMissing",
    "ResourceNotFound",
    "NoActiveRecipients",
    "TemplateMissing",
    "UpstreamTransportError",
    "InternalError",
    "DispatchDeadlineExceeded",
]
