from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import TriggerSource


SYSTEM_ACTOR = "system"


class AuthenticatedUser(BaseModel):
    """User identity returned by the identity service for a bearer token."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None


class Principal(BaseModel):
    """Authenticated user together with the role that was checked."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: str
    email: Optional[str] = None


class TriggerPrincipal(BaseModel):
    """Who (or what) was admitted by the auth gate.

    Scheduled triggers never carry a `Principal`; manual triggers always do.
    """

    model_config = ConfigDict(frozen=True)

    source: TriggerSource
    principal: Optional[Principal] = None

    @property
    def triggered_by(self) -> str:
        if self.principal is None:
            return SYSTEM_ACTOR
        return self.principal.email or self.principal.id
