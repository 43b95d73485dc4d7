"""Authentication for maintenance triggers.

Two trust paths share one entry point:

- `SharedSecretCredential`: machine-to-machine scheduled trigger. The secret
  is compared with the configured CRON_SECRET; no user is involved and the
  trigger is attributed to "system".
- `BearerTokenCredential`: a dashboard user's access token. The token is
  exchanged for a user, the user's role is looked up, and only admin roles
  may proceed.

Callers only ever see "Unauthorized" (401) or "Admin access required" (403);
the precise reason is kept on the exception for the logs.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Union

from app.errors import AuthenticationFailure, InsufficientRole
from app.types import IdentityService, Principal, TriggerPrincipal, TriggerSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SharedSecretCredential:
    secret: str


@dataclass(frozen=True)
class BearerTokenCredential:
    token: str


Credential = Union[SharedSecretCredential, BearerTokenCredential]


class AuthGate:
    """Validate a trigger credential and return who is acting."""

    def __init__(
        self,
        *,
        cron_secret: Optional[str] = None,
        admin_roles: Iterable[str] = ("admin",),
        identity: Optional[IdentityService] = None,
    ) -> None:
        self.cron_secret = cron_secret
        self.admin_roles: FrozenSet[str] = frozenset(admin_roles)
        self.identity = identity

    def authorize(self, credential: Optional[Credential]) -> TriggerPrincipal:
        if isinstance(credential, SharedSecretCredential):
            return self._authorize_shared_secret(credential)
        if isinstance(credential, BearerTokenCredential):
            return self._authorize_bearer_token(credential)
        raise AuthenticationFailure("missing credential")

    def _authorize_shared_secret(self, credential: SharedSecretCredential) -> TriggerPrincipal:
        if not self.cron_secret:
            logger.warning("CRON_SECRET not configured; rejecting scheduled trigger")
            raise AuthenticationFailure("shared secret not configured")
        if not hmac.compare_digest(credential.secret.encode("utf-8"), self.cron_secret.encode("utf-8")):
            raise AuthenticationFailure("shared secret mismatch")
        return TriggerPrincipal(source=TriggerSource.SCHEDULED)

    def _authorize_bearer_token(self, credential: BearerTokenCredential) -> TriggerPrincipal:
        if self.identity is None:
            raise AuthenticationFailure("no identity service available")

        try:
            user = self.identity.get_user(credential.token)
        except Exception as e:
            raise AuthenticationFailure(f"invalid token: {e}") from e
        if user is None:
            raise AuthenticationFailure("invalid token: no user")

        try:
            role = self.identity.role_for(user.id)
        except Exception as e:
            raise InsufficientRole(f"role lookup failed for user {user.id}: {e}") from e
        if role not in self.admin_roles:
            raise InsufficientRole(f"insufficient role {role!r} for user {user.id}")

        return TriggerPrincipal(
            source=TriggerSource.MANUAL,
            principal=Principal(id=user.id, role=role, email=user.email),
        )
