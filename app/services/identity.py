"""Identity lookups backed by Supabase Auth and the `users` table."""

from __future__ import annotations

from typing import Any, Optional

from supabase import Client

from app.types import AuthenticatedUser, IdentityService


class SupabaseIdentityService(IdentityService):
    """Resolve user bearer tokens and their roles.

    Errors from Supabase propagate; the auth gate decides how to report them.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_user(self, token: str) -> Optional[AuthenticatedUser]:
        response = self.client.auth.get_user(token)
        user = getattr(response, "user", None) if response is not None else None
        if user is None:
            return None
        return AuthenticatedUser(id=str(user.id), email=getattr(user, "email", None))

    def role_for(self, user_id: str) -> Optional[str]:
        response = (
            self.client.table("users")
            .select("role:roles(name)")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return None
        return _role_name(rows[0].get("role"))


def _role_name(role: Any) -> Optional[str]:
    # PostgREST embeds a to-one relation as an object, but older schemas
    # expose it as a one-element list.
    if isinstance(role, list):
        role = role[0] if role else None
    if isinstance(role, dict):
        name = role.get("name")
        return str(name) if name else None
    return None
