"""Gateway credential and message templates for LINE pushes."""

from __future__ import annotations

from typing import Any, Dict, Optional

from supabase import Client

from app.errors import ConfigurationMissing
from app.types import GatewaySettings

SETTINGS_TABLE = "line_settings"


def _templates(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): value for key, value in raw.items() if isinstance(value, str)}


class LineSettingsRepository:
    """Load the single `line_settings` row.

    `LINE_CHANNEL_ACCESS_TOKEN` from the environment takes precedence over the
    token stored in the row.
    """

    def __init__(self, client: Client, token_override: Optional[str] = None) -> None:
        self.client = client
        self.token_override = token_override

    def load(self) -> GatewaySettings:
        response = self.client.table(SETTINGS_TABLE).select("*").limit(1).execute()
        rows = response.data or []
        row = rows[0] if rows else {}

        token = self.token_override or row.get("channel_access_token")
        if not token:
            raise ConfigurationMissing(
                "no LINE channel access token configured",
                public_message="LINE API not configured",
            )
        return GatewaySettings(
            channel_access_token=token,
            message_templates=_templates(row.get("message_templates")),
        )
