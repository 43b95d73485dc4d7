from __future__ import annotations

from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from main import app
from app.services.supabase_client import get_supabase_client
from server.config import get_settings
from tests.fakes import FakeSupabase

LINE_BASE_URL = "https://api.line.test"
PUSH_URL = f"{LINE_BASE_URL}/v2/bot/message/push"
CRON_SECRET = "cron-secret"

TEMPLATES = {
    "urgent_order": "ด่วน! PO {po_number}\n{items}\nส่งภายใน {delivery_date}",
    "normal_order": "PO {po_number}\n{items}\nกำหนดส่ง {delivery_date}",
    "order_reminder": "Reminder for {po_number}",
}


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("CRON_SECRET", CRON_SECRET)
    monkeypatch.setenv("ADMIN_ROLES", "admin")
    monkeypatch.setenv("LINE_API_BASE_URL", LINE_BASE_URL)
    monkeypatch.setenv("TEMPORAL_ENABLED", "0")
    monkeypatch.setenv("CLINIC_PORT", "8000")
    for name in (
        "LINE_CHANNEL_ACCESS_TOKEN",
        "BROADCAST_ZERO_SUCCESS_POLICY",
        "BROADCAST_DEADLINE_SECONDS",
        "MAINTENANCE_PROCEDURE",
        "MAINTENANCE_TRIGGER_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def contact(contact_id: str, line_user_id: str | None, contact_type: str = "primary", **extra: Any) -> Dict[str, Any]:
    row = {
        "id": contact_id,
        "supplier_id": "sup-1",
        "line_user_id": line_user_id,
        "line_display_name": f"Contact {contact_id}",
        "contact_type": contact_type,
        "is_active": True,
    }
    row.update(extra)
    return row


@pytest.fixture()
def supabase() -> FakeSupabase:
    return FakeSupabase(
        tables={
            "line_settings": [
                {"id": "ls-1", "channel_access_token": "line-token", "message_templates": dict(TEMPLATES)}
            ],
            "purchase_orders": [
                {
                    "id": "po-1",
                    "po_number": "PO-100",
                    "supplier_id": "sup-1",
                    "expected_delivery_date": "2026-10-25",
                    "line_message_sent": False,
                    "items": [
                        {"quantity_ordered": 2, "product": {"name": "Implant A", "ref_code": "IA-1"}},
                        {"quantity_ordered": 5, "product": {"name": "Healing Cap", "ref_code": None}},
                    ],
                }
            ],
            "supplier_line_contacts": [
                contact("c-1", "U1", "primary"),
                contact("c-2", "U2", "secondary"),
                contact("c-3", "U3", "urgent"),
                contact("c-4", None, "secondary"),
                contact("c-5", "U5", "primary", is_active=False),
                contact("c-6", "U6", "primary", supplier_id="sup-2"),
            ],
            "users": [
                {"id": "user-admin", "role": {"name": "admin"}},
                {"id": "user-staff", "role": {"name": "staff"}},
            ],
        },
        tokens={
            "admin-token": {"id": "user-admin", "email": "admin@clinic.test"},
            "staff-token": {"id": "user-staff", "email": "staff@clinic.test"},
        },
        rpc_results={"run_daily_maintenance": {"expired_reservations": 3, "low_stock_alerts": 1}},
    )


@pytest.fixture()
def client(supabase: FakeSupabase) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_supabase_client] = lambda: supabase
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
