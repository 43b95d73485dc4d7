from __future__ import annotations

import threading
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.services.maintenance import MaintenanceInvoker
from tests.conftest import CRON_SECRET
from tests.fakes import FakeSupabase
from server.config import get_settings


def api_error(message: str = "relation \"reservations\" does not exist") -> APIError:
    return APIError({"message": message, "code": "42P01", "hint": None, "details": None})


# --- MaintenanceInvoker ---


def test_invoke_success_records_timing(supabase: FakeSupabase) -> None:
    result = MaintenanceInvoker(supabase).invoke()  # type: ignore[arg-type]

    assert result.succeeded is True
    assert result.payload == {"expired_reservations": 3, "low_stock_alerts": 1}
    assert result.error_message is None
    assert result.duration_ms >= 0
    assert result.started_at.tzinfo is not None
    assert result.finished_at >= result.started_at
    assert supabase.rpc_calls == [("run_daily_maintenance", {})]


def test_invoke_procedure_error_is_returned_not_raised(supabase: FakeSupabase) -> None:
    supabase.rpc_results["run_daily_maintenance"] = api_error()

    result = MaintenanceInvoker(supabase).invoke()  # type: ignore[arg-type]

    assert result.succeeded is False
    assert result.error_message == 'relation "reservations" does not exist'
    assert result.payload is None
    assert isinstance(result.started_at, datetime)


def test_invoke_transport_error_is_returned_not_raised(supabase: FakeSupabase) -> None:
    supabase.rpc_results["run_daily_maintenance"] = ConnectionError("connection reset by peer")

    result = MaintenanceInvoker(supabase).invoke()  # type: ignore[arg-type]

    assert result.succeeded is False
    assert result.error_message == "connection reset by peer"


def test_invoke_custom_procedure(supabase: FakeSupabase) -> None:
    supabase.rpc_results["nightly_cleanup"] = "ok"
    result = MaintenanceInvoker(supabase, "nightly_cleanup").invoke()  # type: ignore[arg-type]
    assert result.payload == "ok"
    assert supabase.rpc_calls[-1][0] == "nightly_cleanup"


# --- GET: scheduled trigger ---


def test_scheduled_trigger_runs_maintenance(client: TestClient, supabase: FakeSupabase) -> None:
    r = client.get("/api/cron/daily-maintenance", headers={"Authorization": f"Bearer {CRON_SECRET}"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"] == {"expired_reservations": 3, "low_stock_alerts": 1}
    assert datetime.fromisoformat(body["executed_at"])
    assert body["duration_ms"] >= 0
    assert len(supabase.rpc_calls) == 1


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer wrong"},
        {"Authorization": "Bearer"},
        {"Authorization": CRON_SECRET},
        {"Authorization": f"Basic {CRON_SECRET}"},
        {"Authorization": f"Bearer {CRON_SECRET}x"},
    ],
)
def test_scheduled_trigger_rejects_bad_credentials(
    client: TestClient, supabase: FakeSupabase, headers: dict
) -> None:
    r = client.get("/api/cron/daily-maintenance", headers=headers)

    assert r.status_code == 401
    assert r.json()["error"] == "Unauthorized"
    assert supabase.rpc_calls == []


def test_scheduled_trigger_rejects_when_secret_unset(
    client: TestClient, supabase: FakeSupabase, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("CRON_SECRET")
    get_settings.cache_clear()

    r = client.get("/api/cron/daily-maintenance", headers={"Authorization": "Bearer "})

    assert r.status_code == 401
    assert supabase.rpc_calls == []


def test_scheduled_trigger_reports_procedure_failure(client: TestClient, supabase: FakeSupabase) -> None:
    supabase.rpc_results["run_daily_maintenance"] = api_error("maintenance lock held")

    r = client.get("/api/cron/daily-maintenance", headers={"Authorization": f"Bearer {CRON_SECRET}"})

    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "maintenance lock held"
    assert "executed_at" in body
    assert "duration_ms" in body


# --- POST: manual trigger ---


def test_manual_trigger_by_admin(client: TestClient, supabase: FakeSupabase) -> None:
    r = client.post("/api/cron/daily-maintenance", headers={"Authorization": "Bearer admin-token"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["triggered_by"] == "admin@clinic.test"
    assert body["data"]["low_stock_alerts"] == 1
    assert datetime.fromisoformat(body["executed_at"])


def test_manual_trigger_non_admin_is_forbidden(client: TestClient, supabase: FakeSupabase) -> None:
    r = client.post("/api/cron/daily-maintenance", headers={"Authorization": "Bearer staff-token"})

    assert r.status_code == 403
    assert r.json() == {"success": False, "error": "Admin access required"}
    assert supabase.rpc_calls == []


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer forged"}, {"Authorization": "admin-token"}])
def test_manual_trigger_bad_token_is_unauthorized(
    client: TestClient, supabase: FakeSupabase, headers: dict
) -> None:
    r = client.post("/api/cron/daily-maintenance", headers=headers)

    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Unauthorized"}
    assert supabase.rpc_calls == []


def test_manual_trigger_does_not_accept_cron_secret(client: TestClient, supabase: FakeSupabase) -> None:
    r = client.post("/api/cron/daily-maintenance", headers={"Authorization": f"Bearer {CRON_SECRET}"})
    assert r.status_code == 401


def test_manual_trigger_reports_procedure_failure(client: TestClient, supabase: FakeSupabase) -> None:
    supabase.rpc_results["run_daily_maintenance"] = TimeoutError("statement timeout")

    r = client.post("/api/cron/daily-maintenance", headers={"Authorization": "Bearer admin-token"})

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "statement timeout"}


def test_slow_maintenance_does_not_block_other_requests(client: TestClient, supabase: FakeSupabase) -> None:
    started = threading.Event()
    release = threading.Event()
    finished = threading.Event()

    def slow_procedure() -> dict:
        started.set()
        release.wait(timeout=5)
        finished.set()
        return {"expired_reservations": 0}

    supabase.rpc_results["run_daily_maintenance"] = slow_procedure
    responses = {}

    with client:
        trigger = threading.Thread(
            target=lambda: responses.update(
                maintenance=client.get(
                    "/api/cron/daily-maintenance", headers={"Authorization": f"Bearer {CRON_SECRET}"}
                )
            )
        )
        trigger.start()
        try:
            assert started.wait(timeout=5)
            health = client.get("/api/health")
            assert health.status_code == 200
            assert not finished.is_set()
        finally:
            release.set()
            trigger.join(timeout=5)

    assert responses["maintenance"].status_code == 200
    assert responses["maintenance"].json()["data"] == {"expired_reservations": 0}
