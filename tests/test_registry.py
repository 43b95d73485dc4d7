import pytest

from app.adapters.line import LineClient
from app.adapters.registry import AdapterRegistry
from app.types import PushGateway, PushMessage, SendResult


class DummyGateway(PushGateway):
    def __init__(self, **options) -> None:  # type: ignore[no-untyped-def]
        self.options = options
        self.sent = []

    def push_endpoint(self) -> str:  # type: ignore[override]
        return "memory://dummy"

    async def push(self, to: str, message: PushMessage) -> SendResult:  # type: ignore[override]
        self.sent.append((to, message))
        return SendResult(ok=True)


def test_registry_get_and_register() -> None:
    # line is pre-registered
    adapter = AdapterRegistry.get("line", access_token="t", base_url="https://api.line.test")
    assert isinstance(adapter, LineClient)
    assert adapter.push_endpoint() == "https://api.line.test/v2/bot/message/push"

    # register custom
    AdapterRegistry.register("dummy", DummyGateway)  # type: ignore[arg-type]
    d = AdapterRegistry.get("dummy", access_token="x")
    assert isinstance(d, DummyGateway)
    assert d.options == {"access_token": "x"}


def test_registry_unknown() -> None:
    with pytest.raises(KeyError):
        AdapterRegistry.get("missing")
