from __future__ import annotations

from typing import Any, Dict

from app.types import PushGateway
from app.adapters.line import LineClient


class AdapterRegistry:
    """Registry for push gateways by name.

    Enables plugging in alternative providers later without changing the
    dispatcher or the router.
    """

    _registry: Dict[str, type[PushGateway]] = {
        "line": LineClient,
    }

    @classmethod
    def get(cls, name: str, **options: Any) -> PushGateway:
        provider_cls = cls._registry.get(name)
        if provider_cls is None:
            raise KeyError(f"Unknown push gateway: {name}")
        return provider_cls(**options)

    @classmethod
    def register(cls, name: str, adapter_cls: type[PushGateway]) -> None:
        cls._registry[name] = adapter_cls
