"""Router aggregation."""

from __future__ import annotations

from fastapi import APIRouter

from app.routers import health as health_router_module
from app.routers import line as line_router_module
from app.routers import maintenance as maintenance_router_module

# Create aggregated router
api_router = APIRouter(prefix="/api")

# Include routers
api_router.include_router(health_router_module.router)
api_router.include_router(maintenance_router_module.router)
api_router.include_router(line_router_module.router)

__all__ = ["api_router"]
