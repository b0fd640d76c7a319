"""
EEU Complaints Proxy - Centralised router registration.

This module is the single place where every APIRouter is mounted onto the
FastAPI application. ``create_app`` calls ``register_routes(app)`` once.

Endpoints defined here (beyond the resource routers):

  GET  /health      - liveness probe
  GET  /api/health  - liveness plus upstream/fallback counters
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, FastAPI

from complaints_proxy.api.dependencies import ProxyContext, get_context
from complaints_proxy.api.schemas import HealthResponse, LivenessResponse
from complaints_proxy.core.constants import GAS_URL_PREVIEW_CHARS
from complaints_proxy.core.utils import utc_now_iso
from complaints_proxy.metrics import metrics_snapshot
from complaints_proxy.routers import activities, attachments, auth, complaints, diagnostics, users

logger = logging.getLogger(__name__)

# Module-level start time for uptime reporting
_START_TIME: float = time.time()


health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=LivenessResponse)
async def liveness(ctx: ProxyContext = Depends(get_context)) -> LivenessResponse:
    return LivenessResponse(
        timestamp=utc_now_iso(),
        gas_url=ctx.settings.gas_url[:GAS_URL_PREVIEW_CHARS] + "...",
    )


@health_router.get("/api/health", response_model=HealthResponse)
async def health_check(ctx: ProxyContext = Depends(get_context)) -> HealthResponse:
    """Never calls GAS: reports the proxy's own state only."""
    return HealthResponse(
        timestamp=utc_now_iso(),
        uptime_seconds=round(time.time() - _START_TIME, 1),
        fallback_enabled=ctx.settings.fallback_enabled,
        metrics=metrics_snapshot(),
    )


def register_routes(app: FastAPI) -> None:
    """Mount every router onto *app*."""
    app.include_router(health_router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(complaints.router)
    app.include_router(attachments.router)
    app.include_router(activities.router)
    app.include_router(diagnostics.router)
    logger.debug("Registered %d routes", len(app.routes))
