"""
Recent-activity feed for the EEU Complaints Proxy.

GET /api/activities  - latest activity rows; falls back to sample data
                       when GAS is unavailable
"""

import logging

from fastapi import APIRouter, Depends, Request

from complaints_proxy.api.dependencies import ProxyContext, get_context, query_params
from complaints_proxy.api.relay import relay_with_fallback
from complaints_proxy.gas_client import build_envelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("")
async def list_activities(request: Request, ctx: ProxyContext = Depends(get_context)):
    logger.info("Fetching activities from GAS...")
    envelope = build_envelope("/activities", "get", method=request.method, query=query_params(request))
    return await relay_with_fallback(
        ctx, envelope, "Failed to fetch activities", ctx.fallback.activities
    )
