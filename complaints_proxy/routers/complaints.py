"""
Complaint endpoints for the EEU Complaints Proxy.

GET    /api/complaints          - list (query string = filters); falls back
                                  to sample data when GAS is unavailable
POST   /api/complaints          - create
GET    /api/complaints/count    - total count
GET    /api/complaints/{id}     - read one
PUT    /api/complaints/{id}     - update (id merged into the payload)
DELETE /api/complaints/{id}     - delete
"""

import logging

from fastapi import APIRouter, Depends, Request

from complaints_proxy.api.dependencies import (
    ProxyContext,
    get_context,
    query_params,
    read_json_body,
)
from complaints_proxy.api.relay import relay, relay_with_fallback
from complaints_proxy.gas_client import build_envelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/complaints", tags=["complaints"])


@router.get("")
async def list_complaints(request: Request, ctx: ProxyContext = Depends(get_context)):
    logger.info("Fetching complaints from GAS...")
    filters = query_params(request)
    envelope = build_envelope(
        "/complaints", "get", method=request.method, data=filters, query=filters
    )
    return await relay_with_fallback(
        ctx,
        envelope,
        "Failed to fetch complaints",
        ctx.fallback.complaints,
        normalize="complaint",
    )


@router.post("")
async def create_complaint(request: Request, ctx: ProxyContext = Depends(get_context)):
    body = await read_json_body(request)
    logger.info("Creating complaint via GAS...")
    envelope = build_envelope(
        "/complaints", "create", method=request.method, data=body, query=query_params(request)
    )
    return await relay(ctx, envelope, "Failed to create complaint")


# Registered before /{complaint_id} so "count" is not taken as an id.
@router.get("/count")
async def count_complaints(request: Request, ctx: ProxyContext = Depends(get_context)):
    logger.info("Getting complaint count from GAS...")
    envelope = build_envelope(
        "/complaints/count", "count", method=request.method, query=query_params(request)
    )
    return await relay(ctx, envelope, "Failed to get complaint count")


@router.get("/{complaint_id}")
async def get_complaint(
    complaint_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    logger.info("Fetching complaint %s from GAS...", complaint_id)
    envelope = build_envelope(
        f"/complaints/{complaint_id}",
        "get",
        method=request.method,
        data={"id": complaint_id},
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to fetch complaint", normalize="complaint")


@router.put("/{complaint_id}")
async def update_complaint(
    complaint_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    body = await read_json_body(request)
    logger.info("Updating complaint %s via GAS...", complaint_id)
    envelope = build_envelope(
        f"/complaints/{complaint_id}",
        "update",
        method=request.method,
        data={**body, "id": complaint_id},
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to update complaint")


@router.delete("/{complaint_id}")
async def delete_complaint(
    complaint_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    logger.info("Deleting complaint %s via GAS...", complaint_id)
    envelope = build_envelope(
        f"/complaints/{complaint_id}",
        "delete",
        method=request.method,
        data={"id": complaint_id},
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to delete complaint")
