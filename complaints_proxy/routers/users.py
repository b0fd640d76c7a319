"""
User endpoints for the EEU Complaints Proxy.

GET  /api/users          - list users
POST /api/users/manage   - {action, data}: create / update / delete a user
POST /api/users/export   - user rows for the CSV export
"""

import logging

from fastapi import APIRouter, Depends, Request

from complaints_proxy.api.dependencies import (
    ProxyContext,
    get_context,
    query_params,
    read_json_body,
)
from complaints_proxy.api.relay import relay
from complaints_proxy.gas_client import build_envelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
async def list_users(request: Request, ctx: ProxyContext = Depends(get_context)):
    logger.info("Fetching users from GAS...")
    envelope = build_envelope("/users", "get", method=request.method, query=query_params(request))
    return await relay(ctx, envelope, "Failed to fetch users", normalize="user")


@router.post("/manage")
async def manage_user(request: Request, ctx: ProxyContext = Depends(get_context)):
    """Create goes to ``/users``; every other action to ``/users/manage``."""
    body = await read_json_body(request)
    action = str(body.get("action") or "")
    gas_path = "/users" if action == "create" else "/users/manage"

    logger.info("Managing user (%s) via GAS...", action)
    envelope = build_envelope(
        gas_path,
        action,
        method=request.method,
        data=body.get("data"),
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to manage user")


@router.post("/export")
async def export_users(request: Request, ctx: ProxyContext = Depends(get_context)):
    logger.info("Exporting users via GAS...")
    envelope = build_envelope("/users/export", "export", method=request.method, query=query_params(request))
    return await relay(ctx, envelope, "Failed to export users")
