"""
Attachment endpoints for the EEU Complaints Proxy.

GET    /api/complaints/{id}/attachments  - list a complaint's attachments
POST   /api/complaints/{id}/attachments  - upload (file content in the JSON body)
GET    /api/attachments/{id}/download    - file bytes, headers copied from GAS
DELETE /api/attachments/{id}             - delete

Storage lives entirely in GAS; the proxy never keeps file content.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from complaints_proxy.api.dependencies import (
    ProxyContext,
    get_context,
    query_params,
    read_json_body,
)
from complaints_proxy.api.relay import error_response, relay, transport_error_response
from complaints_proxy.core.constants import (
    DEFAULT_DOWNLOAD_CONTENT_TYPE,
    DEFAULT_DOWNLOAD_DISPOSITION,
    ERR_DOWNLOAD_FAILED,
)
from complaints_proxy.gas_client import GasTransportError, build_envelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["attachments"])


@router.get("/complaints/{complaint_id}/attachments")
async def list_attachments(
    complaint_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    logger.info("Fetching attachments for complaint %s from GAS...", complaint_id)
    envelope = build_envelope(
        f"/complaints/{complaint_id}/attachments",
        "get",
        method=request.method,
        data={"id": complaint_id, "Complaint ID": complaint_id},
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to fetch attachments", normalize="attachment")


@router.post("/complaints/{complaint_id}/attachments")
async def upload_attachment(
    complaint_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    body = await read_json_body(request)
    logger.info("Uploading attachment for complaint %s via GAS...", complaint_id)
    envelope = build_envelope(
        f"/complaints/{complaint_id}/attachments",
        "upload",
        method=request.method,
        data={**body, "complaintId": complaint_id},
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to upload attachment")


@router.get("/attachments/{attachment_id}/download")
async def download_attachment(
    attachment_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    """Forward the file bytes unchanged; upstream errors come back as JSON."""
    logger.info("Downloading attachment %s from GAS...", attachment_id)
    envelope = build_envelope(
        f"/attachments/{attachment_id}/download",
        "download",
        method=request.method,
        data={"id": attachment_id, "attachmentId": attachment_id},
        query=query_params(request),
    )
    try:
        resp = await ctx.gas.send(envelope)
    except GasTransportError as exc:
        logger.error("Attachment download error: %s", exc)
        return transport_error_response("Failed to download attachment", exc)

    if not resp.ok:
        return error_response(resp.status_code, ERR_DOWNLOAD_FAILED, resp.text)

    headers = {
        "content-type": resp.headers.get("content-type") or DEFAULT_DOWNLOAD_CONTENT_TYPE,
        "content-disposition": (
            resp.headers.get("content-disposition") or DEFAULT_DOWNLOAD_DISPOSITION
        ),
    }
    return Response(content=resp.content, status_code=resp.status_code, headers=headers)


@router.delete("/attachments/{attachment_id}")
async def delete_attachment(
    attachment_id: str, request: Request, ctx: ProxyContext = Depends(get_context)
):
    logger.info("Deleting attachment %s via GAS...", attachment_id)
    envelope = build_envelope(
        f"/attachments/{attachment_id}",
        "delete",
        method=request.method,
        data={"id": attachment_id, "attachmentId": attachment_id},
        query=query_params(request),
    )
    return await relay(ctx, envelope, "Failed to delete attachment")
