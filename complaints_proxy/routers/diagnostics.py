"""
Connectivity diagnostics used by the frontend's backend-status panel.

GET /api/test-connection  - POST a "test" envelope, report whatever GAS said
GET /api/simple-test      - plain GET ?test=true, relay the raw text
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from complaints_proxy.api.dependencies import ProxyContext, get_context, query_params
from complaints_proxy.api.schemas import ConnectionTestResponse, FailureResponse
from complaints_proxy.core.utils import utc_now_iso
from complaints_proxy.gas_client import (
    GasTransportError,
    InvalidUpstreamResponse,
    build_envelope,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["diagnostics"])


def _failure(exc: GasTransportError) -> JSONResponse:
    body = FailureResponse(error=str(exc), timestamp=utc_now_iso())
    return JSONResponse(status_code=500, content=body.model_dump())


@router.get("/test-connection")
async def test_connection(request: Request, ctx: ProxyContext = Depends(get_context)):
    """Succeeds whenever GAS answers at all; the body is reported, not judged."""
    envelope = build_envelope(
        "test-connection", "test", method=request.method, query=query_params(request)
    )
    try:
        resp = await ctx.gas.send(envelope)
    except GasTransportError as exc:
        return _failure(exc)

    try:
        gas_response = resp.json()
    except InvalidUpstreamResponse:
        gas_response = {"raw": resp.text}

    return ConnectionTestResponse(gas_response=gas_response, timestamp=utc_now_iso())


@router.get("/simple-test")
async def simple_test(ctx: ProxyContext = Depends(get_context)):
    logger.info("Making simple GET request to GAS with test=true")
    try:
        resp = await ctx.gas.probe({"test": "true"})
    except GasTransportError as exc:
        return _failure(exc)
    return PlainTextResponse(resp.text)
