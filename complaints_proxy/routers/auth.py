"""
Authentication proxy for the EEU Complaints Proxy.

POST /api/auth/login  - forward {email, password} to the GAS login action

Token issuance and session storage belong to GAS and the browser; this
route only validates that credentials were supplied and cleans up the
ways GAS reports failures.
"""

import logging

from fastapi import APIRouter, Depends, Request

from complaints_proxy.api.dependencies import (
    ProxyContext,
    get_context,
    query_params,
    read_json_body,
)
from complaints_proxy.api.relay import (
    error_response,
    invalid_response,
    json_passthrough,
    transport_error_response,
)
from complaints_proxy.core.constants import (
    ERR_AUTH_SERVER,
    ERR_AUTH_SERVER_DETAILS,
    ERR_INVALID_AUTH_RESPONSE,
    ERR_MISSING_CREDENTIALS,
    GAS_HTML_DOCTYPE,
    GAS_HTML_ERROR_MARKER,
)
from complaints_proxy.gas_client import (
    GasTransportError,
    InvalidUpstreamResponse,
    build_envelope,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def is_gas_error_page(text: str) -> bool:
    """True when GAS rendered its HTML script-error page instead of JSON."""
    return GAS_HTML_DOCTYPE in text and GAS_HTML_ERROR_MARKER in text


def _credential(body: dict, key: str) -> str:
    value = body.get(key)
    if value is None:
        return ""
    return str(value).strip()


@router.post("/login")
async def login(request: Request, ctx: ProxyContext = Depends(get_context)):
    """Authenticate against GAS. Missing credentials never reach upstream."""
    body = await read_json_body(request)
    email = _credential(body, "email")
    password = _credential(body, "password")
    if not email or not password:
        return error_response(400, ERR_MISSING_CREDENTIALS)

    logger.info("Proxying auth request to GAS...")
    envelope = build_envelope(
        "/auth/login",
        "login",
        method=request.method,
        data={"email": email, "password": password},
        query=query_params(request),
    )
    try:
        resp = await ctx.gas.send(envelope)
    except GasTransportError as exc:
        logger.error("Auth proxy error: %s", exc)
        return transport_error_response("Authentication proxy failed", exc)

    if is_gas_error_page(resp.text):
        logger.error("GAS returned HTML error page (HTTP %s)", resp.status_code)
        return error_response(500, ERR_AUTH_SERVER, ERR_AUTH_SERVER_DETAILS)

    try:
        data = resp.json()
    except InvalidUpstreamResponse as exc:
        return invalid_response(exc, error=ERR_INVALID_AUTH_RESPONSE)

    # The body carries the session token; only log the outcome.
    success = data.get("success") if isinstance(data, dict) else None
    logger.info("GAS auth response received (HTTP %s, success=%s)", resp.status_code, success)
    return json_passthrough(resp, data)
