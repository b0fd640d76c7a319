"""
EEU Complaints Proxy - Upstream result -> HTTP response mapping.

Every proxied route ends in one of these helpers:

  relay()                 - parsed JSON is relayed with the upstream status;
                            transport errors and non-JSON bodies become 500s
  relay_with_fallback()   - same, except every failure (including non-2xx)
                            is answered with the static sample data
  error_response()        - the ``{"error", "details"}`` body used by both
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi.responses import JSONResponse

from complaints_proxy import metrics
from complaints_proxy.api.dependencies import ProxyContext
from complaints_proxy.core.constants import ERR_INVALID_GAS_RESPONSE
from complaints_proxy.domain.normalize import normalize_body
from complaints_proxy.fallback import FallbackProvider
from complaints_proxy.gas_client import (
    Envelope,
    GasResponse,
    GasTransportError,
    InvalidUpstreamResponse,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def transport_error_response(failure_message: str, exc: GasTransportError) -> JSONResponse:
    return error_response(500, failure_message, str(exc))


def invalid_response(exc: InvalidUpstreamResponse, error: str = ERR_INVALID_GAS_RESPONSE) -> JSONResponse:
    logger.error("Failed to parse GAS response: %s", exc.details)
    return error_response(500, error, exc.details)


def json_passthrough(resp: GasResponse, body: Any) -> JSONResponse:
    return JSONResponse(status_code=resp.status_code, content=body)


async def relay(
    ctx: ProxyContext,
    envelope: Envelope,
    failure_message: str,
    normalize: Optional[str] = None,
) -> JSONResponse:
    """Send ``envelope`` and relay the parsed body with the upstream status.

    ``normalize`` names a record kind (``complaint``, ``attachment``,
    ``user``); when record normalization is switched on, successful bodies
    of that kind are rewritten into canonical keys.
    """
    try:
        resp = await ctx.gas.send(envelope)
    except GasTransportError as exc:
        logger.error("%s: %s", failure_message, exc)
        return transport_error_response(failure_message, exc)

    try:
        body = resp.json()
    except InvalidUpstreamResponse as exc:
        return invalid_response(exc)

    if normalize and ctx.settings.normalize_records and resp.ok:
        body = normalize_body(body, normalize)
    return json_passthrough(resp, body)


def fallback_response(data: List[Dict[str, Any]], normalize: Optional[str] = None) -> JSONResponse:
    metrics.record_fallback()
    body = FallbackProvider.envelope(data)
    if normalize:
        body = normalize_body(body, normalize)
    return JSONResponse(status_code=200, content=body)


async def relay_with_fallback(
    ctx: ProxyContext,
    envelope: Envelope,
    failure_message: str,
    fallback_data: Callable[[], List[Dict[str, Any]]],
    normalize: Optional[str] = None,
) -> JSONResponse:
    """Like ``relay`` but degraded reads are answered with sample data.

    With fallback disabled in settings this is exactly ``relay``.
    """
    if not ctx.settings.fallback_enabled:
        return await relay(ctx, envelope, failure_message, normalize=normalize)
    if not ctx.settings.normalize_records:
        normalize = None

    try:
        resp = await ctx.gas.send(envelope)
    except GasTransportError as exc:
        logger.error("%s, serving fallback data: %s", failure_message, exc)
        return fallback_response(fallback_data(), normalize)

    try:
        body = resp.json()
    except InvalidUpstreamResponse as exc:
        logger.error("Failed to parse GAS response, serving fallback data: %s", exc.details)
        return fallback_response(fallback_data(), normalize)

    if not resp.ok:
        logger.error(
            "GAS %s answered HTTP %s, serving fallback data", envelope.path, resp.status_code
        )
        return fallback_response(fallback_data(), normalize)

    if normalize:
        body = normalize_body(body, normalize)
    return json_passthrough(resp, body)
