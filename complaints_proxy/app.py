"""
EEU Complaints Proxy - FastAPI Application
Main entry point for the proxy server.

Run with:
    uvicorn complaints_proxy.app:app --host 0.0.0.0 --port 3001
or:
    python -m complaints_proxy
"""

from __future__ import annotations

import json
import logging
import time
import traceback
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Receive, Scope, Send

from complaints_proxy.api.dependencies import ProxyContext
from complaints_proxy.api.routes import register_routes
from complaints_proxy.config import ProxySettings
from complaints_proxy.core.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    DOWNLOAD_PATH_SUFFIX,
    ERR_INTERNAL,
    ERR_ROUTE_NOT_FOUND,
    GAS_URL_PREVIEW_CHARS,
    GZIP_MINIMUM_SIZE,
)
from complaints_proxy.core.logging import configure_logging
from complaints_proxy.fallback import FallbackProvider
from complaints_proxy.gas_client import GasClient
from complaints_proxy.metrics import record_error

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request logging
# ---------------------------------------------------------------------------

async def request_logging_middleware(request: Request, call_next):
    """Log one structured line per request and tag it with an X-Request-ID.

    Unhandled route exceptions become the 500 body here, inside the CORS
    layer, and are counted like any other 5xx.
    """
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        response = await unhandled_exception_handler(request, exc)
    duration_ms = round((time.perf_counter() - started) * 1000.0, 1)

    if response.status_code >= 500:
        record_error()

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_log %s",
        json.dumps({
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": duration_ms,
        }),
    )
    return response


# ---------------------------------------------------------------------------
# Compression
# ---------------------------------------------------------------------------

class ProxyGZipMiddleware(GZipMiddleware):
    """GZip large responses except attachment downloads.

    Attachments are mostly images and PDFs that are already compressed;
    their bytes are passed through exactly as GAS returned them.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].endswith(DOWNLOAD_PATH_SUFFIX):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and known paths with the wrong method look the same to
    # the frontend: the proxy simply has no such route.
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": ERR_ROUTE_NOT_FOUND})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method, request.url.path, exc, traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={"error": ERR_INTERNAL, "details": str(exc)},
    )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Optional[ProxySettings] = None,
    gas_client: Optional[GasClient] = None,
    fallback: Optional[FallbackProvider] = None,
) -> FastAPI:
    """Build the proxy app around an explicit settings object.

    ``gas_client`` and ``fallback`` may be injected (tests pass a client
    backed by ``httpx.MockTransport``); otherwise they are built from
    ``settings``.
    """
    settings = settings or ProxySettings.from_env()
    configure_logging(settings.log_level)

    ctx = ProxyContext(
        settings=settings,
        gas=gas_client or GasClient(settings.gas_url, timeout=settings.gas_timeout_seconds),
        fallback=fallback or FallbackProvider(),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("GAS Proxy Server starting on port %s", settings.port)
        logger.info("Proxying requests to: %s...", settings.gas_url[:GAS_URL_PREVIEW_CHARS])
        yield
        await ctx.gas.aclose()
        logger.info("GAS client closed.")

    app = FastAPI(
        title="EEU Complaints Proxy",
        version="1.0.0",
        description="Proxy between the EEU complaints dashboard and its Google Apps Script backend",
        lifespan=lifespan,
    )
    app.state.proxy = ctx

    # Last added runs outermost: CORS wraps every response, including the
    # 500s built by the logging middleware.
    app.middleware("http")(request_logging_middleware)
    app.add_middleware(ProxyGZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    # allow_credentials with "*" makes Starlette mirror the request Origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=list(CORS_METHODS),
        allow_headers=list(CORS_HEADERS),
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    register_routes(app)
    return app


app = create_app()
