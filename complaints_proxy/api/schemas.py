"""
EEU Complaints Proxy - Response schemas (Pydantic) for the proxy's own
endpoints.

Proxied routes relay whatever GAS returns and therefore have no schema;
only the bodies the proxy itself produces are modelled here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class LivenessResponse(BaseModel):
    """GET /health"""

    status: str = "ok"
    timestamp: str
    gas_url: str


class HealthResponse(BaseModel):
    """GET /api/health"""

    success: bool = True
    message: str = "GAS Proxy Server is running"
    timestamp: str
    uptime_seconds: float = 0.0
    fallback_enabled: bool = True
    metrics: Dict[str, int] = {}


class ConnectionTestResponse(BaseModel):
    """GET /api/test-connection"""

    success: bool = True
    message: str = "Proxy server connected to GAS"
    gas_response: Any = None
    timestamp: str


class FailureResponse(BaseModel):
    success: bool = False
    error: str
    timestamp: Optional[str] = None
