"""
Dependency wiring for the FastAPI app.

``create_app`` builds one ``ProxyContext`` and stores it on
``app.state.proxy``; route handlers receive it through ``Depends``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from fastapi import HTTPException, Request

from complaints_proxy.config import ProxySettings
from complaints_proxy.fallback import FallbackProvider
from complaints_proxy.gas_client import GasClient


@dataclass
class ProxyContext:
    settings: ProxySettings
    gas: GasClient
    fallback: FallbackProvider


def get_context(request: Request) -> ProxyContext:
    return request.app.state.proxy


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Return the request's JSON object body, ``{}`` when it is empty.

    A body that is present but not valid JSON is a client error.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return body


def query_params(request: Request) -> Dict[str, Any]:
    """Query string as a dict; repeated keys become lists."""
    params: Dict[str, Any] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        params[key] = values[0] if len(values) == 1 else values
    return params
