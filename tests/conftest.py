"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • gas             - a scriptable stand-in for the GAS web app
  • fixed_fallback  - sample data pinned to FIXED_NOW
  • make_app(...)   - build the proxy app wired to ``gas``
  • client_for(app) - an httpx.AsyncClient talking to the app in-process
"""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

# Ensure the project root is on the path so all complaints_proxy imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from complaints_proxy.app import create_app  # noqa: E402
from complaints_proxy.config import ProxySettings  # noqa: E402
from complaints_proxy.fallback import FallbackProvider  # noqa: E402
from complaints_proxy.gas_client import GasClient  # noqa: E402
from complaints_proxy.metrics import reset_metrics_for_tests  # noqa: E402

GAS_TEST_URL = "https://script.google.com/macros/s/test-deployment/exec"
FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# GAS stand-in
# ---------------------------------------------------------------------------

class GasStub:
    """Callable for ``httpx.MockTransport`` that records every request."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._handler: Callable[[httpx.Request], httpx.Response] = (
            lambda _req: httpx.Response(200, json={"success": True, "data": []})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def respond(
        self,
        status_code: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        def _handler(_req: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status_code, json=json_body, headers=headers)
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, content=content or b"", headers=headers)
        self._handler = _handler

    def fail(self, message: str = "connection refused") -> None:
        def _handler(req: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(message, request=req)
        self._handler = _handler

    def use(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler

    @property
    def envelopes(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]

    @property
    def last_envelope(self) -> dict:
        return self.envelopes[-1]


@pytest.fixture
def gas() -> GasStub:
    return GasStub()


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_metrics_for_tests()
    yield
    reset_metrics_for_tests()


@pytest.fixture
def fixed_fallback() -> FallbackProvider:
    return FallbackProvider(now=FIXED_NOW)


@pytest.fixture
def make_app(gas):
    def _factory(**overrides):
        settings = ProxySettings(gas_url=GAS_TEST_URL, **overrides)
        client = GasClient(
            settings.gas_url,
            timeout=settings.gas_timeout_seconds,
            transport=httpx.MockTransport(gas),
        )
        return create_app(settings, gas_client=client, fallback=FallbackProvider(now=FIXED_NOW))
    return _factory


@pytest.fixture
def client_for():
    def _factory(app) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        )
    return _factory
