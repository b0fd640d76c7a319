"""
EEU Complaints Proxy - Google Apps Script client.

Every operation the spreadsheet backend supports goes through one GAS
web-app URL. The proxy wraps each call in an envelope::

    {"path": "/complaints/42", "action": "update", "method": "PUT",
     "data": {...}, "query": {...}}

and POSTs it as JSON. GAS answers with text that is *usually* JSON; parsing
is kept separate from transport so each route can decide what a parse
failure means for it.

Usage::

    client = GasClient(settings.gas_url, timeout=settings.gas_timeout_seconds)
    resp   = await client.send(build_envelope("/complaints", "get"))
    body   = resp.json()          # raises InvalidUpstreamResponse
    await client.aclose()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from complaints_proxy import metrics
from complaints_proxy.core.constants import UPSTREAM_EXCERPT_CHARS
from complaints_proxy.core.logging import excerpt

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class GasError(Exception):
    """Base class for failures talking to the GAS backend."""


class GasTransportError(GasError):
    """The request never produced an HTTP response (DNS, refused, timeout…)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidUpstreamResponse(GasError):
    """GAS answered, but the body is not JSON."""

    def __init__(self, raw_text: str, status_code: int) -> None:
        super().__init__(f"GAS returned non-JSON body (HTTP {status_code})")
        self.raw_text = raw_text
        self.status_code = status_code

    @property
    def details(self) -> str:
        return excerpt(self.raw_text, UPSTREAM_EXCERPT_CHARS)


# ---------------------------------------------------------------------------
# Envelope / response
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Envelope:
    path: str
    action: str
    method: str = "POST"
    data: Any = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "action": self.action,
            "method": self.method,
            "data": self.data,
            "query": self.query,
        }


def build_envelope(
    path: str,
    action: str,
    method: str = "POST",
    data: Any = None,
    query: Optional[Mapping[str, Any]] = None,
) -> Envelope:
    """Build an envelope, defaulting missing ``data``/``query`` to ``{}``."""
    return Envelope(
        path=path,
        action=action,
        method=method.upper(),
        data={} if data is None else data,
        query=dict(query or {}),
    )


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be written back out.
    raise ValueError(f"non-standard JSON constant {name}")


@dataclass
class GasResponse:
    status_code: int
    text: str
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body; raise ``InvalidUpstreamResponse`` if it is not JSON."""
        try:
            return json.loads(self.text, parse_constant=_reject_constant)
        except ValueError as exc:
            raise InvalidUpstreamResponse(self.text, self.status_code) from exc

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> "GasResponse":
        return cls(
            status_code=resp.status_code,
            text=resp.text,
            content=resp.content,
            headers={k.lower(): v for k, v in resp.headers.items()},
        )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GasClient:
    """Async client for the GAS web app.

    One instance per application lifespan; the underlying
    ``httpx.AsyncClient`` is created lazily and reused across requests.
    Calls are single attempts: nothing here retries.
    """

    def __init__(
        self,
        gas_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.gas_url = gas_url
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                # GAS web apps answer POSTs with a 302 to googleusercontent.com.
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def _request(self, method: str, **kwargs: Any) -> GasResponse:
        client = self._client_get()
        try:
            resp = await client.request(method, self.gas_url, **kwargs)
        except httpx.HTTPError as exc:
            metrics.record_upstream_call(ok=False)
            logger.error("GAS request failed: %s", exc)
            raise GasTransportError(str(exc) or type(exc).__name__, cause=exc) from exc

        result = GasResponse.from_httpx(resp)
        metrics.record_upstream_call(ok=result.ok)
        return result

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def send(self, envelope: Envelope) -> GasResponse:
        """POST ``envelope`` to GAS and return the raw response."""
        logger.debug(
            "-> GAS %s %s (%s)", envelope.method, envelope.path, envelope.action
        )
        resp = await self._request(
            "POST",
            json=envelope.to_payload(),
            headers={"Content-Type": "application/json"},
        )
        if not resp.ok:
            logger.warning(
                "GAS %s %s answered HTTP %s: %s",
                envelope.action, envelope.path, resp.status_code,
                excerpt(resp.text, UPSTREAM_EXCERPT_CHARS),
            )
        return resp

    async def probe(self, params: Optional[Mapping[str, Any]] = None) -> GasResponse:
        """Plain GET against the GAS URL, used by connectivity diagnostics."""
        return await self._request("GET", params=dict(params or {}))

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
