"""
Reverse proxy for the goal service.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import asyncio
import logging

import httpx
from fastapi import Request, Response

from .exceptions import UpstreamTimeout, UpstreamUnavailable

logger = logging.getLogger(__name__)

GATEWAY_PREFIX = "/goals"
UPSTREAM_PREFIX = "/resource"

# RFC 7230 section 6.1
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)

# httpx sets these from the forwarded body and the upstream base URL
EXCLUDED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}

# The relayed body is already decoded; the server recomputes its length
EXCLUDED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def rewrite_path(path: str, prefix: str = GATEWAY_PREFIX, target: str = UPSTREAM_PREFIX) -> str:
    """
    Swap the gateway prefix for the upstream mount point.

    ``/goals`` becomes ``/resource`` and ``/goals/abc`` becomes
    ``/resource/abc``. Paths outside the prefix are returned unchanged.
    """
    if path == prefix or path.startswith(prefix + "/"):
        return target + path[len(prefix):]
    return path


class UpstreamProxy:
    """
    Forwards requests to a single upstream service.

    The httpx client is created on first use and shared by all requests;
    call ``aclose`` on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the proxy.

        Args:
            base_url: Upstream base URL, e.g. ``http://localhost:3000``
            timeout: Transport timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self.timeout),
                    transport=self._transport,
                    follow_redirects=False,
                )
                logger.info(f"Upstream client created for {self.base_url}")
            return self._client

    async def aclose(self) -> None:
        """Close the underlying client."""
        async with self._lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    async def forward(self, request: Request) -> Response:
        """
        Forward ``request`` upstream and relay the answer unchanged.

        Raises:
            UpstreamTimeout: If the upstream did not answer in time
            UpstreamUnavailable: If the upstream could not be reached
        """
        client = await self._ensure_client()

        # Rewrite the raw (still percent-encoded) target so that %2F, %3F
        # and %23 reach the upstream unchanged
        raw_path = request.scope.get("raw_path") or request.url.path.encode("utf-8")
        raw_path = raw_path.split(b"?", 1)[0]
        upstream_path = rewrite_path(raw_path.decode("latin-1"))
        target = upstream_path.encode("latin-1")
        query_string = request.scope.get("query_string", b"")
        if query_string:
            target += b"?" + query_string
        url = client.base_url.copy_with(
            raw_path=client.base_url.raw_path.rstrip(b"/") + target
        )

        headers = [
            (name, value)
            for name, value in request.headers.items()
            if name.lower() not in EXCLUDED_REQUEST_HEADERS
        ]
        body = await request.body()

        upstream_request = client.build_request(
            request.method,
            url,
            headers=headers,
            content=body,
        )

        try:
            upstream_response = await client.send(upstream_request)
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(
                "Upstream service timed out",
                detail=f"{request.method} {upstream_request.url}: {e!r}",
            ) from e
        except httpx.TransportError as e:
            raise UpstreamUnavailable(
                "Upstream service unavailable",
                detail=f"{request.method} {upstream_request.url}: {e!r}",
            ) from e

        logger.debug(
            "Request forwarded",
            extra={
                "method": request.method,
                "path": request.url.path,
                "upstream_path": upstream_path,
                "upstream_status": upstream_response.status_code,
            },
        )

        response = Response(
            content=upstream_response.content,
            status_code=upstream_response.status_code,
        )
        for name, value in upstream_response.headers.multi_items():
            if name.lower() not in EXCLUDED_RESPONSE_HEADERS:
                response.headers.append(name, value)
        return response
