"""HTTP probe for the IP lookup endpoints.

Drives a running instance the same way the browser UI does, so the lookup
methods and the access gate can be exercised from a terminal or a script.
"""

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from client_ip_demo.domain.models import (
    ALLOW_IP_QUERY_PARAM,
    ERROR_FETCHING_IP,
    ERROR_TESTING_PROTECTED,
    ProbeResult,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

DIRECT_ENDPOINT = "direct-ip"
EDGE_ENDPOINT = "edge-ip"
MIDDLEWARE_ENDPOINT = "middleware-ip"
PROTECTED_ENDPOINT = "protected-by-middleware"
ENDPOINTS = (DIRECT_ENDPOINT, EDGE_ENDPOINT, MIDDLEWARE_ENDPOINT, PROTECTED_ENDPOINT)

CHECK_CURRENT_METHOD = "test-with-current-ip"
USED_FOR_PROTECTED_MESSAGE = "This IP was used to test the protected route"


class ProbeError(Exception):
    """A lookup endpoint could not be called or returned an unusable body."""


class IpLookupProbe:
    """Client for the lookup endpoints of a running instance.

    Failures never propagate: they become synthetic result rows, the same
    way the browser UI shows them.
    """

    def __init__(self, session: aiohttp.ClientSession, base_url: str) -> None:
        """Initialize the probe.

        Args:
            session: aiohttp session to issue requests with.
            base_url: Root URL of the instance, e.g. ``http://localhost:8000``.
        """
        self._session = session
        self.base_url = base_url.rstrip("/")

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/api/{endpoint}"

    async def _get_json(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> tuple[dict[str, Any], int]:
        """GET an endpoint and return its decoded body and status."""
        try:
            async with self._session.get(self._url(endpoint), params=params) as response:
                # 403 denials carry a JSON body too, so status alone is not an error
                body = await response.json(content_type=None)
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ProbeError(f"{endpoint}: {type(e).__name__}: {e}") from e

        if not isinstance(body, dict):
            raise ProbeError(f"{endpoint}: expected a JSON object, got {type(body).__name__}")
        return body, status

    async def fetch(self, endpoint: str, allow_ip: str | None = None) -> ProbeResult:
        """Call a single endpoint.

        Args:
            endpoint: One of :data:`ENDPOINTS`.
            allow_ip: Testing override sent to the protected endpoint; ignored
                for the others.

        Returns:
            The endpoint's result, or an error row when the call failed.
        """
        if endpoint not in ENDPOINTS:
            raise ValueError(f"Unknown endpoint: {endpoint!r}")

        params = None
        if endpoint == PROTECTED_ENDPOINT and allow_ip:
            params = {ALLOW_IP_QUERY_PARAM: allow_ip}

        try:
            body, status = await self._get_json(endpoint, params)
            return ProbeResult.from_body(body, status, method=endpoint, timestamp=utc_timestamp())
        except (ProbeError, ValidationError) as e:
            logger.warning(f"Error fetching from {endpoint}: {e}")
            return ProbeResult(
                ip=ERROR_FETCHING_IP,
                method=endpoint,
                timestamp=utc_timestamp(),
                message=f"Failed to test with custom IP: {allow_ip}" if allow_ip else None,
                error=str(e),
            )

    async def test_protected_with_current_ip(self) -> list[ProbeResult]:
        """Look up the current IP directly, then call the protected endpoint with it as override.

        Returns:
            ``[protected, direct]`` (newest first), or a single error row.
        """
        try:
            ip_body, ip_status = await self._get_json(DIRECT_ENDPOINT)
            current_ip = str(ip_body.get("ip", ""))
            protected_body, protected_status = await self._get_json(
                PROTECTED_ENDPOINT, {ALLOW_IP_QUERY_PARAM: current_ip}
            )
            timestamp = utc_timestamp()
            direct = ProbeResult.from_body(
                {**ip_body, "message": USED_FOR_PROTECTED_MESSAGE},
                ip_status,
                method=DIRECT_ENDPOINT,
                timestamp=timestamp,
            )
            protected = ProbeResult.from_body(
                protected_body, protected_status, method=PROTECTED_ENDPOINT, timestamp=timestamp
            )
        except (ProbeError, ValidationError) as e:
            logger.warning(f"Error testing protected route with current IP: {e}")
            return [
                ProbeResult(
                    ip=ERROR_TESTING_PROTECTED,
                    method=CHECK_CURRENT_METHOD,
                    timestamp=utc_timestamp(),
                    error=str(e),
                )
            ]

        return [protected, direct]
