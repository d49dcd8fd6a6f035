"""Route handlers for the four IP lookup methods."""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from client_ip_demo.domain.models import IpLookupResult, ProtectedResult, utc_timestamp

from .client_info import edge_ip_address, platform_ip_address
from .client_identity_middleware import MIDDLEWARE_IP_PATH, PROTECTED_PATH_PREFIX
from .request_context import get_request_context

logger = logging.getLogger(__name__)

DIRECT_METHOD = "Direct API call using platform IP helper"
EDGE_METHOD = "Edge API runtime"
MIDDLEWARE_METHOD = "API with middleware header"
PROTECTED_METHOD = "Protected API route with middleware IP check"


async def direct_ip(request: Request) -> Response:
    """Return the IP reported by the hosting platform's helper."""
    ip = platform_ip_address(request)
    logger.info(f"Direct API IP detection: {ip}")
    result = IpLookupResult(ip=ip, method=DIRECT_METHOD, timestamp=utc_timestamp())
    return JSONResponse(result.model_dump(exclude_none=True))


async def edge_ip(request: Request) -> Response:
    """Return the IP read straight from the request's connection field."""
    ip = edge_ip_address(request)
    logger.info(f"Edge API IP detection: {ip}")
    result = IpLookupResult(ip=ip, method=EDGE_METHOD, timestamp=utc_timestamp())
    return JSONResponse(result.model_dump(exclude_none=True))


async def middleware_ip(request: Request) -> Response:
    """Return the IP and country relayed by the interceptor."""
    identity = get_request_context(request).identity
    logger.info(f"API with middleware IP detection: {identity.ip} Country: {identity.country}")
    result = IpLookupResult(
        ip=identity.ip,
        country=identity.country,
        method=MIDDLEWARE_METHOD,
        timestamp=utc_timestamp(),
    )
    return JSONResponse(result.model_dump(exclude_none=True))


async def protected_by_middleware(request: Request) -> Response:
    """Return identity and the reason the interceptor let this request through."""
    context = get_request_context(request)
    identity = context.identity
    access_reason = context.access_reason_label
    logger.info(
        f"Protected API IP detection: {identity.ip} Country: {identity.country} "
        f"Access reason: {access_reason}"
    )
    result = ProtectedResult(
        ip=identity.ip,
        country=identity.country,
        method=PROTECTED_METHOD,
        timestamp=utc_timestamp(),
        message=(
            "This route is protected by middleware IP checks. "
            f"Access granted via: {access_reason}"
        ),
        access_reason=access_reason,
    )
    return JSONResponse(result.model_dump(by_alias=True))


async def healthz(_request: Request) -> Response:
    """Health check endpoint for load balancers and monitoring."""
    return PlainTextResponse("Ok")


def create_api_routes() -> list[Route]:
    """Build the API routes."""
    return [
        Route("/api/direct-ip", direct_ip, methods=["GET"]),
        Route("/api/edge-ip", edge_ip, methods=["GET"]),
        Route(MIDDLEWARE_IP_PATH, middleware_ip, methods=["GET"]),
        Route(PROTECTED_PATH_PREFIX, protected_by_middleware, methods=["GET"]),
        Route(PROTECTED_PATH_PREFIX + "/{subpath:path}", protected_by_middleware, methods=["GET"]),
        Route("/healthz", healthz, methods=["GET"]),
    ]
