"""Utilities for extracting client identity from incoming requests.

Each lookup method reads exactly one source and falls back to a fixed
sentinel. Nothing here validates or normalizes the address: whatever the
platform or the connection reports is returned verbatim.
"""

from __future__ import annotations

import logging

from starlette.requests import Request

from client_ip_demo.domain.models import COUNTRY_UNKNOWN, IP_NOT_AVAILABLE, ClientIdentity

logger = logging.getLogger(__name__)

# Header the edge platform sets to the connecting client's address
PLATFORM_IP_HEADER = "x-real-ip"

# Geo headers set by the edge platform, checked in order
PLATFORM_COUNTRY_HEADERS = ("x-vercel-ip-country", "cf-ipcountry")


def platform_ip_address(request: Request) -> str:
    """Return the client IP as reported by the hosting platform's header.

    The value must be set by the platform in front of the server; a direct
    client can send any value it likes. Returns ``"IP not available"`` when the platform did not set it.
    """
    return request.headers.get(PLATFORM_IP_HEADER) or IP_NOT_AVAILABLE


def edge_ip_address(request: Request) -> str:
    """Return the client IP from the request object's own connection field.

    Returns ``"IP not available"`` when the server has no peer address.
    """
    if request.client and request.client.host:
        return request.client.host
    return IP_NOT_AVAILABLE


def platform_country(request: Request) -> str:
    """Return the caller's country code from the platform geo headers."""
    for header in PLATFORM_COUNTRY_HEADERS:
        country = request.headers.get(header)
        if country:
            return country
    return COUNTRY_UNKNOWN


def resolve_client_identity(request: Request) -> ClientIdentity:
    """Derive caller IP and country for the interceptor.

    The request field is preferred over the platform header; both missing
    yields the sentinel. The header is only trustworthy when the edge
    platform sets it and strips any client-supplied value, otherwise the
    caller chooses the IP the allow-list sees.
    """
    ip = edge_ip_address(request)
    if ip == IP_NOT_AVAILABLE:
        ip = platform_ip_address(request)
    return ClientIdentity(ip=ip, country=platform_country(request))


def extract_forwarded_ip(request: Request) -> str:
    """Extract client IP address from request, supporting X-Forwarded-For header.

    Handles X-Forwarded-For header which may contain multiple IPs (client, proxy1, proxy2).
    Returns the first (original client) IP in the chain. Used as the rate
    limiting key, never for access decisions.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"
