"""Tests for the request context relayed from the interceptor to handlers."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from client_ip_demo.adapters.web.request_context import (
    RequestContext,
    attach_request_context,
    get_request_context,
)
from client_ip_demo.domain.models import AccessReason, ClientIdentity


def test_to_headers_without_reason() -> None:
    """Given a context without access reason, when serializing, then only identity headers are set."""
    context = RequestContext(identity=ClientIdentity(ip="203.0.113.5", country="DE"))

    assert context.to_headers() == {"x-user-ip": "203.0.113.5", "x-user-country": "DE"}


def test_to_headers_with_reason() -> None:
    """Given a context with access reason, when serializing, then the reason header is included."""
    context = RequestContext(
        identity=ClientIdentity(ip="::1", country="US"),
        access_reason=AccessReason.IP_ALLOWLIST,
    )

    assert context.to_headers() == {
        "x-user-ip": "::1",
        "x-user-country": "US",
        "x-access-allowed-reason": "ip-allowlist",
    }


def test_access_reason_label_defaults_to_unknown() -> None:
    """Given no access reason, then the wire label is 'unknown'."""
    assert RequestContext(identity=ClientIdentity()).access_reason_label == "unknown"


def test_context_is_frozen() -> None:
    """Given a context, when trying to modify it, then raises AttributeError."""
    context = RequestContext(identity=ClientIdentity())

    with pytest.raises(AttributeError):
        context.access_reason = AccessReason.DENIED  # type: ignore[misc]


def test_attach_then_get_returns_same_context() -> None:
    """Given an attached context, when reading it back, then the same object is returned."""
    request = MagicMock()
    request.state = SimpleNamespace()
    context = RequestContext(identity=ClientIdentity(ip="198.51.100.1", country="CA"))

    attach_request_context(request, context)

    assert get_request_context(request) is context


def test_get_without_attached_context_returns_sentinels() -> None:
    """Given no attached context, when reading it, then sentinel identity is returned."""
    request = MagicMock()
    request.state = SimpleNamespace()

    context = get_request_context(request)

    assert context.identity.ip == "IP not available"
    assert context.identity.country == "Unknown"
    assert context.access_reason is None
