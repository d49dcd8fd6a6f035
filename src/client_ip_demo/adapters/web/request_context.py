"""Typed request context passed from the interceptor to the handlers."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request

from client_ip_demo.domain.models import AccessReason, ClientIdentity

USER_IP_HEADER = "x-user-ip"
USER_COUNTRY_HEADER = "x-user-country"
ACCESS_REASON_HEADER = "x-access-allowed-reason"

UNKNOWN_ACCESS_REASON = "unknown"

_STATE_ATTR = "client_context"


@dataclass(frozen=True)
class RequestContext:
    """Identity and access reason derived once per request by the interceptor."""

    identity: ClientIdentity
    access_reason: AccessReason | None = None

    @property
    def access_reason_label(self) -> str:
        """Access reason as it appears on the wire."""
        return self.access_reason.value if self.access_reason else UNKNOWN_ACCESS_REASON

    def to_headers(self) -> dict[str, str]:
        """Serialize the context to the relay headers set on the response."""
        headers = {
            USER_IP_HEADER: self.identity.ip,
            USER_COUNTRY_HEADER: self.identity.country,
        }
        if self.access_reason is not None:
            headers[ACCESS_REASON_HEADER] = self.access_reason.value
        return headers


def attach_request_context(request: Request, context: RequestContext) -> None:
    """Store the context on the request so downstream handlers can read it."""
    setattr(request.state, _STATE_ATTR, context)


def get_request_context(request: Request) -> RequestContext:
    """Return the context attached by the interceptor.

    Requests outside the interceptor's path scope have none; an empty context
    with sentinel identity values is returned instead.
    """
    context = getattr(request.state, _STATE_ATTR, None)
    if isinstance(context, RequestContext):
        return context
    return RequestContext(identity=ClientIdentity())
