"""Interceptor that derives client identity and gates the protected route."""

import logging
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from client_ip_demo.domain.contracts import AccessEvaluator
from client_ip_demo.domain.models import ALLOW_IP_QUERY_PARAM, ClientIdentity

from .client_info import resolve_client_identity
from .request_context import RequestContext, attach_request_context

logger = logging.getLogger(__name__)

MIDDLEWARE_IP_PATH = "/api/middleware-ip"
PROTECTED_PATH_PREFIX = "/api/protected-by-middleware"


def is_protected_path(path: str) -> bool:
    """Return True for the protected route and every sub-path under it."""
    return path == PROTECTED_PATH_PREFIX or path.startswith(PROTECTED_PATH_PREFIX + "/")


def is_intercepted_path(path: str) -> bool:
    """Return True for paths the interceptor runs on."""
    return path == MIDDLEWARE_IP_PATH or is_protected_path(path)


class ClientIdentityMiddleware(BaseHTTPMiddleware):
    """Attach caller identity to in-scope requests and enforce the allow-lists.

    Paths outside the scope pass through untouched. In-scope requests get a
    :class:`RequestContext` on ``request.state`` and relay headers on the
    response. Protected requests that fail the access check are answered
    with a 403 without reaching the handler.
    """

    def __init__(self, app: Callable, access_evaluator: AccessEvaluator) -> None:
        """Initialize the interceptor.

        Args:
            app: The ASGI application to wrap.
            access_evaluator: Decides access for the protected route.
        """
        super().__init__(app)
        self.access_evaluator = access_evaluator

    def _create_denied_response(self, identity: ClientIdentity) -> Response:
        """Create the structured 403 response."""
        denial = self.access_evaluator.build_denial(identity)
        return JSONResponse(denial.model_dump(by_alias=True), status_code=403)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request, attaching identity and checking access where in scope."""
        path = request.url.path
        if not is_intercepted_path(path):
            return await call_next(request)

        identity = resolve_client_identity(request)
        logger.info(f"Middleware IP detection: {identity.ip} Country: {identity.country}")

        context = RequestContext(identity=identity)
        if is_protected_path(path):
            override_ip = request.query_params.get(ALLOW_IP_QUERY_PARAM)
            decision = self.access_evaluator.evaluate(identity, override_ip)
            if not decision.allowed:
                return self._create_denied_response(identity)
            context = RequestContext(identity=identity, access_reason=decision.reason)

        attach_request_context(request, context)
        response: Response = await call_next(request)
        response.headers.update(context.to_headers())
        return response
