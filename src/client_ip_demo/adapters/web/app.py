"""Starlette web adapter serving the IP lookup endpoints."""

from __future__ import annotations

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware

from client_ip_demo.adapters.config import AppConfig
from client_ip_demo.domain.contracts import AccessEvaluator
from client_ip_demo.domain.models import IP_NOT_AVAILABLE

from .client_identity_middleware import ClientIdentityMiddleware
from .handlers import create_api_routes
from .rate_limit_middleware import RateLimitMiddleware
from .servers import StaticFileServer

logger = logging.getLogger(__name__)


def create_app(config: AppConfig, access_evaluator: AccessEvaluator) -> Starlette:
    """Build the Starlette application.

    Args:
        config: Application configuration.
        access_evaluator: Decides access for the protected route.
    """
    # Rate limiting wraps the interceptor so rejected floods never reach the access check
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute),
        Middleware(ClientIdentityMiddleware, access_evaluator=access_evaluator),
    ]
    app = Starlette(routes=create_api_routes(), middleware=middleware)

    static_file_server = StaticFileServer()
    static_file_server.register_routes(app)

    return app


class WebServer:
    """Runs the application under uvicorn."""

    def __init__(self, config: AppConfig, access_evaluator: AccessEvaluator) -> None:
        """Initialize the web server.

        Args:
            config: Application configuration.
            access_evaluator: Decides access for the protected route.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        # Protocols can't be checked with isinstance, verify required methods exist
        if not callable(getattr(access_evaluator, "evaluate", None)) or not callable(
            getattr(access_evaluator, "build_denial", None)
        ):
            raise TypeError("access_evaluator must implement AccessEvaluator protocol")

        self.config = config
        self.access_evaluator = access_evaluator
        self._server: Any | None = None

    def _log_policy(self) -> None:
        """Log the effective allow-lists and flag the sentinel quirk."""
        policy = self.access_evaluator.policy
        logger.info(f"Allowed IPs: {list(policy.allowed_ips)}")
        logger.info(f"Allowed countries: {list(policy.allowed_countries)}")
        if IP_NOT_AVAILABLE in policy.allowed_ips:
            logger.warning(
                f"'{IP_NOT_AVAILABLE}' is allow-listed: callers whose IP cannot be detected "
                "will be admitted to the protected route"
            )

    async def start(self) -> None:
        """Start the web server."""
        import uvicorn

        app = create_app(self.config, self.access_evaluator)
        self._log_policy()

        uvicorn_config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level,
            proxy_headers=self.config.proxy_headers,
            forwarded_allow_ips=self.config.forwarded_allow_ips,
        )
        self._server = uvicorn.Server(uvicorn_config)
        logger.info(f"Serving on http://{self.config.host}:{self.config.port}")

        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
