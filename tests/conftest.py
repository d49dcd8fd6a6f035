"""Shared fixtures for HTTP-level tests."""

from collections.abc import Callable
from typing import Any

import pytest
from starlette.applications import Starlette
from starlette.testclient import TestClient
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from client_ip_demo.adapters.config import AppConfig
from client_ip_demo.adapters.web import create_app
from client_ip_demo.application.services import AccessControlService

ClientFactory = Callable[..., TestClient]


def with_client_address(app: Any, host: str | None) -> Any:
    """Wrap an ASGI app so every HTTP request appears to come from ``host``."""

    async def asgi(scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] == "http":
            scope = dict(scope, client=(host, 50000) if host is not None else None)
        await app(scope, receive, send)

    return asgi


def build_app(**config_overrides: Any) -> Starlette:
    """Build the app with rate limiting off unless overridden."""
    config_overrides.setdefault("rate_limit_per_minute", 0)
    config = AppConfig.for_testing(**config_overrides)
    return create_app(config, AccessControlService(config.to_access_policy()))


@pytest.fixture(autouse=True)
def clean_allow_list_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ALLOWED_IPS", raising=False)
    monkeypatch.delenv("ALLOWED_COUNTRIES", raising=False)
    monkeypatch.delenv("RATE_LIMIT_PER_MINUTE", raising=False)
    monkeypatch.delenv("PROXY_HEADERS", raising=False)
    monkeypatch.delenv("FORWARDED_ALLOW_IPS", raising=False)


@pytest.fixture
def client_from() -> ClientFactory:
    """Factory for test clients whose requests originate from a given address."""

    def factory(host: str | None = "198.51.100.1", **config_overrides: Any) -> TestClient:
        app = build_app(**config_overrides)
        return TestClient(with_client_address(app, host))

    return factory


@pytest.fixture
def proxied_client_from() -> ClientFactory:
    """Factory for test clients behind uvicorn's proxy-header handling, built from default config."""

    def factory(host: str = "198.51.100.1", **config_overrides: Any) -> TestClient:
        config = AppConfig.for_testing(**config_overrides)
        app = create_app(config, AccessControlService(config.to_access_policy()))
        proxied = ProxyHeadersMiddleware(app, trusted_hosts=config.forwarded_allow_ips)
        return TestClient(with_client_address(proxied, host))

    return factory
