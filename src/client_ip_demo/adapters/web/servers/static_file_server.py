"""Static file server for the browser UI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from starlette.responses import FileResponse, Response
from starlette.routing import Route
from starlette.staticfiles import StaticFiles

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, MutableMapping

    from starlette.applications import Starlette
    from starlette.requests import Request

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=60, must-revalidate"

DEFAULT_STATIC_DIR = Path(__file__).parent.parent / "static"


class StaticFileCacheApp:
    """ASGI app wrapper that adds cache headers to static file responses."""

    def __init__(self, static_files: StaticFiles) -> None:
        """Initialize with a StaticFiles instance."""
        self.static_files = static_files

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[[], Awaitable[dict[str, Any]]],
        send: Callable[[MutableMapping[str, Any]], Awaitable[None]],
    ) -> None:
        """Handle ASGI request and add cache headers."""
        original_send = send

        async def send_with_cache_headers(
            message: MutableMapping[str, Any],
        ) -> None:
            """Add cache headers before sending response."""
            if message["type"] == "http.response.start":
                # Headers in ASGI are already a list of (bytes, bytes) tuples
                headers = list(message.get("headers", []))
                has_cache_control = any(header[0].lower() == b"cache-control" for header in headers)
                if not has_cache_control:
                    headers.append((b"cache-control", CACHE_CONTROL.encode("latin-1")))
                    message["headers"] = headers
            await original_send(message)

        await self.static_files(scope, receive, send_with_cache_headers)


class StaticFileServer:
    """Serves the browser UI page and its assets."""

    def __init__(self, static_dir: Path = DEFAULT_STATIC_DIR) -> None:
        """Initialize with the directory holding ``index.html`` and ``assets/``."""
        self.static_dir = static_dir

    def register_routes(self, app: Starlette) -> None:
        """Register the index route and mount the static directory.

        Args:
            app: The Starlette application instance.
        """
        app.routes.append(Route("/", self._serve_index, methods=["GET"]))

        if self.static_dir.exists():
            static_files = StaticFiles(directory=str(self.static_dir))
            app.mount("/static", StaticFileCacheApp(static_files), name="static")
            logger.info(f"Mounted static files from {self.static_dir} with 1-minute cache headers")
        else:
            logger.warning(f"Static directory not found at {self.static_dir}")

    async def _serve_index(self, _request: Request) -> Response:
        """Serve the UI page."""
        index_path = self.static_dir / "index.html"
        if not index_path.exists():
            logger.error(f"Could not find UI page at {index_path}")
            return Response(
                content="<!-- UI page not found -->",
                media_type="text/html",
                status_code=404,
            )
        response = FileResponse(str(index_path), media_type="text/html")
        response.headers["Cache-Control"] = CACHE_CONTROL
        return response
