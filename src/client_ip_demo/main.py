"""Main entry point for the client IP demo server."""

import asyncio
import logging
import sys

from pydantic import ValidationError

from client_ip_demo.adapters.config import AppConfig
from client_ip_demo.adapters.web import WebServer
from client_ip_demo.application.services import AccessControlService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level.upper())

    access_control = AccessControlService(config.to_access_policy())
    server = WebServer(config, access_control)

    try:
        await server.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await server.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
