"""Web adapters for serving the IP lookup endpoints."""

from client_ip_demo.adapters.web.app import WebServer, create_app

__all__ = ["WebServer", "create_app"]
