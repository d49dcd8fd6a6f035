"""Server implementations."""

from client_ip_demo.adapters.web.servers.static_file_server import StaticFileServer

__all__ = ["StaticFileServer"]
