"""Application services."""

from client_ip_demo.application.services.access_control_service import AccessControlService

__all__ = ["AccessControlService"]
