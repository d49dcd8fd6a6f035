"""Configuration adapters."""

from client_ip_demo.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
