"""Probe adapter for calling a running instance's lookup endpoints."""

from client_ip_demo.adapters.probe.http_probe import ENDPOINTS, IpLookupProbe, ProbeError

__all__ = ["ENDPOINTS", "IpLookupProbe", "ProbeError"]
