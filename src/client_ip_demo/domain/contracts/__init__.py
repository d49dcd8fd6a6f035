"""Protocols implemented by the application and adapter layers."""

from client_ip_demo.domain.contracts.access_evaluator import AccessEvaluator
from client_ip_demo.domain.contracts.lookup_probe import LookupProbe

__all__ = ["AccessEvaluator", "LookupProbe"]
