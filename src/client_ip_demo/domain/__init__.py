"""Domain layer - client identity, access policy and result models."""

from client_ip_demo.domain.models import (
    AccessDecision,
    AccessPolicy,
    AccessReason,
    ClientIdentity,
)

__all__ = [
    "AccessDecision",
    "AccessPolicy",
    "AccessReason",
    "ClientIdentity",
]
