"""Domain models for client IP detection and access control."""

from client_ip_demo.domain.models.access_decision import AccessDecision, AccessReason
from client_ip_demo.domain.models.access_policy import ALLOW_IP_QUERY_PARAM, AccessPolicy
from client_ip_demo.domain.models.client_identity import (
    COUNTRY_UNKNOWN,
    IP_NOT_AVAILABLE,
    ClientIdentity,
)
from client_ip_demo.domain.models.lookup_result import (
    AccessDenial,
    IpLookupResult,
    ProtectedResult,
)
from client_ip_demo.domain.models.probe_result import (
    ERROR_FETCHING_IP,
    ERROR_TESTING_PROTECTED,
    ProbeResult,
)
from client_ip_demo.domain.models.timestamp import utc_timestamp

__all__ = [
    "ALLOW_IP_QUERY_PARAM",
    "COUNTRY_UNKNOWN",
    "ERROR_FETCHING_IP",
    "ERROR_TESTING_PROTECTED",
    "IP_NOT_AVAILABLE",
    "AccessDecision",
    "AccessDenial",
    "AccessPolicy",
    "AccessReason",
    "ClientIdentity",
    "IpLookupResult",
    "ProbeResult",
    "ProtectedResult",
    "utc_timestamp",
]
