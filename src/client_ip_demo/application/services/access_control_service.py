"""Access control for the protected resource."""

import logging

from client_ip_demo.domain.models import (
    ALLOW_IP_QUERY_PARAM,
    AccessDecision,
    AccessDenial,
    AccessPolicy,
    AccessReason,
    ClientIdentity,
)

logger = logging.getLogger(__name__)


class AccessControlService:
    """Evaluates callers against an IP allow-list and a country allow-list.

    A caller is admitted when either its IP or its country is allow-listed.
    The IP check also passes when the caller supplies a testing override equal
    to its own detected IP; this is a convenience for trying the gate on a
    deployed instance, not a security control.
    """

    def __init__(self, policy: AccessPolicy) -> None:
        """Initialize the service.

        Args:
            policy: Immutable allow-lists to enforce.
        """
        if not isinstance(policy, AccessPolicy):
            raise TypeError("policy must be an AccessPolicy instance")
        self._policy = policy

    @property
    def policy(self) -> AccessPolicy:
        """The allow-lists this service enforces."""
        return self._policy

    def evaluate(self, identity: ClientIdentity, override_ip: str | None = None) -> AccessDecision:
        """Decide whether the caller may access the protected resource.

        Args:
            identity: Caller IP and country.
            override_ip: Value of the testing override parameter. Empty or
                ``None`` means no override was supplied.

        Returns:
            The decision with the reason it was reached. Admission reasons
            are ranked testing override, then IP allow-list, then country.
        """
        override_matches = bool(override_ip) and override_ip == identity.ip
        ip_allowed = identity.ip in self._policy.allowed_ips or override_matches
        country_allowed = identity.country in self._policy.allowed_countries

        if not ip_allowed and not country_allowed:
            logger.warning(f"Access denied for IP: {identity.ip}, Country: {identity.country}")
            return AccessDecision(allowed=False, reason=AccessReason.DENIED)

        if override_matches:
            reason = AccessReason.TESTING_OVERRIDE
        elif ip_allowed:
            reason = AccessReason.IP_ALLOWLIST
        else:
            reason = AccessReason.COUNTRY_ALLOWLIST
        return AccessDecision(allowed=True, reason=reason)

    def build_denial(self, identity: ClientIdentity) -> AccessDenial:
        """Build the 403 body for a rejected caller."""
        return AccessDenial(
            ip=identity.ip,
            country=identity.country,
            allowed_ips=list(self._policy.allowed_ips),
            allowed_countries=list(self._policy.allowed_countries),
            note=(
                f"For testing, add ?{ALLOW_IP_QUERY_PARAM}={identity.ip} "
                "to the URL to allow your current IP"
            ),
        )
