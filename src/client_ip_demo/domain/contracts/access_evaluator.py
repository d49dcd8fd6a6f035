"""Protocol for access evaluation."""

from typing import Protocol

from client_ip_demo.domain.models.access_decision import AccessDecision
from client_ip_demo.domain.models.access_policy import AccessPolicy
from client_ip_demo.domain.models.client_identity import ClientIdentity
from client_ip_demo.domain.models.lookup_result import AccessDenial


class AccessEvaluator(Protocol):
    """Decides whether a caller may reach the protected resource."""

    @property
    def policy(self) -> AccessPolicy:
        """The allow-lists this evaluator enforces."""
        ...

    def evaluate(self, identity: ClientIdentity, override_ip: str | None = None) -> AccessDecision:
        """Evaluate access for a caller.

        Args:
            identity: Caller IP and country.
            override_ip: Value of the testing override query parameter, if any.
        """
        ...

    def build_denial(self, identity: ClientIdentity) -> AccessDenial:
        """Build the response body for a rejected caller."""
        ...
