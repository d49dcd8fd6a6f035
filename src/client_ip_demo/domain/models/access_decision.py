"""Access decision domain models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class AccessReason(str, Enum):
    """Why a request to the protected resource was admitted (or not)."""

    IP_ALLOWLIST = "ip-allowlist"
    TESTING_OVERRIDE = "testing-override"
    COUNTRY_ALLOWLIST = "country-allowlist"
    DENIED = "denied"


class AccessDecision(BaseModel):
    """Outcome of evaluating the access policy for a single request."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: AccessReason

    @model_validator(mode="after")
    def check_reason_matches_outcome(self) -> "AccessDecision":
        """A decision is denied exactly when its reason is DENIED."""
        if self.allowed == (self.reason is AccessReason.DENIED):
            raise ValueError(f"reason {self.reason.value!r} contradicts allowed={self.allowed}")
        return self
