"""Probe result domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ERROR_FETCHING_IP = "Error fetching IP"
ERROR_TESTING_PROTECTED = "Error testing protected route"


class ProbeResult(BaseModel):
    """One row produced by calling a lookup endpoint from the outside.

    Mirrors the union of all endpoint bodies; fields an endpoint does not
    return stay ``None``. ``status`` is ``None`` when no HTTP response was
    received at all.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ip: str
    method: str
    timestamp: str
    status: int | None = None
    country: str | None = None
    message: str | None = None
    access_reason: str | None = Field(default=None, alias="accessReason")
    allowed_ips: list[str] | None = Field(default=None, alias="allowedIps")
    allowed_countries: list[str] | None = Field(default=None, alias="allowedCountries")
    note: str | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        """True for synthetic rows created because the request itself failed."""
        return self.ip in (ERROR_FETCHING_IP, ERROR_TESTING_PROTECTED)

    @classmethod
    def from_body(
        cls, body: dict[str, Any], status: int | None, method: str, timestamp: str
    ) -> "ProbeResult":
        """Build a row from a decoded JSON body.

        Denial bodies carry neither ``method`` nor ``timestamp``; the given
        values fill them in.
        """
        return cls.model_validate({"method": method, "timestamp": timestamp, **body, "status": status})
