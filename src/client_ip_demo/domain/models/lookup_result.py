"""Response payload models for the IP lookup endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class IpLookupResult(BaseModel):
    """Body returned by the direct, edge and middleware lookup endpoints."""

    model_config = ConfigDict(frozen=True)

    ip: str
    country: str | None = None
    method: str
    timestamp: str


class ProtectedResult(BaseModel):
    """Body returned by the protected endpoint once access has been granted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ip: str
    country: str
    method: str
    timestamp: str
    message: str
    access_reason: str = Field(alias="accessReason")


class AccessDenial(BaseModel):
    """Body of the 403 response for a rejected request.

    Field names and order are part of the public contract.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error: str = "Access denied"
    message: str = "Your IP or country is not allowed to access this resource"
    ip: str
    country: str
    allowed_ips: list[str] = Field(alias="allowedIps")
    allowed_countries: list[str] = Field(alias="allowedCountries")
    note: str
