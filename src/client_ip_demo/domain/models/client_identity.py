"""Client identity domain model."""

from pydantic import BaseModel, ConfigDict

IP_NOT_AVAILABLE = "IP not available"
COUNTRY_UNKNOWN = "Unknown"


class ClientIdentity(BaseModel):
    """Caller IP and country as derived from the transport layer for one request."""

    model_config = ConfigDict(frozen=True)

    ip: str = IP_NOT_AVAILABLE
    country: str = COUNTRY_UNKNOWN
