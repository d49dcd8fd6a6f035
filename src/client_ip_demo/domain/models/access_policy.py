"""Access policy domain model."""

from pydantic import BaseModel, ConfigDict

ALLOW_IP_QUERY_PARAM = "allowIp"


class AccessPolicy(BaseModel):
    """Allow-lists for the protected resource.

    Built once at process start and passed explicitly to whoever evaluates
    access. Entries are matched as exact, case-sensitive strings; order is
    preserved because it is echoed back in denial responses.
    """

    model_config = ConfigDict(frozen=True)

    allowed_ips: tuple[str, ...]
    allowed_countries: tuple[str, ...]
