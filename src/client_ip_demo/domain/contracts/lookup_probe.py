"""Protocol for probing the lookup endpoints from outside."""

from typing import Protocol

from client_ip_demo.domain.models.probe_result import ProbeResult


class LookupProbe(Protocol):
    """Calls the lookup endpoints the way the browser UI does."""

    async def fetch(self, endpoint: str, allow_ip: str | None = None) -> ProbeResult:
        """Call a single endpoint and return its result row."""
        ...

    async def test_protected_with_current_ip(self) -> list[ProbeResult]:
        """Look up the current IP, then call the protected endpoint with it as override."""
        ...
