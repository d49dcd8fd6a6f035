"""CLI for probing a running instance's IP lookup endpoints."""

import argparse
import asyncio
import json
import sys
from typing import Any

import aiohttp

from client_ip_demo.adapters.probe import IpLookupProbe
from client_ip_demo.domain.contracts import LookupProbe
from client_ip_demo.domain.models import ProbeResult

DEFAULT_BASE_URL = "http://localhost:8000"

# Endpoint called by each single-endpoint command
COMMAND_ENDPOINTS = {
    "direct": "direct-ip",
    "edge": "edge-ip",
    "middleware": "middleware-ip",
    "protected": "protected-by-middleware",
}

_FIELD_LABELS = (
    ("country", "Country"),
    ("method", "Method"),
    ("timestamp", "Time"),
    ("message", "Message"),
    ("access_reason", "Access reason"),
    ("allowed_ips", "Allowed IPs"),
    ("allowed_countries", "Allowed countries"),
    ("note", "Note"),
    ("error", "Error"),
)


def format_result(result: ProbeResult) -> str:
    """Render a result row as indented human-readable lines."""
    status = f" [{result.status}]" if result.status is not None else ""
    lines = [f"  IP: {result.ip}{status}"]
    for field, label in _FIELD_LABELS:
        value: Any = getattr(result, field)
        if value is None or value == "":
            continue
        if isinstance(value, list):
            value = ", ".join(value)
        lines.append(f"    {label}: {value}")
    return "\n".join(lines)


def results_to_json(results: list[ProbeResult]) -> str:
    """Serialize result rows using the endpoints' field names."""
    return json.dumps(
        [result.model_dump(by_alias=True, exclude_none=True) for result in results],
        indent=2,
        ensure_ascii=False,
    )


async def run_command(probe: LookupProbe, command: str, allow_ip: str | None = None) -> list[ProbeResult]:
    """Execute a probe command and return its rows, newest first."""
    if command == "check":
        return await probe.test_protected_with_current_ip()
    if command not in COMMAND_ENDPOINTS:
        raise ValueError(f"Unknown command: {command!r}")
    return [await probe.fetch(COMMAND_ENDPOINTS[command], allow_ip=allow_ip)]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Client IP Demo probe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # IP seen by the platform helper
  client-ip-demo-probe direct

  # Country and IP relayed by the middleware
  client-ip-demo-probe --base-url https://demo.example.com middleware

  # Protected route with a testing override
  client-ip-demo-probe protected --allow-ip 203.0.113.5

  # Look up the current IP and use it to pass the protected route
  client-ip-demo-probe check --json
        """,
    )
    parser.add_argument(
        "--base-url", default=DEFAULT_BASE_URL, help=f"Instance root URL (default: {DEFAULT_BASE_URL})"
    )
    parser.add_argument(
        "--timeout", type=float, default=10.0, help="Total request timeout in seconds"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    for command, endpoint in COMMAND_ENDPOINTS.items():
        command_parser = subparsers.add_parser(command, help=f"Call /api/{endpoint}")
        command_parser.add_argument("--json", action="store_true", help="Output as JSON")
        if command == "protected":
            command_parser.add_argument(
                "--allow-ip", help="IP sent as the allowIp testing override"
            )

    check_parser = subparsers.add_parser(
        "check", help="Look up the current IP, then call the protected route with it"
    )
    check_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def main() -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        timeout = aiohttp.ClientTimeout(total=args.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            probe = IpLookupProbe(session, args.base_url)
            results = await run_command(probe, args.command, getattr(args, "allow_ip", None))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(results_to_json(results))
    else:
        print(f"\n{len(results)} result(s) from {args.base_url}:\n")
        for result in results:
            print(format_result(result))
            print()

    if any(result.is_error for result in results):
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
