"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters or application
- Application services don't depend on adapters
- Adapters can depend on domain
- The probe CLI does not pull in the web server
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import any other modules except standard library and domain itself."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("client_ip_demo.domain.models*")
        .should_not_import("client_ip_demo.adapters*")
        .should_not_import("client_ip_demo.application*")
        .should_not_import("client_ip_demo.domain.contracts*")
        .may_import("client_ip_demo.domain.models*")
        .check("client_ip_demo")
    )


def test_domain_contracts_have_no_dependencies() -> None:
    """Domain contracts (protocols) should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match("client_ip_demo.domain.contracts*")
        .should_not_import("client_ip_demo.adapters*")
        .should_not_import("client_ip_demo.application*")
        .may_import("client_ip_demo.domain.contracts*")
        .may_import("client_ip_demo.domain.models*")
        .check("client_ip_demo")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("client_ip_demo.application*")
        .should_not_import("client_ip_demo.adapters*")
        .may_import("client_ip_demo.domain*")
        .may_import("client_ip_demo.application*")
        .check("client_ip_demo")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters receive services through protocols and should not import the application layer."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("client_ip_demo.adapters*")
        .should_not_import("client_ip_demo.application*")
        .may_import("client_ip_demo.domain*")
        .may_import("client_ip_demo.adapters*")
        .check("client_ip_demo", only_direct_imports=True)
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not have circular dependencies."""
    (
        archrule("domain no cycles", comment="Domain layer should not have circular dependencies")
        .match("client_ip_demo.domain*")
        .should_not_import("client_ip_demo.adapters*")
        .should_not_import("client_ip_demo.application*")
        .may_import("client_ip_demo.domain*")
        .check("client_ip_demo", only_direct_imports=True)
    )


def test_cli_dont_import_web_adapters() -> None:
    """CLI should not import web adapters to allow probing without the server stack."""
    (
        archrule("CLI independence", comment="CLI should not depend on web adapters")
        .match("client_ip_demo.cli")
        .should_not_import("client_ip_demo.adapters.web*")
        .should_not_import("client_ip_demo.application*")
        .may_import("client_ip_demo.domain*")
        .may_import("client_ip_demo.adapters.probe*")
        .check("client_ip_demo")
    )
