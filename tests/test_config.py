"""Tests for configuration adapter."""

import pytest

from client_ip_demo.adapters.config import AppConfig
from client_ip_demo.adapters.config.app_config import parse_csv_list


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "HOST",
        "PORT",
        "ALLOWED_IPS",
        "ALLOWED_COUNTRIES",
        "RATE_LIMIT_PER_MINUTE",
        "PROXY_HEADERS",
        "FORWARDED_ALLOW_IPS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig.for_testing()

    assert config.host == "0.0.0.0"
    assert config.port == 8000
    assert config.proxy_headers is False
    assert config.forwarded_allow_ips == "127.0.0.1"
    assert config.log_level == "info"
    assert config.rate_limit_per_minute == 0


def test_config_default_access_policy() -> None:
    """Given no allow-list configuration, when building the policy, then documented defaults apply."""
    policy = AppConfig.for_testing().to_access_policy()

    assert policy.allowed_ips == ("127.0.0.1", "::1", "IP not available")
    assert policy.allowed_countries == ("US", "CA", "AU")


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("ALLOWED_IPS", " 203.0.113.5 , 2001:db8::1 ")
    monkeypatch.setenv("ALLOWED_COUNTRIES", "DE,FR")
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "0")

    config = AppConfig.for_testing()
    policy = config.to_access_policy()

    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.rate_limit_per_minute == 0
    assert policy.allowed_ips == ("203.0.113.5", "2001:db8::1")
    assert policy.allowed_countries == ("DE", "FR")


def test_config_blank_allow_lists_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given blank allow-list variables, when loading config, then defaults are used."""
    monkeypatch.setenv("ALLOWED_IPS", "")
    monkeypatch.setenv("ALLOWED_COUNTRIES", "   ")

    policy = AppConfig.for_testing().to_access_policy()

    assert policy.allowed_ips == ("127.0.0.1", "::1", "IP not available")
    assert policy.allowed_countries == ("US", "CA", "AU")


def test_config_validates_rate_limit() -> None:
    """Given a negative rate limit, when loading config, then validation error is raised."""
    with pytest.raises(ValueError, match="rate_limit_per_minute must be zero or positive"):
        AppConfig.for_testing(rate_limit_per_minute=-1)


def test_config_validates_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown log level, when loading config, then validation error is raised."""
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValueError, match="log_level must be a logging level name"):
        AppConfig.for_testing()


def test_config_normalizes_log_level() -> None:
    """Given an upper-case log level, when loading config, then it is stored lower-case."""
    assert AppConfig.for_testing(log_level="WARNING").log_level == "warning"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("a,b,c", ("a", "b", "c")),
        (" a , b ", ("a", "b")),
        ("a,,b,", ("a", "b")),
        ("IP not available", ("IP not available",)),
        ("", ()),
    ],
)
def test_parse_csv_list(raw: str, expected: tuple[str, ...]) -> None:
    """Given comma-separated text, when parsing, then entries are trimmed and empties dropped."""
    assert parse_csv_list(raw) == expected
