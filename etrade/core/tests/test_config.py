"""Unit tests for Settings and configuration enums."""

import pytest

from etrade.core.config import Settings
from etrade.core.config.enums import Environment


def test_settings_defaults(monkeypatch):
    for name in ("ETRADE_CONSUMER_KEY", "ETRADE_CONSUMER_SECRET", "ETRADE_USE_SANDBOX"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.CONSUMER_KEY is None
    assert s.USE_SANDBOX is True
    assert s.HTTP_TIMEOUT_SECONDS == 30.0


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("ETRADE_CONSUMER_KEY", "K")
    monkeypatch.setenv("ETRADE_CONSUMER_SECRET", "S")
    monkeypatch.setenv("ETRADE_USE_SANDBOX", "false")
    monkeypatch.setenv("ETRADE_HTTP_TIMEOUT_SECONDS", "5")

    s = Settings(_env_file=None)

    assert (s.CONSUMER_KEY, s.CONSUMER_SECRET) == ("K", "S")
    assert s.USE_SANDBOX is False
    assert s.HTTP_TIMEOUT_SECONDS == 5.0


@pytest.mark.parametrize(
    "use_sandbox,expected", [(True, Environment.SANDBOX), (False, Environment.PRODUCTION)]
)
def test_environment_from_sandbox_flag(use_sandbox, expected):
    assert Environment.from_sandbox_flag(use_sandbox) is expected
