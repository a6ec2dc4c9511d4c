"""Tests for settings loaded from the environment."""

from pathlib import Path

import pytest

from polycommerce.infrastructure.config import load_settings

_VARS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "POLYCOMMERCE_DATA_DIR",
    "POLYCOMMERCE_ORDER_NUMBER_MASK",
    "POLYCOMMERCE_HOST",
    "POLYCOMMERCE_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings()
        assert settings.environment == "development"
        assert settings.log_level == "DEBUG"
        assert settings.order_number_mask == "{ID}"
        assert settings.host == "127.0.0.1"
        assert settings.port == 8000
        assert settings.data_dir.name == "data"
        assert not settings.is_production

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POLYCOMMERCE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("POLYCOMMERCE_ORDER_NUMBER_MASK", " PC-{ID} ")
        monkeypatch.setenv("POLYCOMMERCE_PORT", "9001")
        settings = load_settings()
        assert settings.data_dir == Path(tmp_path)
        assert settings.order_number_mask == "PC-{ID}"
        assert settings.port == 9001

    @pytest.mark.parametrize(
        "environment, level, production",
        [("production", "INFO", True), ("Staging", "INFO", True), ("test", "WARNING", False)],
    )
    def test_environment_log_levels(self, monkeypatch, environment, level, production):
        monkeypatch.setenv("ENVIRONMENT", environment)
        settings = load_settings()
        assert settings.log_level == level
        assert settings.is_production is production

    def test_explicit_log_level_wins(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"

    def test_bad_port(self, monkeypatch):
        monkeypatch.setenv("POLYCOMMERCE_PORT", "eighty")
        with pytest.raises(ValueError, match="POLYCOMMERCE_PORT"):
            load_settings()
