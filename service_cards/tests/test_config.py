"""
Unit tests for environment-driven configuration.
"""

import pytest
from pydantic import ValidationError as SettingsError

from shared.config import get_config


class TestServiceConfig:
    """Test cases for ServiceConfig loading."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch, tmp_path):
        # Keep a developer's .env out of the picture
        monkeypatch.chdir(tmp_path)
        for name in (
            "CARDS_CACHE_TTL_SECONDS",
            "CARDS_UPSTREAM_TIMEOUT_SECONDS",
            "AIRTABLE_BASE_NAME",
            "AIRTABLE_TABLE_NAME_WEEKLY",
            "AIRTABLE_TOKEN",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = get_config("cards", 8020)

        assert config.cache_ttl_seconds == 300
        assert config.upstream_timeout_seconds == 10
        assert config.airtable_token is None

    def test_reads_environment_aliases(self, monkeypatch):
        monkeypatch.setenv("CARDS_CACHE_TTL_SECONDS", "42")
        monkeypatch.setenv("CARDS_UPSTREAM_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("AIRTABLE_BASE_NAME", "appENV")
        monkeypatch.setenv("AIRTABLE_TABLE_NAME_WEEKLY", "Episodes")
        monkeypatch.setenv("AIRTABLE_TOKEN", "env-token")

        config = get_config("cards", 8020)

        assert config.cache_ttl_seconds == 42
        assert config.upstream_timeout_seconds == 2.5
        assert config.airtable_base_name == "appENV"
        assert config.airtable_table_name_weekly == "Episodes"
        assert config.airtable_token == "env-token"

    @pytest.mark.parametrize("name", ["CARDS_CACHE_TTL_SECONDS", "CARDS_UPSTREAM_TIMEOUT_SECONDS"])
    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_rejects_non_positive_durations(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(SettingsError):
            get_config("cards", 8020)
