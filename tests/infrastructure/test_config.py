"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from storefront.infrastructure.config import Settings

ENV_NAMES = [
    "DATABASE_URL", "DATA_DIR", "SMTP_HOST", "MAIL_HOST", "SMTP_PORT", "MAIL_PORT",
    "SMTP_SECURE", "SMTP_USER", "MAIL_USER", "SMTP_PASS", "MAIL_PASS", "MAIL_FROM",
    "ORDER_NOTIFY_TO", "MAIL_TO", "ADMIN_TOKEN", "ADMIN_PASSWORD", "PORT",
    "DB_CONNECT_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.database_url == ""
        assert settings.data_dir == Path("data")
        assert settings.port == 3000
        assert settings.api_prefix == "/api"
        assert settings.order_notify_to == "orders@yourcompany.com"
        assert settings.mail_configured is False

    def test_smtp_variables(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
        monkeypatch.setenv("SMTP_USER", "bot@example.com")
        monkeypatch.setenv("SMTP_PASS", "secret")
        settings = Settings(_env_file=None)
        assert settings.mail_configured is True
        assert settings.smtp_port == 587
        assert settings.smtp_use_ssl is False
        assert settings.sender == "bot@example.com"

    def test_mail_aliases(self, monkeypatch):
        monkeypatch.setenv("MAIL_HOST", "mail.example.com")
        monkeypatch.setenv("MAIL_PORT", "465")
        monkeypatch.setenv("MAIL_USER", "u")
        monkeypatch.setenv("MAIL_PASS", "p")
        monkeypatch.setenv("MAIL_TO", "ops@example.com")
        settings = Settings(_env_file=None)
        assert settings.smtp_host == "mail.example.com"
        assert settings.smtp_use_ssl is True
        assert settings.order_notify_to == "ops@example.com"

    def test_mail_from_overrides_sender(self, monkeypatch):
        monkeypatch.setenv("SMTP_USER", "u@example.com")
        monkeypatch.setenv("MAIL_FROM", "Storefront <shop@example.com>")
        assert Settings(_env_file=None).sender == "Storefront <shop@example.com>"

    def test_secure_flag(self, monkeypatch):
        monkeypatch.setenv("SMTP_SECURE", "true")
        assert Settings(_env_file=None).smtp_use_ssl is True

    def test_admin_password_alias(self, monkeypatch):
        monkeypatch.setenv("ADMIN_PASSWORD", "hunter2")
        assert Settings(_env_file=None).admin_token == "hunter2"

    def test_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    @pytest.mark.parametrize("name", ["SMTP_SECURE", "SMTP_PORT", "DB_CONNECT_TIMEOUT", "PORT"])
    def test_empty_value_uses_default(self, monkeypatch, name):
        monkeypatch.setenv(name, "")
        settings = Settings(_env_file=None)
        assert settings.smtp_secure is False
        assert settings.smtp_port == 587
        assert settings.db_connect_timeout == 15.0
        assert settings.port == 3000
