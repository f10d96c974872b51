"""Application settings, read from the environment and an optional ``.env``.

Several variables accept an older alias (``MAIL_HOST`` for ``SMTP_HOST``
and so on) so existing deployment environments keep working.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Persistence (Postgres URLs name the driver: postgresql+psycopg2://...)
    database_url: str = Field(default="", validation_alias="DATABASE_URL")
    data_dir: Path = Field(default=Path("data"), validation_alias="DATA_DIR")
    db_connect_timeout: float = Field(default=15.0, validation_alias="DB_CONNECT_TIMEOUT")
    seed_catalog: bool = Field(default=True, validation_alias="SEED_CATALOG")

    # Mail
    smtp_host: str = Field(default="", validation_alias=AliasChoices("SMTP_HOST", "MAIL_HOST"))
    smtp_port: int = Field(default=587, validation_alias=AliasChoices("SMTP_PORT", "MAIL_PORT"))
    smtp_secure: bool = Field(default=False, validation_alias="SMTP_SECURE")
    smtp_user: str = Field(default="", validation_alias=AliasChoices("SMTP_USER", "MAIL_USER"))
    smtp_pass: str = Field(default="", validation_alias=AliasChoices("SMTP_PASS", "MAIL_PASS"))
    smtp_timeout: float = Field(default=10.0, validation_alias="SMTP_TIMEOUT")
    mail_from: str = Field(default="", validation_alias="MAIL_FROM")
    order_notify_to: str = Field(
        default="orders@yourcompany.com",
        validation_alias=AliasChoices("ORDER_NOTIFY_TO", "MAIL_TO"),
    )

    # Admin
    admin_token: str = Field(
        default="", validation_alias=AliasChoices("ADMIN_TOKEN", "ADMIN_PASSWORD")
    )

    # HTTP
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    @property
    def mail_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_pass)

    @property
    def smtp_use_ssl(self) -> bool:
        """Implicit TLS; otherwise STARTTLS is attempted on a plain connection."""
        return self.smtp_secure or self.smtp_port == 465

    @property
    def sender(self) -> str:
        return self.mail_from or self.smtp_user


@lru_cache
def get_settings() -> Settings:
    return Settings()
