# rental/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./rental.sqlite3"

    # Session cookie signing and the single back-office account
    secret_key: str = "change-me"
    admin_username: str = "admin"
    admin_password: str = "admin"

    # Calendar "today" for automatic reservation status changes
    timezone: str = "UTC"
    public_base_url: str = ""
    allow_origins: str = ""

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = ""
    owner_email: str = ""

    payment_iban: str = ""
    payment_currency: str = "CZK"

    shop_name: str = "Outdoor Rental"
    lessor_lines: list[str] = Field(default_factory=list)

    # Off by default: cancelled reservations still block stock
    availability_ignore_cancelled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",  # DATABASE_URL, SMTP_HOST, ... as-is
        extra="ignore",
    )

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
