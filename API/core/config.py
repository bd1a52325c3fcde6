"""
Application settings.
Values come from environment variables or a local .env file.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """EstateIQ API settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "EstateIQ API"
    version: str = "2.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./estateiq.db"
    db_pool_size: int = 10
    db_echo: bool = False

    # Auth (JWT)
    secret_key: str = "estateiq-secret-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_days: int = 7

    # CORS
    cors_origins: str = "http://localhost:5173"
    cors_origin_regex: Optional[str] = r"https://.*\.vercel\.app|http://localhost(:\d+)?"

    # Bootstrap admin
    seed_admin: bool = True
    primary_admin_id: str = "admin-001"
    admin_name: str = "Admin User"
    admin_email: str = "admin@estateiq.ng"
    admin_phone: str = "08000000000"
    admin_password: str = "Admin@1234"

    # Messaging
    whatsapp_country_code: str = "234"
    currency_symbol: str = "₦"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
