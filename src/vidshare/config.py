"""vidshare — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── OTP ───────────────────────────────────────────────
    otp_length: int = 6
    otp_ttl_seconds: int = 300
    otp_store_backend: str = "memory"  # "memory" or "database"

    # ── Database (only used by the "database" backend) ────
    database_url: str = "sqlite+aiosqlite:///./vidshare.db"

    # ── SMS-over-email delivery ───────────────────────────
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_start_tls: bool = True
    email_from: str = "otp@vidshare.local"
    sms_gateway_domain: str = "example.com"

    # ── App ───────────────────────────────────────────────
    app_name: str = "vidshare"
    debug: bool = False
    # Exposes the last issued code over HTTP. Never enable in production.
    development_mode: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
