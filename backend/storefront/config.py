import os
from pathlib import Path
from pydantic import BaseModel
from dotenv import load_dotenv

# Explicitly load .env from project root directory
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Storefront Orders API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _env_list(
        "CORS_ORIGINS",
        [
            "http://127.0.0.1:5500",
            "http://localhost:5500",
            "http://localhost:3000",
        ],
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite://data/app.db")
    db_generate_schemas: bool = _env_flag("DB_GENERATE_SCHEMAS", "true")

    # Session cookie
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "ddd_sid")
    session_max_age_days: int = int(os.getenv("SESSION_MAX_AGE_DAYS", "7"))
    # When off, the cookie max-age is only a client-side hint
    session_expiry_enforced: bool = _env_flag("SESSION_EXPIRY_ENFORCED", "true")
    cookie_secure: bool = _env_flag("COOKIE_SECURE", "false")

    # Orders
    order_id_prefix: str = os.getenv("ORDER_ID_PREFIX", "DDD")

    # Argon2 cost parameters
    password_hash_time_cost: int = int(os.getenv("PASSWORD_HASH_TIME_COST", "3"))
    password_hash_memory_cost: int = int(os.getenv("PASSWORD_HASH_MEMORY_COST", "65536"))

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_max_age_days * 24 * 60 * 60


settings = Settings()  # Instantiate configuration
