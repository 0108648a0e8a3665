from __future__ import annotations

import os
from functools import lru_cache
from dotenv import load_dotenv, find_dotenv

_env_path = find_dotenv(".env") or ".env"
load_dotenv(_env_path, override=False)


def _split_csv(raw: str) -> list[str]:
    return [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]


class Settings:
    """Central configuration (env driven)."""

    def __init__(self) -> None:
        # Database
        self.database_url: str = os.getenv("DATABASE_URL", "")
        self.db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
        self.db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
        self.db_pool_timeout: int = int(os.getenv("DB_POOL_TIMEOUT", "5"))
        # Auth boundary
        self.jwt_secret: str = os.getenv("JWT_SECRET", "change-me")
        self.jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
        # Billing
        self.credit_unit_price: float = float(os.getenv("CREDIT_UNIT_PRICE", "5000"))
        self.partial_payment_ratio: float = float(os.getenv("PARTIAL_PAYMENT_RATIO", "0.5"))
        # App meta
        self.app_name: str = "Registrar Backend"
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "DEBUG" if self.debug else "INFO").upper()
        self.allow_origins: list[str] = _split_csv(
            os.getenv("ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173")
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def get_database_url(self) -> str:
        return self.database_url


@lru_cache()
def get_settings() -> Settings:
    return Settings()
