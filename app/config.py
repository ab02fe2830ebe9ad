import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv("config.env")


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _as_list(val: str | None, default: str = "*") -> List[str]:
    raw = val if val is not None else default
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./restaurant_booking.db")
    # Hosted Postgres instances require TLS
    database_ssl: bool = _as_bool(os.getenv("DATABASE_SSL"), False)
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "info")
    cors_origins: List[str] = field(default_factory=lambda: _as_list(os.getenv("CORS_ORIGINS")))
    # Terminal client
    api_url: str = os.getenv("API_URL", "http://localhost:8000")
    demo_customer_name: str = os.getenv("DEMO_CUSTOMER_NAME", "Demo User")
    demo_deposit: float = float(os.getenv("DEMO_DEPOSIT", "100.00"))


settings = Settings()
