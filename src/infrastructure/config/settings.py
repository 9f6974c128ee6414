"""
Runtime configuration read from the environment.

load_dotenv() is called by each entry point before Settings is built, so a
local .env file works the same way as exported variables.
"""

import logging
import os
from dataclasses import dataclass, field


def _split_origins(raw: str) -> list[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class Settings:
    database_url: str = field(
        default_factory=lambda: os.getenv("STOCKS_DATABASE_URL", "sqlite:///stocks.db")
    )
    table_name: str = field(default_factory=lambda: os.getenv("STOCKS_TABLE_NAME", "stocks"))
    cors_allow_origins: list[str] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ALLOW_ORIGINS", ""))
    )
    host: str = field(default_factory=lambda: os.getenv("SERVICE_HOST", "0.0.0.0"))
    port: int = field(
        default_factory=lambda: int(os.getenv("SERVICE_PORT") or os.getenv("PORT") or "8000")
    )
    log_level: str = field(default_factory=lambda: os.getenv("SERVICE_LOG_LEVEL", "info"))
    api_url: str = field(
        default_factory=lambda: os.getenv("ANALYTICS_API_URL", "http://localhost:8000/api")
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
