import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

class Config(BaseModel):
    app_name: str = "HR Leave Platform"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://localhost:5173,"
                "http://127.0.0.1:3000,http://127.0.0.1:5173",
            ).split(",")
            if o.strip()
        ]
    )

    # Rate limiting: app-wide default and the tighter computation endpoint limit
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))
    compute_rate_limit_per_minute: int = int(os.getenv("COMPUTE_RATE_LIMIT_PER_MINUTE", "20"))

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

settings = Config()

# --- Startup Validation ---
_logger = logging.getLogger(__name__)
if settings.environment == "production" and settings.database_url.startswith("sqlite"):
    if os.getenv("ALLOW_SQLITE_IN_PRODUCTION", "false").lower() != "true":
        raise RuntimeError(
            "FATAL: DATABASE_URL points to SQLite in production. "
            "Set DATABASE_URL or ALLOW_SQLITE_IN_PRODUCTION=true."
        )
elif settings.database_url.startswith("sqlite") and not settings.is_testing:
    _logger.warning("⚠ Using SQLite database — only acceptable for local development.")
