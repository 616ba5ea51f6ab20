"""
Runtime configuration for the Product API.

Values come from environment variables, optionally seeded from a ``.env``
file in the working directory.  Defaults are suitable for local
development; override ``API_KEY`` in any shared deployment.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Shared secret expected in the ``x-api-key`` header on mutating routes.
    api_key: str = os.getenv("API_KEY", "secret-key-123")

    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "3000"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Load the five sample products into the store at startup.
    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "true")

    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))


settings = Settings()
