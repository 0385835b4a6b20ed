"""Configuration settings for the workout plan API."""
import os
from pathlib import Path
from typing import List, Literal


EnvironmentType = Literal["development", "staging", "production"]

# Project root (two levels above src/workout_plan_api)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Exercise catalog
    CATALOG_API_URL: str = "http://localhost:3000"
    CATALOG_TIMEOUT_SEC: float = 10.0

    # Plan handling
    PLAN_STORE_DIR: Path = PROJECT_ROOT / ".cache" / "plans"
    ENRICH_ENVIRONMENTS: List[str] = ["gym"]

    # LLM generation
    LLM_PROVIDER: str = "openai"
    OPENAI_MODEL: str = "gpt-4o-mini"
    ANTHROPIC_MODEL: str = "claude-3-5-sonnet-20241022"
    HELICONE_ENABLED: bool = False

    # API Keys
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    HELICONE_API_KEY: str | None = None

    # HTTP
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:3001"]

    def __init__(self):
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        self.CATALOG_API_URL = os.getenv("CATALOG_API_URL", "http://localhost:3000").rstrip("/")
        try:
            self.CATALOG_TIMEOUT_SEC = float(os.getenv("CATALOG_TIMEOUT_SEC", "10"))
        except ValueError:
            self.CATALOG_TIMEOUT_SEC = 10.0

        store_dir = os.getenv("PLAN_STORE_DIR")
        self.PLAN_STORE_DIR = Path(store_dir) if store_dir else PROJECT_ROOT / ".cache" / "plans"
        self.ENRICH_ENVIRONMENTS = [
            e.lower() for e in _split_csv(os.getenv("ENRICH_ENVIRONMENTS", "gym"))
        ]

        self.LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self.ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022")
        self.HELICONE_ENABLED = os.getenv("HELICONE_ENABLED", "false").lower() == "true"

        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
        self.HELICONE_API_KEY = os.getenv("HELICONE_API_KEY")

        self.CORS_ORIGINS = _split_csv(
            os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001")
        )


settings = Settings()
