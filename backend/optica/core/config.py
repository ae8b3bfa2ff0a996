from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Annotated, Any, ClassVar
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    PROJECT_NAME: str = "Optica API"
    APP_VERSION: str = "1.0.0"
    # development | production | test
    ENVIRONMENT: str = "production"
    API_V1_STR: str = "/api/v1"

    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'optica.db'}"

    LOG_LEVEL: str = "INFO"

    # NoDecode hands the raw env string to split_origins
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_ALL: bool = False

    BCRYPT_ROUNDS: int = 11

    # OpenTelemetry console tracing; off unless explicitly requested
    ENABLE_TRACING: bool = False
    OTEL_TRACES_SAMPLER_RATIO: float = 1.0

    # Create tables and load the canonical range ladder + sample catalog on boot
    SEED_ON_STARTUP: bool = False

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=True,
    )

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("ENVIRONMENT", "LOG_LEVEL", mode="before")
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("OTEL_TRACES_SAMPLER_RATIO")
    def clamp_ratio(cls, v: float) -> float:
        return 0.0 if v < 0 else (1.0 if v > 1 else v)

    @model_validator(mode="after")
    def allow_all_if_requested(self) -> "Settings":
        if self.CORS_ALLOW_ALL:
            self.CORS_ORIGINS = ["*"]
        return self

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))
