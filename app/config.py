"""Application configuration with comprehensive validation."""
from typing import Optional, Literal, List
from functools import lru_cache
from pathlib import Path
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parent.parent



class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Rice Inspection Grading API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Snowflake
    SNOWFLAKE_ACCOUNT: str = ""
    SNOWFLAKE_USER: str = ""
    SNOWFLAKE_PASSWORD: SecretStr = SecretStr("")
    SNOWFLAKE_DATABASE: str = ""
    SNOWFLAKE_SCHEMA: str = ""
    SNOWFLAKE_WAREHOUSE: str = ""
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_INSPECTION: int = Field(default=3600, ge=1)   # 1 hour

    # Grading
    STANDARDS_FILE: Path = PROJECT_ROOT / "data" / "standards.json"
    MAX_GRAINS_PER_BATCH: int = Field(
        default=100_000,
        ge=1,
        description="Upper bound on grains accepted in one create-inspection request",
    )

    # History
    HISTORY_PAGE_SIZE: int = Field(default=10, ge=1, le=100)

    @field_validator("STANDARDS_FILE")
    @classmethod
    def resolve_standards_file(cls, v: Path) -> Path:
        """Relative catalog paths are resolved against the project root."""
        return v if v.is_absolute() else PROJECT_ROOT / v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if not self.SNOWFLAKE_ACCOUNT or not self.SNOWFLAKE_USER:
                raise ValueError("Snowflake credentials are required in production")
        return self

    @property
    def snowflake_configured(self) -> bool:
        """True when the minimum Snowflake credentials are present."""
        return bool(
            self.SNOWFLAKE_ACCOUNT
            and self.SNOWFLAKE_USER
            and self.SNOWFLAKE_PASSWORD.get_secret_value()
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
