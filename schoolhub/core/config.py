import json
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, validator
from typing import Optional, List, Dict, Any
from typing_extensions import Annotated
from datetime import timedelta


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "SchoolHub"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, env="DEBUG")

    # Database Settings
    # Base connection string; its last path segment is swapped for the partition name
    DATABASE_URL: str = Field(..., env="DATABASE_URL")
    SYSTEM_PARTITION: str = Field(default="system-db", env="SYSTEM_PARTITION")
    PARTITION_PREFIX: str = Field(default="partition-", env="PARTITION_PREFIX")
    DB_ECHO: bool = Field(default=False, env="DB_ECHO")
    DB_POOL_PRE_PING: bool = Field(default=True, env="DB_POOL_PRE_PING")

    # Authentication Settings
    SECRET_KEY: str = Field(..., env="SECRET_KEY")
    ALGORITHM: str = Field(default="HS256", env="ALGORITHM")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, env="ACCESS_TOKEN_EXPIRE_MINUTES")
    TOKEN_ISSUER: str = Field(default="schoolhub", env="TOKEN_ISSUER")

    # CORS Settings
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ],
        env="ALLOWED_ORIGINS"
    )

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")
    LOG_DIR: Optional[str] = Field(default=None, env="LOG_DIR")

    # Bootstrap super admin, created at startup when both are set
    SUPER_ADMIN_EMAIL: Optional[str] = Field(default=None, env="SUPER_ADMIN_EMAIL")
    SUPER_ADMIN_PASSWORD: Optional[str] = Field(default=None, env="SUPER_ADMIN_PASSWORD")

    @validator('ALLOWED_ORIGINS', pre=True)
    def parse_allowed_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @validator('LOG_LEVEL')
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @validator('PARTITION_PREFIX', 'SYSTEM_PARTITION')
    def validate_partition_names(cls, v: str) -> str:
        if not v or "/" in v or "?" in v:
            raise ValueError("Partition names cannot be empty or contain '/' or '?'")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )


# Initialize settings
settings = Settings()


# Helper Functions
def get_token_expires_delta(minutes: Optional[int] = None) -> timedelta:
    if minutes is None:
        minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return timedelta(minutes=minutes)


def get_database_url() -> str:
    return settings.DATABASE_URL


def get_engine_options() -> Dict[str, Any]:
    return {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
    }

