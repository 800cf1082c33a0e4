# scopegate/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    DB_DRIVER: str = "psycopg2"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "scopegate"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    DEBUG: bool = False

    # Auth
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 3600
    MAX_ACCESS_TOKEN_EXPIRE_SECONDS: int = 315360000  # 10 years

    # API Documentation
    SCHEMA_VISIBILITY: bool = True

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        return (
            f"postgresql+{data.get('DB_DRIVER', 'psycopg2')}://"
            f"{data['POSTGRES_USER']}:{data['POSTGRES_PASSWORD']}@"
            f"{data['POSTGRES_HOST']}:{data['POSTGRES_PORT']}/{data['POSTGRES_DB']}"
        )

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensures the value is a valid logging level."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @field_validator("ACCESS_TOKEN_EXPIRE_SECONDS", "MAX_ACCESS_TOKEN_EXPIRE_SECONDS")
    def validate_token_lifetime(cls, v: int, info) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be a positive number of seconds")
        return v

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
