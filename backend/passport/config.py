from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # Database (empty -> in-memory store)
    database_url: str = Field(default="", env="DATABASE_URL")
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")

    # External identity provider: token verification
    auth_jwks_url: str = Field(default="", env="AUTH_JWKS_URL")
    auth_jwt_secret: str = Field(default="", env="AUTH_JWT_SECRET")
    auth_issuer: Optional[str] = Field(default=None, env="AUTH_ISSUER")
    auth_audience: Optional[str] = Field(default=None, env="AUTH_AUDIENCE")
    auth_algorithms: list[str] = Field(default=["RS256", "ES256", "HS256"], env="AUTH_ALGORITHMS")
    auth_jwks_cache_seconds: int = Field(default=600, env="AUTH_JWKS_CACHE_SECONDS")

    # External identity provider: delegated account calls
    identity_provider_url: str = Field(default="", env="IDENTITY_PROVIDER_URL")
    identity_provider_api_key: str = Field(default="", env="IDENTITY_PROVIDER_API_KEY")
    identity_provider_timeout: float = Field(default=10.0, env="IDENTITY_PROVIDER_TIMEOUT")

    # Start-up data
    seed_on_startup: bool = Field(default=True, env="SEED_ON_STARTUP")
    seed_demo_data: bool = Field(default=False, env="SEED_DEMO_DATA")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_format: str = Field(default="%(asctime)s %(levelname)s [%(name)s] %(message)s", env="LOG_FORMAT")

    cors_origins: list[str] = Field(default=["*"], env="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def logging_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": self.log_format},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": self.log_level.upper()},
            "loggers": {
                "passport.audit": {"level": "INFO"},
                "sqlalchemy.engine": {"level": "INFO" if self.database_echo else "WARNING"},
            },
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
