"""
GreenPlan Server - Configuration

Loads server settings from environment variables (prefixed GREENPLAN_)
or a .env file, with development defaults.

The settings object is frozen: it is built once at startup and handed
to the components that need it (database manager, token codec, CORS).
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """Server settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="GREENPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ==================== API Server ====================

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "http://localhost:3000,https://sg-green-plan-server.onrender.com"

    # ==================== Database ====================

    database_url: str = "sqlite:///database/greenplan.db"
    db_pool_size: int = 10
    db_ssl_ca: str = "ca.pem"  # Only used for MySQL, and only if the file exists

    # ==================== Authentication ====================

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    bcrypt_rounds: int = 10

    # ==================== Logging ====================

    log_dir: str = "logs"
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache
def GetSettings() -> Settings:
    """Get cached settings instance"""
    return Settings()
