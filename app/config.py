from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_DEPLOY_VARS = ("MONGO_URI", "JWT_SECRET")


class Settings(BaseSettings):

    # Application
    APP_NAME: str = "Storefront API"
    APP_VERSION: str = "1.0.0"
    NODE_ENV: str = "development"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # Database (MongoDB)
    MONGO_URI: Optional[str] = None
    MONGO_DB_NAME: str = "storefront"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Security
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30
    BCRYPT_ROUNDS: int = 10

    # Frontend
    CLIENT_URL: Optional[str] = None
    DEV_CLIENT_URL: str = "http://localhost:5173"
    FRONTEND_DIST: str = "../frontend/dist"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def cors_origins(self) -> List[str]:
        if self.is_production:
            return [self.CLIENT_URL] if self.CLIENT_URL else []
        return [self.DEV_CLIENT_URL]

    def missing_required(self) -> List[str]:
        """Names of deploy-critical variables that are unset or blank."""
        return [name for name in REQUIRED_DEPLOY_VARS if not getattr(self, name)]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
