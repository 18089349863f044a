# File: app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import os


class Settings(BaseSettings):
    # ---------------------------
    # Meta / Pydantic settings
    # ---------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # Ignore unexpected env vars instead of erroring
    )

    # ---------------------------
    # Database (PostgreSQL in production, SQLite locally)
    # ---------------------------
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./inventra.db")

    # ---------------------------
    # Security / Auth
    # ---------------------------
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-inventra-dev-secret")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

    # ---------------------------
    # Bootstrap admin account (seeded on startup only when ADMIN_PASSWORD is set)
    # ---------------------------
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@inventra.com")
    ADMIN_PASSWORD: Optional[str] = os.getenv("ADMIN_PASSWORD")
    ADMIN_FULL_NAME: str = os.getenv("ADMIN_FULL_NAME", "Admin User")

    # ---------------------------
    # API / Project
    # ---------------------------
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Inventra API")

    # ---------------------------
    # Environment / Logging
    # ---------------------------
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")  # development | staging | production
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")

    # ---------------------------
    # Inventory behaviour
    # ---------------------------
    DEFAULT_LOW_STOCK_THRESHOLD: int = int(os.getenv("DEFAULT_LOW_STOCK_THRESHOLD", "10"))
    RECENT_TRANSACTIONS_LIMIT: int = int(os.getenv("RECENT_TRANSACTIONS_LIMIT", "100"))
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "50"))
    NOTIFICATION_FEED_LIMIT: int = int(os.getenv("NOTIFICATION_FEED_LIMIT", "50"))
    AUDIT_REPORTS_LIMIT: int = int(os.getenv("AUDIT_REPORTS_LIMIT", "50"))

    # ---------------------------
    # Derived / Convenience
    # ---------------------------
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cors_origins(self) -> List[str]:
        """
        Return the allowed CORS origins.
        Explicit ALLOWED_ORIGINS wins; otherwise everything is allowed outside production.
        """
        origins = [url.strip() for url in self.ALLOWED_ORIGINS.split(",") if url.strip()]
        if origins:
            return origins
        if self.is_production:
            return []
        return ["*"]


settings = Settings()
