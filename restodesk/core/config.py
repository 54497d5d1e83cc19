"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "restodesk API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./restodesk.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    admin_email: str = getenv("ADMIN_EMAIL", "admin@restodesk.local")
    admin_password: str = getenv("ADMIN_PASSWORD", "admin123")
    admin_full_name: str = getenv("ADMIN_FULL_NAME", "Administrator")
    availability_auto_recompute: bool = getenv("AVAILABILITY_AUTO_RECOMPUTE", "1") == "1"


settings: Settings = Settings()
