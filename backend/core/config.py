"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

from underfloor.catalog import DEFAULT_CATALOG_PATH


class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "Underfloor Heating API"
    SERVICE_NAME: str = "Underfloor Heating API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = True

    # Materials catalog
    CATALOG_PATH: Path = DEFAULT_CATALOG_PATH

    # Editor frontend
    FRONTEND_PORT: int = 8050
    API_BASE_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT: float | None = None
    MAX_DESIGN_SESSIONS: int = 100

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8050",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
