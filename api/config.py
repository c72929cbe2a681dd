"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Asana (task tracker)
    asana_access_token: str = ""
    asana_project_id: str = ""
    asana_api_base: str = "https://app.asana.com/api/1.0"
    asana_timeout: float = 15.0

    # Section name -> gid. When a section is listed here no lookup call is made.
    section_ids: dict[str, str] = {}
    section_cache_ttl: float = 300

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
