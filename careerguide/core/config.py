"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL (courses + applications)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "careerguide_user"
    postgres_password: str = "password"
    postgres_db: str = "careerguide_db"
    postgres_connect_timeout: int = 10
    postgres_pool_size: int = 5
    postgres_max_overflow: int = 10
    sql_echo: bool = False

    # MongoDB (students, jobs, notifications)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "careerguide_docs"
    mongodb_timeout_ms: int = 5000

    # JWT verification (tokens are issued by the auth service)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"

    # Matching / admissions
    ranked_candidates_limit: int = 50
    max_active_applications_per_institution: int = 2

    # App
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
