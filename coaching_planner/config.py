"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "coaching-planner"
    log_level: str = "INFO"

    # Request limits
    max_visits: int = 200  # Each search simulates every month x visit 40 times


settings = Settings()
