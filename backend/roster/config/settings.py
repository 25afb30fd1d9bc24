"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # App info
    app_name: str = "Student Roster"
    app_version: str = "1.0.0"
    debug: bool = False

    # Roster
    seed_file: Optional[str] = None  # JSON export loaded at startup
    default_sort_algorithm: str = "bubble"
    default_search_algorithm: str = "linear"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/roster.log"
    log_file_enabled: bool = False
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON lines in the file, colored text on console
    log_api_requests: bool = True


settings = Settings()
