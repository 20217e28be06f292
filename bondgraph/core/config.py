from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


def default_database_url() -> str:
    # relative to where the app is started, not to the installed package
    return f"sqlite:///{Path.cwd() / 'data' / 'progress.db'}"

class Settings(BaseSettings): # load all key=value pairs from .env
    """ Load settings"""
    DATABASE_URL: str = Field(default_factory=default_database_url)
    PROGRESS_STORE_KEY: str = "thesis_game_progress"  # key of the single progress record
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app_errors.log"

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_file_encoding = "utf-8",
        extra = "ignore",
    )

settings = Settings()
