from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    presets_cache_path: Path = Path.home() / ".roicalc" / "presets.json"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    default_preset_id: str = "dtc"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ROICALC_")


@lru_cache
def get_settings() -> Settings:
    return Settings()
