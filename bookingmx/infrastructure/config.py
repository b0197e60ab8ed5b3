from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BOOKINGMX_")

    database_url: str = "sqlite+pysqlite:///:memory:"
    store_backend: Literal["memory", "sql"] = "memory"
    openapi_path: Path = Path(__file__).resolve().parents[1] / "openapi/openapi.yaml"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173", "*"]
    log_level: str = "INFO"


settings = Settings()
