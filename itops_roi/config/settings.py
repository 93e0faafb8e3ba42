from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    recalc_debounce_seconds: float = 0.5
    default_it_employee_cost: float = 120000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    catalog_path: Optional[Path] = None
    product_name: str = "Device42"
    event_buffer_size: int = 200
    session_idle_timeout_seconds: float = 3600

    class Config:
        env_file = ".env"
        env_prefix = "ITOPS_ROI_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
