from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    app_name: str = "Sentiment Dashboard API"
    # If ALLOWED_ORIGINS env is provided, it should be a JSON array.
    # Example: ["http://localhost:8501", "http://127.0.0.1:8501"]
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    # File upload limits
    max_file_size_bytes: int = 10 * 1024 * 1024
    max_fragments_per_file: int = 100

    # Number of past analyses kept in memory
    history_limit: int = 10

    # Off: banded confidences use the band midpoint.
    # On: uniform draw inside the band, reproducible when a seed is given.
    confidence_jitter: bool = False
    confidence_jitter_seed: Optional[int] = None


settings = Settings()
