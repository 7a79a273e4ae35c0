"""
Import configuration settings for the clinic task API
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class ImportSettings(BaseSettings):
    """Configurazione applicazione e pipeline di import CSV"""

    # Database
    database_url: str = Field(default="sqlite:///./clinic_tasks.db")

    # CSV import
    task_batch_size: int = Field(default=5, ge=1)               # task inseriti per richiesta
    max_upload_size: int = Field(default=5 * 1024 * 1024)       # 5MB
    default_specialty: str = Field(default="general")
    import_source_type: str = Field(default="csv_import")

    # Logging
    log_level: str = Field(default="INFO")

    # CORS
    cors_origins: List[str] = Field(default=["http://localhost:5173", "http://localhost:8080"])

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


@lru_cache()
def get_import_settings() -> ImportSettings:
    """Get cached import settings instance"""
    return ImportSettings()
