"""
Configuration Management for the Flare Risk Engine

Environment-based configuration using Pydantic Settings.
"""
from typing import List, Tuple
from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from .env file
    )
    
    # Application
    app_name: str = "Flare Risk Engine"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level for flarewatch loggers")
    
    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]
    
    # Record store
    data_dir: str = "data"
    store_file: str = "records.json"
    
    # Daily flare index (caller-side blend of the engine outputs)
    symptom_weight: float = Field(default=0.4, description="Weight of the prodromal total score")
    environment_weight: float = Field(default=0.3, description="Weight of the external environmental score")
    lifestyle_weight: float = Field(default=0.3, description="Weight of the lifestyle risk score")
    
    # Flare diary
    report_period_days: int = Field(default=30, description="Window covered by the hospital report")
    max_triggers: int = Field(default=10, description="Number of triggers kept after ranking")
    
    @property
    def daily_index_weights(self) -> Tuple[float, float, float]:
        return (self.symptom_weight, self.environment_weight, self.lifestyle_weight)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
