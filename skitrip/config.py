"""
Configuration for the Ski Trip Companion

Runtime settings are read from environment variables (or a local .env file)
through pydantic-settings. The analysis engine itself only ever receives an
explicit AnalysisConfig, never the process-wide settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import constants


class AnalysisConfig(BaseModel):
    """Parameters of the trip analysis engine."""

    model_config = ConfigDict(frozen=True)

    gps_accuracy_threshold: float = Field(
        default=constants.DEFAULT_GPS_ACCURACY_THRESHOLD_M,
        ge=0,
        description="Points with a horizontal accuracy above this (meters) are dropped",
    )


class AppSettings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server
    port: int = Field(default=3001, description="HTTP port")
    environment: str = Field(default="development", description="Application environment")
    api_prefix: str = Field(default="/api", description="Prefix for every API route")
    cors_origin: str = Field(default="*", description="Allowed CORS origins (comma-separated)")

    # Storage
    json_data_path: str = Field(default="./JSON", description="Directory holding trip JSON files")

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="console", description="Log format: console or json")

    # Analysis
    gps_accuracy_threshold: float = Field(
        default=constants.DEFAULT_GPS_ACCURACY_THRESHOLD_M,
        ge=0,
        description="Maximum accepted horizontal accuracy in meters",
    )

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def data_dir(self) -> Path:
        """Trip directory, relative paths resolved against the project root."""
        path = Path(self.json_data_path)
        if not path.is_absolute():
            path = constants.PROJECT_ROOT / path
        return path

    def analysis_config(self) -> AnalysisConfig:
        return AnalysisConfig(gps_accuracy_threshold=self.gps_accuracy_threshold)


@lru_cache()
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
