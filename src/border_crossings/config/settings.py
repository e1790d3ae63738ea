"""
Settings for the border crossings tool
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RECORDS_MEMBER = "Takeout/Location History (Timeline)/Records.json"


class Settings(BaseSettings):
    """Configuration for the border crossings tool, read from LOOM_ env vars"""

    model_config = SettingsConfigDict(
        env_prefix="LOOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identification
    service_name: str = Field(
        default="border-crossings",
        description="Name of the service for logging",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="text", description="Log format: json or text")

    # Boundary lookup
    boundaries_path: Optional[Path] = Field(
        default=None,
        description="GeoJSON FeatureCollection holding region boundaries",
    )
    boundary_id_property: str = Field(
        default="id",
        description="Feature property holding the ISO region code",
    )

    # Takeout input
    takeout_records_member: str = Field(
        default=DEFAULT_RECORDS_MEMBER,
        description="Path of Records.json inside a Takeout archive",
    )

    # Detection
    missing_data_gap_days: int = Field(
        default=1,
        gt=0,
        description="Days without a fix before the interval is reported as missing data",
    )

    # Development settings
    debug: bool = Field(default=False, description="Log at DEBUG regardless of log_level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format"""
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()
