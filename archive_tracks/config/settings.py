from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    archive_path: Path = Field(default=Path("./archive"), validation_alias="ARCHIVE_TRACKS_ARCHIVE_PATH")
    activities_file: str = Field(default="activities.csv", validation_alias="ARCHIVE_TRACKS_ACTIVITIES_FILE")
    gpsbabel_path: str = Field(
        default="gpsbabel",  # Resolved on PATH; point at the app bundle binary on macOS
        validation_alias="ARCHIVE_TRACKS_GPSBABEL_PATH",
    )
    transcoder_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        validation_alias="ARCHIVE_TRACKS_TRANSCODER_TIMEOUT",
        description="Seconds before an unresponsive gpsbabel process is killed",
    )
    fit_output_format: Literal["gtrnctr", "gpx"] = Field(
        default="gtrnctr",
        validation_alias="ARCHIVE_TRACKS_FIT_OUTPUT_FORMAT",
        description="gpsbabel output kind used when transcoding FIT files",
    )
    temp_dir: Path | None = Field(default=None, validation_alias="ARCHIVE_TRACKS_TEMP_DIR")
    max_workers: int = Field(default=4, ge=1, validation_alias="ARCHIVE_TRACKS_MAX_WORKERS")
    log_level: str = Field(default="INFO", validation_alias="ARCHIVE_TRACKS_LOG_LEVEL")
    log_file: Path | None = Field(default=None, validation_alias="ARCHIVE_TRACKS_LOG_FILE")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
