from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapshotBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LDES_SNAPSHOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Base log level for the ldes_snapshot logger (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=True,
        description="Emit one JSON object per log line; plain text when disabled"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
