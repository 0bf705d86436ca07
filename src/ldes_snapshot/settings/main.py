from typing import Optional

import pytz
from pydantic import Field, ValidationError, field_validator

from ldes_snapshot.common.exceptions import configuration_error
from ldes_snapshot.constants import (
    DEFAULT_SNAPSHOT_SUFFIX,
    DEFAULT_TIMESTAMP_PATH,
    DEFAULT_VERSION_PATH,
)
from .base import SnapshotBaseSettings


class SnapshotSettings(SnapshotBaseSettings):
    """Process-wide defaults for snapshot selection.

    Values are read from ``LDES_SNAPSHOT_*`` environment variables or a
    ``.env`` file. They are consulted once, when a selection config is
    resolved, and never by the selector itself.
    """

    default_timezone: str = Field(
        default="UTC",
        description="Time zone applied to xsd:dateTime values that carry no offset, e.g. 'Europe/Brussels'"
    )
    snapshot_suffix: str = Field(
        default=DEFAULT_SNAPSHOT_SUFFIX,
        description="Suffix appended to the stream id to derive the snapshot id when none is given"
    )
    default_version_path: str = Field(
        default=str(DEFAULT_VERSION_PATH),
        description="Version path used when a fresh snapshot description is generated"
    )
    default_timestamp_path: str = Field(
        default=str(DEFAULT_TIMESTAMP_PATH),
        description="Timestamp path used when a fresh snapshot description is generated"
    )
    materialized: bool = Field(
        default=False,
        description="Produce materialized snapshots unless the caller says otherwise"
    )

    @field_validator('default_timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is valid."""
        try:
            pytz.timezone(v)
            return v
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}. Use pytz timezone names like 'Europe/Brussels'")

    @field_validator('snapshot_suffix')
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v:
            raise ValueError("Snapshot suffix cannot be empty")
        return v

    @property
    def timezone(self):
        """The configured time zone as a pytz tzinfo."""
        return pytz.timezone(self.default_timezone)


# Singleton instance
_settings: Optional[SnapshotSettings] = None


def get_settings(force_reload: bool = False) -> SnapshotSettings:
    """Get the singleton settings instance.

    Args:
        force_reload: If True, creates a new instance even if one already
                     exists. Useful for testing or when environment
                     variables have changed.

    Returns:
        SnapshotSettings: The singleton settings instance

    Raises:
        SnapshotError: With CONFIG_ERROR when an environment value is invalid

    Example:
        ```python
        settings = get_settings()
        assert settings is get_settings()

        # Pick up environment changes
        fresh = get_settings(force_reload=True)
        ```
    """
    global _settings

    if _settings is None or force_reload:
        try:
            _settings = SnapshotSettings()
        except ValidationError as exc:
            first = exc.errors()[0]
            raise configuration_error(
                f"Invalid snapshot settings: {first['msg']}",
                config_key=".".join(str(part) for part in first["loc"]),
                details={"errors": exc.error_count()},
                cause=exc,
            )

    return _settings


def _reload_settings() -> SnapshotSettings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
