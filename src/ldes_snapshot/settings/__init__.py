"""Settings for ldes_snapshot, built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment Variables prefixed with ``LDES_SNAPSHOT_`` (highest priority)
    2. A ``.env`` file in the working directory
    3. Field defaults

Example:
    ```python
    from ldes_snapshot.settings import get_settings

    settings = get_settings()
    print(settings.default_timezone)
    ```
"""

from .base import SnapshotBaseSettings
from .main import SnapshotSettings, _reload_settings, get_settings

__all__ = [
    "SnapshotBaseSettings",
    "SnapshotSettings",
    "get_settings",
    "_reload_settings",
]
