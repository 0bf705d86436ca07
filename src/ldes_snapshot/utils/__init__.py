"""Utility functions for ldes_snapshot."""

from ldes_snapshot.utils.datetime import (
    ensure_utc,
    from_datetime_literal,
    get_current_timestamp,
    to_datetime_literal,
)
from ldes_snapshot.utils.decorators import traced

__all__ = [
    "get_current_timestamp",
    "ensure_utc",
    "to_datetime_literal",
    "from_datetime_literal",
    "traced",
]
