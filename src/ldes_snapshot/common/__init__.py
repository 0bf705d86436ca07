"""Common exceptions for ldes_snapshot.

Exception Design:
    The exception system uses error codes for categorization. All exceptions
    inherit from SnapshotError and include structured error information.
    Three subclasses separate the families callers handle differently:

    - StructuralError: the stream or snapshot declaration is unusable (fatal)
    - MemberError: one version-record is malformed (skipped, never raised
      out of a selection pass)
    - ConsistencyError: two snapshots of different streams were combined
"""

from ldes_snapshot.common.exceptions import (
    ConsistencyError,
    ErrorCode,
    MemberError,
    SnapshotError,
    StructuralError,
    # Helper functions
    configuration_error,
    consistency_error,
    member_error,
    structural_error,
    validation_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SnapshotError",
    "ErrorCode",
    "StructuralError",
    "MemberError",
    "ConsistencyError",
    # Helper functions
    "configuration_error",
    "validation_error",
    "structural_error",
    "member_error",
    "consistency_error",
]
