import logging
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for snapshot operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has its own prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Caller argument errors
        STRUCTURE_*: Stream or snapshot declaration errors (fatal)
        MEMBER_*: Individual version-record errors (recoverable)
        CONSISTENCY_*: Errors combining incompatible snapshots
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"

    # Structural errors
    STRUCTURE_ERROR = "STRUCTURE_001"
    STREAM_NOT_FOUND = "STRUCTURE_002"
    AMBIGUOUS_STREAM = "STRUCTURE_003"
    MISSING_PROPERTY = "STRUCTURE_004"
    AMBIGUOUS_PROPERTY = "STRUCTURE_005"

    # Member errors
    MEMBER_ERROR = "MEMBER_001"
    MISSING_VERSION_OF = "MEMBER_002"
    AMBIGUOUS_VERSION_OF = "MEMBER_003"
    MISSING_TIMESTAMP = "MEMBER_004"
    AMBIGUOUS_TIMESTAMP = "MEMBER_005"
    INVALID_TIMESTAMP = "MEMBER_006"
    INVALID_MEMBER = "MEMBER_007"

    # Consistency errors
    CONSISTENCY_ERROR = "CONSISTENCY_001"
    SOURCE_MISMATCH = "CONSISTENCY_002"


class SnapshotError(Exception):
    """Base exception for all snapshot-related errors.

    Errors are categorized by error code; the three subclasses below only
    exist so callers can catch the fatal and recoverable families separately.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    log_level: int = logging.ERROR
    default_code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize snapshot error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum, defaults to the class code
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.cause = cause

        # lazy import to avoid circular dependency
        from ldes_snapshot.logging import get_logger
        get_logger(__name__).log(
            self.log_level,
            message,
            extra={
                "error_code": self.error_code.value,
                "details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


class StructuralError(SnapshotError):
    """A required single-valued fact of a stream or snapshot is missing or repeated.

    Fatal: raised before any member is processed.
    """

    default_code = ErrorCode.STRUCTURE_ERROR


class MemberError(SnapshotError):
    """A single version-record cannot be resolved.

    Recoverable: returned inside a MemberResolution, the member is skipped.
    """

    log_level = logging.WARNING
    default_code = ErrorCode.MEMBER_ERROR


class ConsistencyError(SnapshotError):
    """Two snapshots that do not describe the same source stream were combined."""

    default_code = ErrorCode.CONSISTENCY_ERROR


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> SnapshotError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        SnapshotError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return SnapshotError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> SnapshotError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        SnapshotError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return SnapshotError(
        message=message,
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def structural_error(
    message: str,
    subject: Any = None,
    predicate: Any = None,
    found: Optional[int] = None,
    **kwargs
) -> StructuralError:
    """Create a structural error for a single-valued fact.

    The error code is derived from ``found``: zero values is a missing
    property, more than one is an ambiguous one.

    Args:
        message: Error message
        subject: Subject the fact was looked up on
        predicate: Predicate that was looked up
        found: Number of values found
        **kwargs: Additional error details

    Returns:
        StructuralError
    """
    details = kwargs.get('details', {})
    if subject is not None:
        details["subject"] = str(subject)
    if predicate is not None:
        details["predicate"] = str(predicate)
    if found is not None:
        details["found"] = found

    error_code = kwargs.pop('error_code', None)
    if error_code is None and found is not None:
        error_code = ErrorCode.MISSING_PROPERTY if found == 0 else ErrorCode.AMBIGUOUS_PROPERTY

    return StructuralError(
        message=message,
        error_code=error_code,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def member_error(
    message: str,
    member_id: Any = None,
    error_code: ErrorCode = ErrorCode.MEMBER_ERROR,
    **kwargs
) -> MemberError:
    """Create a member error.

    Args:
        message: Error message
        member_id: Identifier of the offending version-record
        error_code: Specific MEMBER_* code
        **kwargs: Additional error details

    Returns:
        MemberError
    """
    details = kwargs.get('details', {})
    if member_id is not None:
        details["member_id"] = str(member_id)

    return MemberError(
        message=message,
        error_code=error_code,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def consistency_error(
    message: str,
    expected: Any = None,
    actual: Any = None,
    **kwargs
) -> ConsistencyError:
    """Create a consistency error for snapshots of different streams.

    Args:
        message: Error message
        expected: Source stream of the first snapshot
        actual: Source stream of the second snapshot
        **kwargs: Additional error details

    Returns:
        ConsistencyError with SOURCE_MISMATCH code
    """
    details = kwargs.get('details', {})
    if expected is not None:
        details["expected"] = str(expected)
    if actual is not None:
        details["actual"] = str(actual)

    return ConsistencyError(
        message=message,
        error_code=ErrorCode.SOURCE_MISMATCH,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
