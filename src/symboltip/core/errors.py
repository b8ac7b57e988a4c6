"""SymbolTip error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Resolution
- 8xxx: Host interaction
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Resolution (3xxx)
    RESOLUTION_STALE_POSITION = 3001
    RESOLUTION_INCONSISTENT_BINDER = 3002

    # Host (8xxx)
    HOST_INTERACTION_FAILED = 8001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class SymbolTipError(Exception):
    """Base error with structured context for host reporting."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SymbolTipError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ResolutionError(SymbolTipError):
    """Symbol resolution could not complete for a request.

    Raised inside the composer and caught at the request boundary; a request
    that hits one produces an empty or reduced fragment list.
    """

    @classmethod
    def stale_position(cls, position: int, start: int, end: int) -> "ResolutionError":
        return cls(
            code=ErrorCode.RESOLUTION_STALE_POSITION,
            message=f"Position {position} is outside node span [{start}, {end})",
            details={"position": position, "start": start, "end": end},
        )

    @classmethod
    def inconsistent_binder(cls, expected: str, actual: str) -> "ResolutionError":
        return cls(
            code=ErrorCode.RESOLUTION_INCONSISTENT_BINDER,
            message=f"Binder returned {actual} where {expected} was expected",
            details={"expected": expected, "actual": actual},
        )


class HostInteractionError(SymbolTipError):
    """A host collaborator (semantic model, documentation store, ...) raised."""

    @classmethod
    def from_exception(cls, operation: str, exc: BaseException, **details: Any) -> "HostInteractionError":
        return cls(
            code=ErrorCode.HOST_INTERACTION_FAILED,
            message=f"{operation} failed: {exc}",
            details={"operation": operation, "exception": type(exc).__name__, **details},
        )


class InternalError(SymbolTipError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
