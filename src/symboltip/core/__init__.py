"""Core module exports."""

from symboltip.core.errors import (
    ConfigError,
    ErrorCode,
    HostInteractionError,
    InternalError,
    ResolutionError,
    SymbolTipError,
)
from symboltip.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "SymbolTipError",
    "ConfigError",
    "ErrorCode",
    "HostInteractionError",
    "InternalError",
    "ResolutionError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
