"""Config module exports."""

from symboltip.config.loader import SymbolTipSettings, load_config
from symboltip.config.models import (
    LoggingConfig,
    LogOutputConfig,
    QuickInfoFlags,
    SymbolTipConfig,
)
from symboltip.config.source import MutableConfigSource

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "MutableConfigSource",
    "QuickInfoFlags",
    "SymbolTipConfig",
    "SymbolTipSettings",
]
