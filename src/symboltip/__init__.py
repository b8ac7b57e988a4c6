"""SymbolTip - semantic symbol information for editor quick info."""

from symboltip.composer import CompositionRequest, FragmentComposer
from symboltip.config import MutableConfigSource, QuickInfoFlags, SymbolTipConfig, load_config
from symboltip.core.errors import (
    ConfigError,
    ErrorCode,
    HostInteractionError,
    InternalError,
    ResolutionError,
    SymbolTipError,
)
from symboltip.engine import QuickInfoEngine
from symboltip.formatting import FormattingContext, StyleRole, StyleTable
from symboltip.fragments import (
    InfoFragment,
    KeyValueBlock,
    NumericTriple,
    ScrollableList,
    StyledRun,
    TextLine,
)
from symboltip.presentation import FragmentList, render_rich, render_text
from symboltip.resolver import Resolution, SymbolResolver

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Engine
    "CompositionRequest",
    "FragmentComposer",
    "QuickInfoEngine",
    "Resolution",
    "SymbolResolver",
    # Config
    "MutableConfigSource",
    "QuickInfoFlags",
    "SymbolTipConfig",
    "load_config",
    # Errors
    "ConfigError",
    "ErrorCode",
    "HostInteractionError",
    "InternalError",
    "ResolutionError",
    "SymbolTipError",
    # Formatting and fragments
    "FormattingContext",
    "FragmentList",
    "InfoFragment",
    "KeyValueBlock",
    "NumericTriple",
    "ScrollableList",
    "StyleRole",
    "StyleTable",
    "StyledRun",
    "TextLine",
    "render_rich",
    "render_text",
]
