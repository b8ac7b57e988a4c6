"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SYMBOLTIP__SECTION__KEY)
3. Repo YAML (.symboltip/config.yaml)
4. Global YAML (~/.config/symboltip/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SYMBOLTIP__<SECTION>__<KEY>=<VALUE>

Examples:
    SYMBOLTIP__LOGGING__LEVEL=DEBUG
    SYMBOLTIP__QUICK_INFO__SHOW_ATTRIBUTES=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SYMBOLTIP__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every composition request.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class QuickInfoFlags(BaseModel):
    """Feature toggles consulted while composing fragments.

    Instances are frozen: a snapshot is taken once per request and may be
    swapped between requests, never mutated during one.

    Env vars:
        SYMBOLTIP__QUICK_INFO__<FLAG>: true/false
    """

    model_config = ConfigDict(frozen=True)

    show_declaration: bool = Field(
        default=True,
        description="Declaration modifiers, field declarations, event arguments, delegate signatures.",
    )
    show_interfaces: bool = Field(default=True, description="Interfaces of a named type.")
    show_interfaces_inheritance: bool = Field(
        default=False,
        description="Also list interfaces inherited from base types and other interfaces.",
    )
    show_attributes: bool = Field(default=True, description="Attributes applied to the symbol.")
    show_overloads: bool = Field(default=True, description="Other overloads of a method.")
    show_numeric_values: bool = Field(
        default=True,
        description="Decimal/hex/binary forms of constants and numeric literals.",
    )
    show_base_type: bool = Field(
        default=True,
        description="Base type of classes, underlying type and range of enums.",
    )
    show_base_type_inheritance: bool = Field(
        default=False,
        description="Walk the whole base type chain instead of the direct base.",
    )
    show_symbol_location: bool = Field(
        default=True,
        description="Assembly/module name and extension method context.",
    )
    show_type_parameters: bool = Field(default=True, description="Generic type argument bindings.")
    show_interface_implementations: bool = Field(
        default=True,
        description="Interfaces a member implements, implicitly or explicitly.",
    )
    show_string_info: bool = Field(default=True, description="Length and hash of string constants.")
    show_returns_doc: bool = Field(default=False, description="Append the 'returns' documentation.")
    show_parameter_info: bool = Field(
        default=True,
        description="Which parameter the argument at the cursor binds to.",
    )
    override_documentation: bool = Field(
        default=False,
        description="Render the symbol's documentation with styled cross references.",
    )
    documentation_from_base_type: bool = Field(
        default=False,
        description="Fall back to documentation of overridden or implemented members.",
    )
    hide_original_quick_info: bool = Field(
        default=False,
        description="Clear fragments already in the sink before composing.",
    )


class SymbolTipConfig(BaseModel):
    """Root configuration for SymbolTip.

    All settings can be configured via:
    1. Environment variables: SYMBOLTIP__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    quick_info: QuickInfoFlags = Field(default_factory=QuickInfoFlags)
