"""Configuration constants.

Values here are fixed behavior of the composer, not user settings. For the
configurable toggles see models.py (QuickInfoFlags).
"""

# =============================================================================
# Argument resolution
# =============================================================================

ARGUMENT_ANCESTOR_HOPS = 4
"""Ancestor levels searched for an enclosing argument node.

A deliberate bound: arguments wrapped deeper than this (casts, parentheses,
member accesses) are not attributed to a call.
"""

NAMEOF_KEYWORD = "nameof"
"""Identity-style pseudo call whose single argument never gets argument info."""

# =============================================================================
# Type rendering
# =============================================================================

COMMON_BASE_CLASS_NAMES = frozenset({"Object", "ValueType", "Enum", "MulticastDelegate"})
"""Base classes omitted from base type chains."""

DISPOSABLE_INTERFACE_NAME = "IDisposable"
"""Listed first in interface fragments."""

FLAGS_ATTRIBUTE_NAME = "System.FlagsAttribute"
"""Marker attribute of flags-style enums."""

ATTRIBUTE_SUFFIX = "Attribute"
"""Stripped from attribute class names when rendering."""

DELEGATE_INVOKE_METHOD_NAME = "Invoke"

# =============================================================================
# Miscellaneous fragments
# =============================================================================

BLOCK_LINES_EMPHASIS_THRESHOLD = 100
"""Blocks longer than this render their line count in bold."""
