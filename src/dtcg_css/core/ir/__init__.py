"""
dtcg-css Intermediate Representation (IR) types.

Tokens, mode axes, and build configuration. All types are re-exported from
this package.
"""

from .config import (
    CATEGORIES,
    BuildConfig,
    BuildSettings,
    ColorModeStrategy,
    CssSettings,
    Environment,
    FigmaSettings,
    LogLevel,
    TierConfig,
)
from .modes import (
    BREAKPOINTS,
    COLOR_MODES,
    CONTRAST_MODES,
    Breakpoint,
    ModeAxis,
    breakpoint_axis,
)
from .tokens import (
    DEFAULT_VARIANT,
    PRIMITIVE_TYPOGRAPHY_TYPES,
    ColorValue,
    Token,
    TokenType,
    is_color_value,
    is_dimension_value,
)

__all__ = [
    # Config
    "CATEGORIES",
    "BuildConfig",
    "BuildSettings",
    "ColorModeStrategy",
    "CssSettings",
    "Environment",
    "FigmaSettings",
    "LogLevel",
    "TierConfig",
    # Modes
    "BREAKPOINTS",
    "COLOR_MODES",
    "CONTRAST_MODES",
    "Breakpoint",
    "ModeAxis",
    "breakpoint_axis",
    # Tokens
    "DEFAULT_VARIANT",
    "PRIMITIVE_TYPOGRAPHY_TYPES",
    "ColorValue",
    "Token",
    "TokenType",
    "is_color_value",
    "is_dimension_value",
]
