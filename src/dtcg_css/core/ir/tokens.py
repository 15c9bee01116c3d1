"""
Token IR types.

A Token is one flattened leaf of a DTCG token tree. Both historical value
conventions (``$value`` and ``value``) are normalized by the loader, so every
renderer sees a single representation: ``value`` holds the fully resolved
value and ``original_value`` the authored one, which may contain references.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class TokenType(StrEnum):
    """Token categories the CSS renderers know about."""

    COLOR = "color"
    DIMENSION = "dimension"
    TYPOGRAPHY = "typography"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    FONT_STYLE = "fontStyle"
    ASSET = "asset"
    GRID = "grid"
    DURATION = "duration"
    SHADOW = "shadow"


# Token types emitted as flat custom properties in the typography file
PRIMITIVE_TYPOGRAPHY_TYPES: frozenset[str] = frozenset(
    {TokenType.FONT_FAMILY, TokenType.FONT_WEIGHT, TokenType.FONT_STYLE}
)

DEFAULT_VARIANT = "default"


# =============================================================================
# Values
# =============================================================================


class ColorValue(BaseModel):
    """Structured DTCG color value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    color_space: str = Field(alias="colorSpace", description="CSS color space name")
    components: list[float | str] = Field(description="Channel values, 'none' allowed")
    alpha: float = Field(default=1.0, description="Opacity (0-1)")


def is_color_value(value: Any) -> bool:
    return isinstance(value, dict) and "colorSpace" in value and "components" in value


def is_dimension_value(value: Any) -> bool:
    return isinstance(value, dict) and set(value) == {"value", "unit"}


# =============================================================================
# Token
# =============================================================================


class Token(BaseModel):
    """
    A single resolved design token.

    Example:
        Token(
            path=("color", "dark", "surface"),
            name="color-dark-surface",
            type="color",
            value={"colorSpace": "srgb", "components": [0, 0, 0]},
            original_value="{palette.black}",
            mode="dark",
        )
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(description="Path segments, root to leaf")
    name: str = Field(description="Flattened kebab-case identifier")
    type: str | None = Field(default=None, description="DTCG $type")
    value: Any = Field(default=None, description="Fully resolved value")
    original_value: Any = Field(default=None, description="Authored value before resolution")
    mode: str | None = Field(default=None, description="Mode value from $extensions.mode")
    description: str | None = Field(default=None, description="DTCG $description")
    extensions: dict[str, Any] = Field(default_factory=dict, description="DTCG $extensions")
    source: str | None = Field(default=None, description="File the token was loaded from")

    @property
    def is_default_variant(self) -> bool:
        return bool(self.path) and self.path[-1] == DEFAULT_VARIANT

    @property
    def group_path(self) -> tuple[str, ...]:
        return self.path[:-1]

    def with_value(self, value: Any, original_value: Any) -> Token:
        """Return a copy carrying a different value pair."""
        return self.model_copy(update={"value": value, "original_value": original_value})
