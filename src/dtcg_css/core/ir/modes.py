"""
Mode axis definitions.

Process-wide, read-only tables: the color scheme axis, the contrast axis,
and the responsive breakpoint axis with its ascending min-width thresholds.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_BARE_NUMBER = re.compile(r"^\d+(?:\.\d+)?$")
_PIXEL_LENGTH = re.compile(r"^\d+(?:\.\d+)?px$")


class ModeAxis(BaseModel):
    """A named dimension of variation for tokens."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Axis name (e.g. 'color', 'dimension')")
    values: tuple[str, ...] = Field(description="Mode values in precedence order")
    default: str = Field(description="Mode applied without any condition")

    @model_validator(mode="after")
    def _default_is_a_value(self) -> ModeAxis:
        if self.default not in self.values:
            raise ValueError(f"Default mode '{self.default}' is not one of {self.values}")
        return self


class Breakpoint(BaseModel):
    """A responsive mode and the viewport width it starts at."""

    model_config = ConfigDict(frozen=True)

    name: str
    min_width: str = Field(description="Pixel length, e.g. '620px'; bare numbers get 'px'")

    @field_validator("min_width", mode="before")
    @classmethod
    def _pixel_length(cls, value: Any) -> str:
        if isinstance(value, int | float) and not isinstance(value, bool):
            value = f"{int(value) if float(value).is_integer() else value}px"
        elif isinstance(value, str) and _BARE_NUMBER.match(value.strip()):
            value = f"{value.strip()}px"
        if not isinstance(value, str) or not _PIXEL_LENGTH.match(value.strip()):
            raise ValueError(f"Breakpoint width must be a px length, got {value!r}")
        return value.strip()

    @property
    def pixels(self) -> float:
        return float(self.min_width.removesuffix("px"))


COLOR_MODES = ModeAxis(name="color", values=("light", "dark"), default="light")

CONTRAST_MODES = ModeAxis(
    name="contrast", values=("normalContrast", "highContrast"), default="normalContrast"
)

# Ascending; the first entry is the mobile-first default.
BREAKPOINTS: tuple[Breakpoint, ...] = (
    Breakpoint(name="small", min_width="460px"),
    Breakpoint(name="medium", min_width="620px"),
    Breakpoint(name="large", min_width="1036px"),
    Breakpoint(name="xLarge", min_width="1681px"),
)


def breakpoint_axis(breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS) -> ModeAxis:
    """Build the dimension mode axis from an ascending breakpoint table."""
    ordered = sorted(breakpoints, key=lambda bp: bp.pixels)
    return ModeAxis(
        name="dimension",
        values=tuple(bp.name for bp in ordered),
        default=ordered[0].name,
    )


# data-* attribute values used by the layered index
THEME_ATTRIBUTE = "data-theme"
CONTRAST_ATTRIBUTE = "data-contrast"
CONTRAST_ATTRIBUTE_VALUES: dict[str, str] = {
    "normalContrast": "normal",
    "highContrast": "high",
}

PREFERS_DARK = "(prefers-color-scheme: dark)"
PREFERS_MORE_CONTRAST = "(prefers-contrast: more)"
