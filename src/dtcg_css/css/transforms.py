"""
Literal value formatters.

Turn resolved DTCG values (structured colors, dimensions, font stacks,
shadows) into CSS text. Nothing here knows about references.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from dtcg_css.core.ir.tokens import ColorValue, is_color_value, is_dimension_value

logger = logging.getLogger(__name__)


def format_number(value: Any) -> str:
    """Format a number the way a JSON reader would print it (16.0 -> 16)."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Colors
# =============================================================================


def _channel(value: float | str) -> str:
    return "none" if value == "none" else format_number(value)


def _alpha_suffix(alpha: float) -> str:
    return f" / {format_number(alpha)}" if alpha != 1 else ""


def _format_srgb(color: ColorValue) -> str:
    r, g, b = (
        "none" if c == "none" else format_number(round(float(c) * 255))
        for c in color.components[:3]
    )
    if color.alpha != 1:
        return f"rgba({r}, {g}, {b}, {format_number(color.alpha)})"
    return f"rgb({r}, {g}, {b})"


def _color_function(space: str) -> Callable[[ColorValue], str]:
    def formatter(color: ColorValue) -> str:
        a, b, c = (_channel(v) for v in color.components[:3])
        return f"color({space} {a} {b} {c}{_alpha_suffix(color.alpha)})"

    return formatter


def _percent_channels(function: str, percent_at: tuple[int, ...]) -> Callable[[ColorValue], str]:
    def formatter(color: ColorValue) -> str:
        channels = []
        for index, value in enumerate(color.components[:3]):
            text = _channel(value)
            if index in percent_at and value != "none":
                text = f"{text}%"
            channels.append(text)
        return f"{function}({' '.join(channels)}{_alpha_suffix(color.alpha)})"

    return formatter


COLOR_SPACE_FORMATTERS: dict[str, Callable[[ColorValue], str]] = {
    "srgb": _format_srgb,
    "srgb-linear": _color_function("srgb-linear"),
    "hsl": _percent_channels("hsl", (1, 2)),
    "hwb": _percent_channels("hwb", (1, 2)),
    "lab": _percent_channels("lab", (0,)),
    "lch": _percent_channels("lch", (0,)),
    "oklab": _percent_channels("oklab", ()),
    "oklch": _percent_channels("oklch", ()),
    "display-p3": _color_function("display-p3"),
    "a98-rgb": _color_function("a98-rgb"),
    "prophoto-rgb": _color_function("prophoto-rgb"),
    "rec2020": _color_function("rec2020"),
    "xyz-d65": _color_function("xyz-d65"),
    "xyz-d50": _color_function("xyz-d50"),
}


def format_color(value: dict[str, Any]) -> str:
    """Format a structured color.

    Unknown color spaces are logged and passed through as raw text so the
    build still completes and the problem stays visible in the output.
    """
    space = value.get("colorSpace")
    formatter = COLOR_SPACE_FORMATTERS.get(space) if isinstance(space, str) else None
    if formatter is None:
        logger.warning("Unsupported color space: %s", space)
        return format_structure(value)
    try:
        color = ColorValue.model_validate(value)
    except ValidationError as e:
        logger.warning("Malformed color value %s: %s", value, e.errors()[0]["msg"])
        return format_structure(value)
    return formatter(color)


# =============================================================================
# Other structured values
# =============================================================================


def format_dimension(value: dict[str, Any]) -> str:
    return f"{format_number(value['value'])}{value['unit']}"


def format_font_family(value: Any) -> str:
    """Join a font stack, quoting family names that contain spaces."""
    if isinstance(value, list):
        return ", ".join(_quote_family(str(v)) for v in value)
    return str(value)


def _quote_family(name: str) -> str:
    if " " in name and not name.startswith(("'", '"')) and not name.startswith("var("):
        return f"'{name}'"
    return name


_SHADOW_PARTS = ("offsetX", "offsetY", "blur", "spread", "color")


def is_shadow_value(value: Any) -> bool:
    return isinstance(value, dict) and {"offsetX", "offsetY", "color"} <= set(value)


def format_shadow(value: dict[str, Any], part: Callable[[Any], str] | None = None) -> str:
    """Format one shadow layer; *part* formats each sub-value."""
    part = part or format_literal
    text = " ".join(part(value[key]) for key in _SHADOW_PARTS if key in value)
    return f"inset {text}" if value.get("inset") else text


def format_structure(value: Any) -> str:
    """Compact JSON text with quotes removed, for values CSS has no syntax for."""
    return json.dumps(value, separators=(",", ":")).replace('"', "")


def format_literal(value: Any, token_type: str | None = None) -> str:
    """Format a fully resolved value as CSS text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int | float):
        return format_number(value)
    if is_color_value(value):
        return format_color(value)
    if is_dimension_value(value):
        return format_dimension(value)
    if is_shadow_value(value):
        return format_shadow(value)
    if isinstance(value, list):
        if token_type == "fontFamily" or all(isinstance(v, str) for v in value):
            return format_font_family(value)
        return ", ".join(format_literal(v, token_type) for v in value)
    return format_structure(value)
