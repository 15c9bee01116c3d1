"""
Color mode rendering.

Two strategies combine light and dark color tokens in one document:

- light-dark-function: one ``light-dark(<light>, <dark>)`` declaration per
  logical property, all in the root block.
- media-query: light values in the root block, dark values in a single
  ``prefers-color-scheme: dark`` block.
"""

from __future__ import annotations

import logging

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.ir.config import ColorModeStrategy
from dtcg_css.core.ir.modes import COLOR_MODES, PREFERS_DARK, ModeAxis
from dtcg_css.core.ir.tokens import Token, TokenType

from .blocks import Declaration, RenderResult, custom_property, media_block
from .modes import group_tokens_by_mode, index_by_normalized_name
from .values import RenderOptions

logger = logging.getLogger(__name__)


def _light_and_dark(axis: ModeAxis) -> tuple[str, str]:
    dark = next(value for value in axis.values if value != axis.default)
    return axis.default, dark


def _unmoded_declarations(
    tokens: list[Token], dictionary: Dictionary, options: RenderOptions
) -> list[Declaration]:
    return [custom_property(t.name, options.value(t, dictionary)) for t in tokens]


def render_light_dark_function(
    tokens: list[Token],
    dictionary: Dictionary,
    options: RenderOptions,
    axis: ModeAxis = COLOR_MODES,
) -> RenderResult:
    """Pair light/dark siblings into ``light-dark()`` declarations."""
    light_mode, dark_mode = _light_and_dark(axis)
    groups = group_tokens_by_mode(tokens, axis)

    root = _unmoded_declarations(groups.unmoded, dictionary, options)
    light = index_by_normalized_name(groups.get(light_mode), light_mode, options.prefix)
    dark = index_by_normalized_name(groups.get(dark_mode), dark_mode, options.prefix)

    for name, light_token in light.items():
        light_value = options.value(light_token, dictionary)
        dark_token = dark.get(name)
        if dark_token is None:
            root.append(custom_property(name, light_value))
            continue
        dark_value = options.value(dark_token, dictionary)
        root.append(custom_property(name, f"light-dark({light_value}, {dark_value})"))

    for name, dark_token in dark.items():
        if name not in light:
            root.append(custom_property(name, options.value(dark_token, dictionary)))

    return RenderResult(root=root)


def render_media_query(
    tokens: list[Token],
    dictionary: Dictionary,
    options: RenderOptions,
    axis: ModeAxis = COLOR_MODES,
) -> RenderResult:
    """Light values in the root block, dark values behind ``prefers-color-scheme``."""
    light_mode, dark_mode = _light_and_dark(axis)
    groups = group_tokens_by_mode(tokens, axis)

    root = _unmoded_declarations(groups.unmoded, dictionary, options)
    light = index_by_normalized_name(groups.get(light_mode), light_mode, options.prefix)
    root.extend(custom_property(name, options.value(t, dictionary)) for name, t in light.items())

    result = RenderResult(root=root)
    dark = index_by_normalized_name(groups.get(dark_mode), dark_mode, options.prefix)
    if dark:
        declarations = [custom_property(name, options.value(t, dictionary)) for name, t in dark.items()]
        result.conditional.append(media_block(PREFERS_DARK, options.selector, declarations))
    return result


def render_color_modes(
    tokens: list[Token],
    dictionary: Dictionary,
    options: RenderOptions,
    strategy: ColorModeStrategy = ColorModeStrategy.LIGHT_DARK_FUNCTION,
    axis: ModeAxis = COLOR_MODES,
) -> RenderResult:
    """
    Render color tokens with the configured strategy.

    Non-color tokens in *tokens* are ignored.

    Args:
        tokens: Candidate tokens
        dictionary: Dictionary for reference lookups
        options: Shared render options
        strategy: Light/dark combination strategy
        axis: Color mode axis (default value is the light mode)

    Returns:
        Root declarations and conditional blocks
    """
    colors = [t for t in tokens if t.type == TokenType.COLOR]
    logger.debug("Rendering %d color tokens with %s", len(colors), strategy)
    if strategy == ColorModeStrategy.MEDIA_QUERY:
        return render_media_query(colors, dictionary, options, axis)
    return render_light_dark_function(colors, dictionary, options, axis)
