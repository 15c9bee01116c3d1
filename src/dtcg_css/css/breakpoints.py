"""
Responsive breakpoint rendering for dimension tokens.

Mobile first: the smallest breakpoint's values (and unmoded dimensions) go
in the root block, and each larger breakpoint that has tokens gets one
``min-width`` media query, in ascending order so larger widths win.
"""

from __future__ import annotations

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.ir.modes import BREAKPOINTS, Breakpoint, breakpoint_axis
from dtcg_css.core.ir.tokens import Token, TokenType

from .blocks import RenderResult, custom_property, media_block
from .modes import group_tokens_by_mode, index_by_normalized_name
from .values import RenderOptions


def ordered_breakpoints(breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS) -> list[Breakpoint]:
    return sorted(breakpoints, key=lambda bp: bp.pixels)


def render_breakpoints(
    tokens: list[Token],
    dictionary: Dictionary,
    options: RenderOptions,
    breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS,
) -> RenderResult:
    """
    Render dimension tokens into a base block plus ascending media queries.

    Non-dimension tokens in *tokens* are ignored.
    """
    axis = breakpoint_axis(breakpoints)
    groups = group_tokens_by_mode([t for t in tokens if t.type == TokenType.DIMENSION], axis)

    result = RenderResult(
        root=[custom_property(t.name, options.value(t, dictionary)) for t in groups.unmoded]
    )
    base = index_by_normalized_name(groups.get(axis.default), axis.default, options.prefix)
    result.root.extend(custom_property(name, options.value(t, dictionary)) for name, t in base.items())

    for breakpoint in ordered_breakpoints(breakpoints):
        if breakpoint.name == axis.default:
            continue
        bucket = index_by_normalized_name(groups.get(breakpoint.name), breakpoint.name, options.prefix)
        if not bucket:
            continue
        declarations = [custom_property(name, options.value(t, dictionary)) for name, t in bucket.items()]
        result.conditional.append(
            media_block(f"(min-width: {breakpoint.min_width})", options.selector, declarations)
        )
    return result
