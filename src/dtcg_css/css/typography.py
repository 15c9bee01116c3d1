"""
Typography expansion.

Composite typography tokens become one utility class each, with one
declaration per sub-property. A variant (``bold``, ``italic``...) inherits
every sub-property it does not define from the ``default`` token of the
same group, so variants only need to author their differences.

Primitive typography tokens (font families, weights, styles and other
values under the ``typography`` group) become plain custom properties.
"""

from __future__ import annotations

import re
from typing import Any

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.ir.tokens import PRIMITIVE_TYPOGRAPHY_TYPES, Token, TokenType

from .blocks import Comment, CssBlock, Declaration, custom_property
from .modes import strip_mode_from_path
from .values import RenderOptions

# Sub-property -> CSS property, in emission order
TYPOGRAPHY_PROPERTIES: dict[str, str] = {
    "fontFamily": "font-family",
    "fontSize": "font-size",
    "fontWeight": "font-weight",
    "lineHeight": "line-height",
    "letterSpacing": "letter-spacing",
    "fontStyle": "font-style",
    "textDecoration": "text-decoration",
    "letterCase": "font-variant-caps",
    "figureStyle": "font-variant-numeric",
    "fontPosition": "vertical-align",
}

# Token type each sub-value is formatted as
_SUB_PROPERTY_TYPES: dict[str, str] = {
    "fontFamily": TokenType.FONT_FAMILY,
    "fontSize": TokenType.DIMENSION,
    "fontWeight": TokenType.FONT_WEIGHT,
    "letterSpacing": TokenType.DIMENSION,
    "fontStyle": TokenType.FONT_STYLE,
}

_CATEGORY_PREFIX = re.compile(r"^(?:.*?-)?typography-")
_HEADING_LEVEL = re.compile(r"^\d+$")


def is_composite_typography(token: Token) -> bool:
    return token.type == TokenType.TYPOGRAPHY and isinstance(token.value, dict)


def is_primitive_typography(token: Token) -> bool:
    if token.type in PRIMITIVE_TYPOGRAPHY_TYPES:
        return True
    return bool(token.path) and token.path[0] == "typography" and token.type != TokenType.TYPOGRAPHY


def class_name(token: Token) -> str:
    """Utility class name: the flattened name without its category prefix."""
    return _CATEGORY_PREFIX.sub("", token.name, count=1)


# =============================================================================
# Default-variant inheritance
# =============================================================================


def _variant_path(token: Token) -> tuple[str, ...]:
    return strip_mode_from_path(token, token.mode) if token.mode else token.path


DefaultKey = tuple[tuple[str, ...], str | None]


def default_variant_index(tokens: list[Token]) -> dict[DefaultKey, Token]:
    """Map (group path, mode) -> that group's ``default`` composite typography token.

    Defaults authored for different modes of one group are kept apart.
    """
    index: dict[DefaultKey, Token] = {}
    for token in tokens:
        path = _variant_path(token)
        if is_composite_typography(token) and path[-1] == "default":
            index[(path[:-1], token.mode)] = token
    return index


def _authored_mapping(token: Token) -> dict[str, Any]:
    if isinstance(token.original_value, dict):
        return token.original_value
    # An alias to another composite: inherit its resolved sub-values
    return token.value


def merge_with_default(token: Token, defaults: dict[DefaultKey, Token]) -> Token:
    """Return *token* with missing sub-properties filled from its group default.

    A mode-tagged variant takes the default of its own mode, then an untagged one.
    """
    path = _variant_path(token)
    if path[-1] == "default":
        return token
    group = path[:-1]
    default = defaults.get((group, token.mode)) or defaults.get((group, None))
    if default is None or not isinstance(default.value, dict) or not isinstance(token.value, dict):
        return token
    return token.with_value(
        {**default.value, **token.value},
        {**_authored_mapping(default), **_authored_mapping(token)},
    )


# =============================================================================
# Expansion
# =============================================================================


def expand_typography(
    token: Token, dictionary: Dictionary, options: RenderOptions
) -> list[Declaration]:
    """One declaration per present sub-property, each resolved independently."""
    value = token.value if isinstance(token.value, dict) else {}
    authored = _authored_mapping(token) if isinstance(token.value, dict) else {}
    declarations: list[Declaration] = []
    for sub_property, css_property in TYPOGRAPHY_PROPERTIES.items():
        sub_value = value.get(sub_property)
        if sub_value is None or sub_value == "":
            continue
        sub_token = token.model_copy(
            update={
                "value": sub_value,
                "original_value": authored.get(sub_property, sub_value),
                "type": _SUB_PROPERTY_TYPES.get(sub_property, token.type),
            }
        )
        declarations.append(Declaration(css_property, options.value(sub_token, dictionary)))
    return declarations


def semantic_element(token: Token) -> str | None:
    """HTML element selector a heading token also styles, if any."""
    path = _variant_path(token)
    if "heading" not in path:
        return None
    if path[-1] == "display":
        return "h1.display"
    if _HEADING_LEVEL.match(path[-1]):
        return f"h{path[-1]}"
    return None


def render_typography(
    tokens: list[Token],
    dictionary: Dictionary,
    options: RenderOptions,
    semantic_elements: bool = False,
) -> list[CssBlock | Comment]:
    """
    Render the typography category.

    Args:
        tokens: Candidate tokens (typography composites and primitives)
        dictionary: Dictionary for reference lookups and default variants
        options: Shared render options
        semantic_elements: Also emit heading element rules

    Returns:
        Document items; empty when the category has no tokens
    """
    primitives = [t for t in tokens if is_primitive_typography(t)]
    composites = [t for t in tokens if is_composite_typography(t)]
    items: list[CssBlock | Comment] = []

    if primitives:
        items.append(
            CssBlock(
                options.selector,
                [custom_property(t.name, options.value(t, dictionary)) for t in primitives],
            )
        )

    if not composites:
        return items

    defaults = default_variant_index(dictionary.all_tokens)
    expanded = [
        (token, expand_typography(merge_with_default(token, defaults), dictionary, options))
        for token in composites
    ]

    if semantic_elements:
        elements = [
            CssBlock(element, declarations)
            for token, declarations in expanded
            if (element := semantic_element(token)) is not None
        ]
        if elements:
            items.append(Comment("Semantic HTML elements"))
            items.extend(elements)

    items.append(Comment("Typography utility classes"))
    items.extend(CssBlock(f".{class_name(token)}", declarations) for token, declarations in expanded)
    return items
