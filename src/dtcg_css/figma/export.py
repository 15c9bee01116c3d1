"""
Design-tool JSON export.

Two documents are written per tier:

- ``tokens.json``: the token tree with ``{$type, $value}`` leaves; a leaf
  keeps its authored reference when it has one, otherwise the resolved value.
- ``typography.json``: the same tree shaped for Tokens Studio. Dimension
  tokens and unsupported typography primitives are dropped, font types are
  renamed, variants inherit from their group default, and the default of
  every text style is combined with each standalone modifier.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.fileset import atomic_write
from dtcg_css.core.ir.tokens import DEFAULT_VARIANT, Token, TokenType
from dtcg_css.core.loader import keys_for
from dtcg_css.core.references import alias_target, is_reference, uses_references

logger = logging.getLogger(__name__)

TOKENS_FILE = "tokens.json"
TYPOGRAPHY_FILE = "typography.json"

# Typography sub-properties Tokens Studio does not support
UNSUPPORTED_PROPERTIES = ("figureStyle", "fontPosition")

# Primitive groups not used as Figma variables
EXCLUDED_SEGMENTS = frozenset(
    {"figureStyle", "fontPosition", "fontStyle", "textDecoration", "letterCase"}
)

TEXT_DECORATIONS = {
    "underline solid": "underline",
    "line-through": "strike-through",
}

FONT_WEIGHT_NAMES: dict[str, str] = {
    "100": "Thin",
    "200": "Extra Light",
    "300": "Light",
    "400": "Regular",
    "500": "Medium",
    "600": "Semibold",
    "700": "Bold",
    "800": "Extra Bold",
    "900": "Black",
    "950": "Extra Black",
    "thin": "Thin",
    "extraLight": "Extra Light",
    "light": "Light",
    "regular": "Regular",
    "medium": "Medium",
    "semiBold": "Semibold",
    "bold": "Bold",
    "extraBold": "Extra Bold",
    "black": "Black",
}

BASE_STYLE_PROPERTIES = ("fontFamily", "fontSize", "fontWeight", "lineHeight", "letterSpacing")

WEIGHT_GROUP = ("typography", "weight")
TEXT_GROUP = ("typography", "text")


def output_value(token: Token) -> Any:
    """The authored value when it uses references, otherwise the resolved one."""
    if token.original_value is not None and uses_references(token.original_value):
        return token.original_value
    return token.value


def _insert(tree: dict[str, Any], path: tuple[str, ...], leaf: dict[str, Any]) -> None:
    node = tree
    for segment in path[:-1]:
        node = node.setdefault(segment, {})
    node[path[-1]] = leaf


# =============================================================================
# Nested references
# =============================================================================


def nested_references_document(
    tokens: Iterable[Token], use_dtcg: bool = True
) -> dict[str, Any]:
    """Token tree with ``{type, value}`` leaves preserving references."""
    keys = keys_for(use_dtcg)
    document: dict[str, Any] = {}
    for token in tokens:
        _insert(document, token.path, {keys.type: token.type, keys.value: output_value(token)})
    return document


# =============================================================================
# Figma typography
# =============================================================================


def _text_decoration(value: Any) -> Any:
    if isinstance(value, str):
        return TEXT_DECORATIONS.get(value, value)
    return value


def _resolve_literal(value: Any, dictionary: Dictionary) -> Any:
    if is_reference(value):
        target = dictionary.get(alias_target(value))
        if target is not None:
            return target.value
    return value


def figma_compatible(value: dict[str, Any], dictionary: Dictionary) -> dict[str, Any]:
    """Rename and resolve typography sub-properties for Tokens Studio."""
    converted = {k: v for k, v in value.items() if k not in UNSUPPORTED_PROPERTIES}
    if "letterCase" in converted:
        converted["textCase"] = _resolve_literal(converted.pop("letterCase"), dictionary)
    if "textDecoration" in converted:
        converted["textDecoration"] = _text_decoration(
            _resolve_literal(converted["textDecoration"], dictionary)
        )
    return converted


def _is_base_style(value: Any) -> bool:
    return isinstance(value, dict) and all(p in value for p in BASE_STYLE_PROPERTIES)


def _is_modifier(value: Any) -> bool:
    return isinstance(value, dict) and len(value) <= 3 and not _is_base_style(value)


def _is_leaf(node: Any, keys_value: str) -> bool:
    return isinstance(node, dict) and keys_value in node


def _font_weight_name(value: Any) -> Any:
    if isinstance(value, bool) or is_reference(value):
        return value
    return FONT_WEIGHT_NAMES.get(str(value), str(value))


class FigmaTypographyExporter:
    """Builds the Tokens Studio typography document for one dictionary."""

    def __init__(self, dictionary: Dictionary, use_dtcg: bool = True):
        self.dictionary = dictionary
        self.keys = keys_for(use_dtcg)

    def leaf(self, type_: str | None, value: Any) -> dict[str, Any]:
        return {self.keys.type: type_, self.keys.value: value}

    def _variant_value(self, token: Token) -> Any:
        value = output_value(token)
        if token.is_default_variant or not isinstance(value, dict) or len(token.path) < 2:
            return value
        default = self.dictionary.get(token.group_path + (DEFAULT_VARIANT,))
        if default is None:
            return value
        default_value = output_value(default)
        if isinstance(default_value, dict):
            return {**default_value, **value}
        return value

    def entry(self, token: Token) -> dict[str, Any] | None:
        """Leaf for *token*, or None when the token is not exported."""
        if token.type == TokenType.DIMENSION:
            return None
        if EXCLUDED_SEGMENTS.intersection(token.path):
            return None

        if token.type == TokenType.FONT_FAMILY:
            value = output_value(token)
            if isinstance(value, list):
                value = value[0] if value else ""
            return self.leaf("fontFamilies", value)

        if token.type == TokenType.FONT_WEIGHT:
            value = output_value(token)
            if token.path[:2] == WEIGHT_GROUP:
                value = _font_weight_name(value)
            return self.leaf("fontWeights", value)

        if token.type == TokenType.TYPOGRAPHY:
            value = self._variant_value(token)
            if isinstance(value, dict):
                value = figma_compatible(value, self.dictionary)
                if not value:
                    return None
            return self.leaf(token.type, value)

        return self.leaf(token.type, _text_decoration(output_value(token)))

    def _italic_weights(self, document: dict[str, Any]) -> None:
        weights = document.get(WEIGHT_GROUP[0], {}).get(WEIGHT_GROUP[1])
        if not isinstance(weights, dict):
            return
        for name, leaf in list(weights.items()):
            if not _is_leaf(leaf, self.keys.value):
                continue
            weights[f"{name}Italic"] = self.leaf("fontWeights", f"{leaf[self.keys.value]} Italic")

    def _italic_value(self, base: dict[str, Any]) -> dict[str, Any]:
        combined = dict(base)
        weight = combined.get("fontWeight")
        prefix = "{" + ".".join(WEIGHT_GROUP) + "."
        if isinstance(weight, str) and weight.startswith(prefix) and weight.endswith("}"):
            combined["fontWeight"] = weight[:-1] + "Italic}"
        combined.pop("fontStyle", None)
        return combined

    def _combinations(self, document: dict[str, Any]) -> None:
        text = document.get(TEXT_GROUP[0], {}).get(TEXT_GROUP[1])
        if not isinstance(text, dict):
            return
        value_key = self.keys.value
        modifiers = {
            name: node[value_key]
            for name, node in text.items()
            if _is_leaf(node, value_key) and _is_modifier(node[value_key])
        }
        styles: dict[str, Any] = {}
        for name, group in text.items():
            if _is_leaf(group, value_key) or not isinstance(group, dict):
                continue
            if DEFAULT_VARIANT not in group:
                continue
            combined_group = dict(group)
            base = group[DEFAULT_VARIANT].get(value_key)
            if isinstance(base, dict):
                for modifier_name, modifier in modifiers.items():
                    if modifier_name == "italic" and "fontStyle" in modifier:
                        value = self._italic_value(base)
                    else:
                        value = {**base, **modifier}
                    combined_group[modifier_name] = self.leaf(TokenType.TYPOGRAPHY, value)
            styles[name] = combined_group
        document[TEXT_GROUP[0]][TEXT_GROUP[1]] = styles

    def document(self, tokens: Iterable[Token]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for token in tokens:
            leaf = self.entry(token)
            if leaf is not None:
                _insert(result, token.path, leaf)
        self._italic_weights(result)
        self._combinations(result)
        return _prune(result, self.keys.value)


def _prune(node: dict[str, Any], value_key: str) -> dict[str, Any]:
    """Drop groups left empty after filtering."""
    pruned: dict[str, Any] = {}
    for key, child in node.items():
        if isinstance(child, dict) and not _is_leaf(child, value_key):
            child = _prune(child, value_key)
            if not child:
                continue
        pruned[key] = child
    return pruned


def figma_typography_document(
    dictionary: Dictionary, tokens: Iterable[Token] | None = None, use_dtcg: bool = True
) -> dict[str, Any]:
    """Tokens Studio typography document for *tokens* (default: every token)."""
    exporter = FigmaTypographyExporter(dictionary, use_dtcg)
    return exporter.document(tokens if tokens is not None else dictionary.all_tokens)


# =============================================================================
# Files
# =============================================================================


def _dumps(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def export_figma_files(
    dictionary: Dictionary,
    tokens: list[Token],
    output_dir: Path,
    use_dtcg: bool = True,
) -> list[Path]:
    """Write ``tokens.json`` and ``typography.json`` into *output_dir*.

    Args:
        dictionary: Dictionary holding every token for lookups
        tokens: Tokens to export
        output_dir: Target directory (created if missing)
        use_dtcg: Emit ``$type``/``$value`` keys

    Returns:
        Paths of the written files.
    """
    tokens_path = output_dir / TOKENS_FILE
    typography_path = output_dir / TYPOGRAPHY_FILE
    atomic_write(tokens_path, _dumps(nested_references_document(tokens, use_dtcg)))
    atomic_write(
        typography_path, _dumps(figma_typography_document(dictionary, tokens, use_dtcg))
    )
    logger.info("Exported Figma tokens to %s", output_dir)
    return [tokens_path, typography_path]
