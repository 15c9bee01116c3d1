"""
Token value resolution.

Turns one token into CSS-ready text, either as a fully resolved literal or
with references preserved as custom property calls. References are
substituted structurally: the authored and resolved values are walked in
lockstep and each reference node is replaced at its own position, so two
references inside one composite value never interfere with each other.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.ir.tokens import Token
from dtcg_css.core.references import (
    REFERENCE_PATTERN,
    alias_target,
    is_reference,
    uses_references,
)

from .transforms import (
    format_font_family,
    format_literal,
    is_shadow_value,
)

REFERENCE_FORMAT = "var(--{name})"


@dataclass(frozen=True)
class ReferenceContext:
    """Passed to an output-references predicate."""

    dictionary: Dictionary
    uses_dtcg: bool = True


OutputReferences: TypeAlias = bool | Callable[[Token, ReferenceContext], bool]


@dataclass(frozen=True)
class RenderOptions:
    """Settings shared by every category renderer."""

    selector: str = ":root"
    prefix: str | None = None
    output_references: OutputReferences = True
    uses_dtcg: bool = True
    reference_format: str = REFERENCE_FORMAT

    def value(self, token: Token, dictionary: Dictionary) -> str:
        return resolve_value(
            token,
            dictionary,
            self.output_references,
            self.uses_dtcg,
            self.reference_format,
        )


def should_output_references(
    token: Token,
    dictionary: Dictionary,
    output_references: OutputReferences,
    uses_dtcg: bool = True,
) -> bool:
    """True if *token* has references and the policy wants them kept."""
    if not uses_references(token.original_value):
        return False
    if callable(output_references):
        return bool(output_references(token, ReferenceContext(dictionary, uses_dtcg)))
    return bool(output_references)


def resolve_value(
    token: Token,
    dictionary: Dictionary,
    output_references: OutputReferences = True,
    uses_dtcg: bool = True,
    reference_format: str = REFERENCE_FORMAT,
) -> str:
    """
    Produce the CSS value text for a token.

    Args:
        token: Token to render
        dictionary: Dictionary used for reference lookups
        output_references: Keep references as ``var()`` calls (bool or predicate)
        uses_dtcg: Which value convention the source tree used; passed on to
            predicates only
        reference_format: Template for a preserved reference

    Returns:
        CSS value text

    Raises:
        MissingReferenceError: If a reference target is not in the dictionary
    """
    if should_output_references(token, dictionary, output_references, uses_dtcg):
        substitutor = _ReferenceSubstitutor(dictionary, token, reference_format)
        return substitutor.render(token.original_value, token.value)
    return format_literal(token.value, token.type)


class _ReferenceSubstitutor:
    def __init__(self, dictionary: Dictionary, token: Token, reference_format: str):
        self._dictionary = dictionary
        self._token = token
        self._format = reference_format

    def render(self, original: Any, resolved: Any) -> str:
        if not uses_references(original):
            return format_literal(resolved, self._token.type)
        if isinstance(original, str):
            return self._render_string(original)
        if isinstance(original, dict) and isinstance(resolved, dict):
            return self._render_mapping(original, resolved)
        if isinstance(original, list) and isinstance(resolved, list):
            return self._render_sequence(original, resolved)
        # Authored and resolved shapes disagree; fall back to the literal
        return format_literal(resolved, self._token.type)

    def _reference(self, reference: str) -> str:
        target = self._dictionary.lookup(reference, self._token)
        return self._format.replace("{name}", target.name)

    def _render_string(self, original: str) -> str:
        if is_reference(original):
            return self._reference(alias_target(original))
        return REFERENCE_PATTERN.sub(lambda m: self._reference(m.group(1).strip()), original)

    def _render_mapping(self, original: dict[str, Any], resolved: dict[str, Any]) -> str:
        parts = {key: self.render(original.get(key, value), value) for key, value in resolved.items()}
        if is_shadow_value(resolved):
            text = " ".join(
                parts[key] for key in ("offsetX", "offsetY", "blur", "spread", "color") if key in parts
            )
            return f"inset {text}" if resolved.get("inset") else text
        return "{" + ",".join(f"{key}:{text}" for key, text in parts.items()) + "}"

    def _render_sequence(self, original: list[Any], resolved: list[Any]) -> str:
        if len(original) != len(resolved):
            return format_literal(resolved, self._token.type)
        rendered = [self.render(o, r) for o, r in zip(original, resolved, strict=True)]
        if self._token.type == "fontFamily":
            return format_font_family(rendered)
        return ", ".join(rendered)
