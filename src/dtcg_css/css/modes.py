"""
Mode classification and name normalization.

Tokens carry their mode as explicit metadata (``$extensions.mode``).
Classification reads only that metadata; it never guesses from names.
The normalized name of a mode-tagged token is its path with the mode
segment removed, which is the key that pairs light/dark or breakpoint
siblings of one logical property.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dtcg_css.core.errors import TokenError
from dtcg_css.core.ir.modes import ModeAxis
from dtcg_css.core.ir.tokens import Token
from dtcg_css.core.references import token_name


@dataclass
class TokenGroups:
    """Tokens bucketed by mode value, plus the tokens with no mode."""

    by_mode: dict[str, list[Token]] = field(default_factory=dict)
    unmoded: list[Token] = field(default_factory=list)

    def get(self, mode: str) -> list[Token]:
        return self.by_mode.get(mode, [])


def group_tokens_by_mode(tokens: list[Token], axis: ModeAxis) -> TokenGroups:
    """
    Partition tokens on one mode axis.

    Buckets are created for every axis value in axis order; tokens keep
    their input order within a bucket. Tokens without mode metadata, or
    with a mode from another axis, land in ``unmoded``.
    """
    groups = TokenGroups(by_mode={value: [] for value in axis.values})
    for token in tokens:
        if token.mode is not None and token.mode in groups.by_mode:
            groups.by_mode[token.mode].append(token)
        else:
            groups.unmoded.append(token)
    return groups


def strip_mode_from_path(token: Token, mode: str) -> tuple[str, ...]:
    """Remove the first path segment equal to *mode*."""
    if mode not in token.path:
        return token.path
    index = token.path.index(mode)
    return token.path[:index] + token.path[index + 1 :]


def normalized_name(token: Token, mode: str | None, prefix: str | None = None) -> str:
    """
    Mode-independent custom property name for *token*.

    Falls back to the token's own name when it has no mode or the mode
    value does not appear in its path.
    """
    if mode is None or mode not in token.path:
        return token.name
    return token_name(strip_mode_from_path(token, mode), prefix)


def strip_modes(token: Token, modes: list[str], prefix: str | None = None) -> str:
    """Normalized name after removing every listed mode segment present in the path.

    Used for per-mode files such as ``dark/highContrast`` where a token can
    sit below more than one mode segment.
    """
    path = token.path
    for mode in modes:
        if mode in path:
            index = path.index(mode)
            path = path[:index] + path[index + 1 :]
    if path == token.path:
        return token.name
    return token_name(path, prefix)


def index_by_normalized_name(
    tokens: list[Token], mode: str, prefix: str | None = None
) -> dict[str, Token]:
    """
    Key tokens of one mode bucket by normalized name.

    Raises:
        TokenError: If two tokens collapse onto the same name.
    """
    indexed: dict[str, Token] = {}
    for token in tokens:
        name = normalized_name(token, mode, prefix)
        if name in indexed:
            raise TokenError(
                f"Tokens {'.'.join(indexed[name].path)} and {'.'.join(token.path)} "
                f"both normalize to '{name}' in mode '{mode}'"
            )
        indexed[name] = token
    return indexed
