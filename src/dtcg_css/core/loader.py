"""
Token file loading.

Reads DTCG ``*.tokens.json`` files, deep-merges them, delegates group-level
``$type`` and ``$extensions`` to descendant tokens, flattens the tree, and
resolves references. Both the ``$value`` and the legacy ``value`` key
conventions are normalized here so that nothing downstream needs to know
which one a file used.
"""

from __future__ import annotations

import copy
import glob
import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .dictionary import Dictionary
from .errors import ErrorContext, MissingReferenceError, ReferenceCycleError, TokenError
from .ir.tokens import Token, is_dimension_value
from .references import (
    REFERENCE_PATTERN,
    alias_target,
    is_reference,
    reference_path,
    token_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenKeys:
    """Key names for one value-encoding convention."""

    value: str
    type: str
    extensions: str
    description: str


DTCG_KEYS = TokenKeys("$value", "$type", "$extensions", "$description")
LEGACY_KEYS = TokenKeys("value", "type", "extensions", "comment")


def keys_for(use_dtcg: bool) -> TokenKeys:
    return DTCG_KEYS if use_dtcg else LEGACY_KEYS


# =============================================================================
# File discovery and merge
# =============================================================================


def expand_patterns(patterns: Iterable[str], root: Path) -> list[Path]:
    """Expand glob patterns relative to *root*, sorted, without duplicates."""
    files: list[Path] = []
    for pattern in patterns:
        full = pattern if Path(pattern).is_absolute() else str(root / pattern)
        matches = sorted(Path(p) for p in glob.glob(full, recursive=True))
        if not matches:
            logger.info("Note: no token files match %s", pattern)
        for match in matches:
            if match.is_file() and match not in files:
                files.append(match)
    return files


def read_token_file(path: Path) -> dict[str, Any]:
    """Read one token file.

    Raises:
        TokenError: If the file is not valid JSON or not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TokenError(f"Invalid JSON: {e}", ErrorContext(file=path)) from e
    if not isinstance(data, dict):
        raise TokenError("Token file must contain a JSON object", ErrorContext(file=path))
    return data


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge *override* into a copy of *base*; nested groups merge, leaves replace."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# =============================================================================
# Group delegation
# =============================================================================


def delegate_group_properties(tree: dict[str, Any], keys: TokenKeys) -> dict[str, Any]:
    """Push group-level type and extensions down onto each token.

    Child extensions override parent extensions key by key. Group-level
    extensions are removed once delegated.
    """
    clone = copy.deepcopy(tree)

    def recurse(node: dict[str, Any], inherited_type: Any, inherited_ext: dict | None) -> None:
        is_token = keys.value in node
        current_type = node.get(keys.type, inherited_type)
        current_ext = inherited_ext
        if keys.extensions in node and isinstance(node[keys.extensions], dict):
            current_ext = {**(inherited_ext or {}), **node[keys.extensions]}
            if not is_token:
                del node[keys.extensions]

        if is_token:
            if current_type is not None:
                node[keys.type] = current_type
            if current_ext:
                node[keys.extensions] = current_ext
            return

        for name, child in node.items():
            if isinstance(child, dict) and not name.startswith("$"):
                recurse(child, current_type, current_ext)

    recurse(clone, None, None)
    return clone


# =============================================================================
# Flatten
# =============================================================================


@dataclass
class RawToken:
    """Flattened, unresolved token."""

    path: tuple[str, ...]
    type: str | None
    original_value: Any
    extensions: dict[str, Any] = field(default_factory=dict)
    description: str | None = None
    source: str | None = None


def flatten_tree(
    tree: dict[str, Any], keys: TokenKeys, prefix: tuple[str, ...] = ()
) -> list[RawToken]:
    """Walk a delegated tree and collect its tokens in document order."""
    raw: list[RawToken] = []
    for name, node in tree.items():
        if name.startswith("$") or not isinstance(node, dict):
            continue
        path = (*prefix, name)
        if keys.value in node:
            raw.append(
                RawToken(
                    path=path,
                    type=node.get(keys.type),
                    original_value=node[keys.value],
                    extensions=dict(node.get(keys.extensions) or {}),
                    description=node.get(keys.description),
                )
            )
        else:
            raw.extend(flatten_tree(node, keys, path))
    return raw


# =============================================================================
# Resolution
# =============================================================================


def _inline_text(value: Any) -> str:
    """Text used when a reference is embedded inside a longer string."""
    if is_dimension_value(value):
        return f"{value['value']}{value['unit']}"
    return str(value)


class _Resolver:
    def __init__(self, raw_tokens: dict[tuple[str, ...], RawToken]):
        self._raw = raw_tokens
        self._resolved: dict[tuple[str, ...], Any] = {}

    def resolve_token(self, path: tuple[str, ...], chain: list[str]) -> Any:
        if path in self._resolved:
            return self._resolved[path]
        dotted = ".".join(path)
        if dotted in chain:
            raise ReferenceCycleError([*chain, dotted])
        raw = self._raw[path]
        value = self.resolve_value(raw.original_value, [*chain, dotted], raw)
        self._resolved[path] = value
        return value

    def resolve_value(self, value: Any, chain: list[str], owner: RawToken) -> Any:
        if isinstance(value, str):
            if is_reference(value):
                return copy.deepcopy(self._target(alias_target(value), chain, owner))
            if REFERENCE_PATTERN.search(value):
                return REFERENCE_PATTERN.sub(
                    lambda m: _inline_text(self._target(m.group(1).strip(), chain, owner)),
                    value,
                )
            return value
        if isinstance(value, dict):
            return {k: self.resolve_value(v, chain, owner) for k, v in value.items()}
        if isinstance(value, list):
            return [self.resolve_value(v, chain, owner) for v in value]
        return value

    def _target(self, reference: str, chain: list[str], owner: RawToken) -> Any:
        path = reference_path(reference)
        if path not in self._raw:
            context = ErrorContext(file=Path(owner.source)) if owner.source else None
            raise MissingReferenceError(reference, owner.path, context)
        return self.resolve_token(path, chain)


def resolve_tokens(
    raw_tokens: Sequence[RawToken], prefix: str | None = None
) -> list[Token]:
    """Resolve references and build Token objects."""
    by_path = {raw.path: raw for raw in raw_tokens}
    resolver = _Resolver(by_path)
    tokens: list[Token] = []
    for raw in by_path.values():
        mode = raw.extensions.get("mode")
        tokens.append(
            Token(
                path=raw.path,
                name=token_name(raw.path, prefix),
                type=raw.type,
                value=resolver.resolve_token(raw.path, []),
                original_value=raw.original_value,
                mode=mode if isinstance(mode, str) else None,
                description=raw.description,
                extensions=raw.extensions,
                source=raw.source,
            )
        )
    return tokens


# =============================================================================
# Entry points
# =============================================================================


def load_raw_tokens(files: Iterable[Path], use_dtcg: bool = True) -> list[RawToken]:
    """Load, merge and flatten token files; later files override earlier ones."""
    keys = keys_for(use_dtcg)
    merged: dict[str, Any] = {}
    sources: dict[tuple[str, ...], str] = {}
    for path in files:
        data = read_token_file(path)
        merged = deep_merge(merged, data)
        for raw in flatten_tree(delegate_group_properties(data, keys), keys):
            sources[raw.path] = str(path)
        logger.debug("Loaded %s", path)

    raw_tokens = flatten_tree(delegate_group_properties(merged, keys), keys)
    for raw in raw_tokens:
        raw.source = sources.get(raw.path)
    return raw_tokens


def load_dictionary(
    files: Iterable[Path], use_dtcg: bool = True, prefix: str | None = None
) -> Dictionary:
    """Load token files into a resolved Dictionary."""
    return Dictionary(resolve_tokens(load_raw_tokens(files, use_dtcg), prefix))


def load_dictionary_from_data(
    data: dict[str, Any], use_dtcg: bool = True, prefix: str | None = None
) -> Dictionary:
    """Build a Dictionary from an in-memory token tree."""
    keys = keys_for(use_dtcg)
    raw_tokens = flatten_tree(delegate_group_properties(data, keys), keys)
    return Dictionary(resolve_tokens(raw_tokens, prefix))
