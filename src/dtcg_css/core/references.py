"""
Reference syntax helpers.

A reference is a ``{group.token}`` placeholder inside an authored value.
References may be the whole value (alias) or embedded in a longer string
(``"calc({size.base} * 2)"``), and may sit anywhere inside a composite value.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

REFERENCE_PATTERN = re.compile(r"\{([^{}]+)\}")

_SPLIT_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_SPLIT_UPPER_UPPER = re.compile(r"([A-Z])([A-Z][a-z])")
_NON_WORD = re.compile(r"[^A-Za-z0-9]+")


def is_reference(value: Any) -> bool:
    """True if *value* is a string consisting of exactly one reference."""
    return isinstance(value, str) and REFERENCE_PATTERN.fullmatch(value.strip()) is not None


def alias_target(value: str) -> str:
    """Dotted path of a whole-value reference: ``" { a.b } "`` -> ``"a.b"``."""
    return value.strip()[1:-1].strip()


def uses_references(value: Any) -> bool:
    """True if *value* contains a reference anywhere in its structure."""
    return next(iter_references(value), None) is not None


def iter_references(value: Any) -> Iterator[str]:
    """Yield referenced token paths (dotted) in structural order."""
    if isinstance(value, str):
        for match in REFERENCE_PATTERN.finditer(value):
            yield match.group(1).strip()
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_references(item)
    elif isinstance(value, list | tuple):
        for item in value:
            yield from iter_references(item)


def reference_path(reference: str) -> tuple[str, ...]:
    """Split a dotted reference into path segments."""
    return tuple(reference.split("."))


def kebab_case(text: str) -> str:
    """Convert ``"color primaryText"`` style input to ``"color-primary-text"``."""
    text = _SPLIT_LOWER_UPPER.sub(r"\1 \2", text)
    text = _SPLIT_UPPER_UPPER.sub(r"\1 \2", text)
    return "-".join(word.lower() for word in _NON_WORD.split(text) if word)


def token_name(path: tuple[str, ...] | list[str], prefix: str | None = None) -> str:
    """Flatten a token path into its custom property name (without ``--``)."""
    parts = [prefix, *path] if prefix else list(path)
    return kebab_case(" ".join(parts))
