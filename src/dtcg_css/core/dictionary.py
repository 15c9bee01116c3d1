"""
Read-only token dictionary.

The Dictionary owns every token known to one build (output tokens plus
reference-only tokens) and answers reference lookups for the renderers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from .errors import MissingReferenceError
from .ir.tokens import Token
from .references import iter_references, reference_path


class Dictionary:
    """Mapping of token path to Token with reference lookup."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: dict[tuple[str, ...], Token] = {}
        for token in tokens:
            self._tokens[token.path] = token

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens.values())

    def __contains__(self, path: object) -> bool:
        if isinstance(path, str):
            path = reference_path(path)
        return path in self._tokens

    @property
    def all_tokens(self) -> list[Token]:
        return list(self._tokens.values())

    def get(self, path: tuple[str, ...] | str) -> Token | None:
        if isinstance(path, str):
            path = reference_path(path)
        return self._tokens.get(path)

    def lookup(self, reference: str, referrer: Token | None = None) -> Token:
        """Return the token a ``{reference}`` points at.

        Raises:
            MissingReferenceError: If the target is not in the dictionary.
        """
        token = self._tokens.get(reference_path(reference))
        if token is None:
            raise MissingReferenceError(reference, referrer.path if referrer else None)
        return token

    def resolve(self, original_value: Any, referrer: Token | None = None) -> list[Token]:
        """Return the tokens referenced by *original_value*, in structural order."""
        found: list[Token] = []
        for reference in iter_references(original_value):
            token = self.lookup(reference, referrer)
            if token not in found:
                found.append(token)
        return found
