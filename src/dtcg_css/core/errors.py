"""
Error types for token loading, rendering, and tier builds.
"""

from dataclasses import dataclass
from pathlib import Path


class TokenError(Exception):
    """Base exception for all dtcg-css errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(TokenError):
    """
    Raised when the build configuration cannot be read or validated.

    Examples:
    - Malformed tokens.yaml
    - Unknown color mode strategy
    - Tier referencing an unknown category
    """

    pass


class MissingReferenceError(TokenError):
    """
    Raised when a value references a token that is not in the dictionary.

    This indicates a broken token graph upstream. It fails the file being
    rendered (and so the tier) but never the other tiers.
    """

    def __init__(
        self,
        reference: str,
        token_path: tuple[str, ...] | None = None,
        context: "ErrorContext | None" = None,
    ):
        self.reference = reference
        self.token_path = token_path
        where = f" (in {'.'.join(token_path)})" if token_path else ""
        super().__init__(f"Reference {{{reference}}} not found{where}", context)


class ReferenceCycleError(TokenError):
    """Raised when token references form a cycle."""

    def __init__(self, chain: list[str], context: "ErrorContext | None" = None):
        self.chain = chain
        super().__init__("Circular reference: " + " -> ".join(chain), context)


class TierBuildError(TokenError):
    """
    Raised when a tier cannot be built.

    Examples:
    - Unknown tier name
    - Mode file missing for a configured category
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Token file the error relates to
        tier: Optional tier being built
        category: Optional category being rendered
    """

    file: Path | None = None
    tier: str | None = None
    category: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tier sites, category color: tokens/color.tokens.json"
        """
        parts = []
        if self.tier:
            parts.append(f"tier {self.tier}")
        if self.category:
            parts.append(f"category {self.category}")
        location = ", ".join(parts)
        if self.file:
            location = f"{location}: {self.file}" if location else str(self.file)
        return location
