"""
dtcg-css - design tokens to CSS custom properties.

Loads DTCG token files, resolves references, and renders per-tier CSS
with light/dark color modes, responsive breakpoints, and typography
utility classes.
"""

from __future__ import annotations

from ._version import get_version
from .core.dictionary import Dictionary
from .core.errors import (
    ConfigError,
    MissingReferenceError,
    ReferenceCycleError,
    TierBuildError,
    TokenError,
)
from .core.ir import Token

__version__ = get_version()

__all__ = [
    "__version__",
    "ConfigError",
    "Dictionary",
    "MissingReferenceError",
    "ReferenceCycleError",
    "TierBuildError",
    "Token",
    "TokenError",
]
