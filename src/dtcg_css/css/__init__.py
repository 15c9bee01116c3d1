"""
CSS rendering.

Category renderers (color modes, breakpoints, typography) share one value
resolver and are wired together by the DocumentAssembler; the index module
writes the per-tier ``index.css``.
"""

from .document import DocumentAssembler, token_category
from .index import build_index, render_index, write_index
from .values import RenderOptions, resolve_value

__all__ = [
    "DocumentAssembler",
    "RenderOptions",
    "build_index",
    "render_index",
    "resolve_value",
    "token_category",
    "write_index",
]
