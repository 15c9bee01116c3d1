"""Design-tool (Figma / Tokens Studio) JSON export."""

from .export import (
    export_figma_files,
    figma_typography_document,
    nested_references_document,
)

__all__ = [
    "export_figma_files",
    "figma_typography_document",
    "nested_references_document",
]
