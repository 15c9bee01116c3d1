"""
Tier index assembly.

``index.css`` imports every other stylesheet of a tier in cascade order:
primitives, other categories, the layered color mode files, then the
dimension files behind ascending ``min-width`` queries.

Color layering, later rules winning:

1. ``light/normalContrast`` unconditionally
2. user preference media queries (dark, more contrast, both)
3. explicit ``[data-theme][data-contrast]`` pairs
4. one attribute set, the other axis taken from the media query
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from dtcg_css.core.fileset import atomic_write, discover_css_files
from dtcg_css.core.ir.modes import (
    BREAKPOINTS,
    COLOR_MODES,
    CONTRAST_ATTRIBUTE,
    CONTRAST_ATTRIBUTE_VALUES,
    CONTRAST_MODES,
    PREFERS_DARK,
    PREFERS_MORE_CONTRAST,
    THEME_ATTRIBUTE,
    Breakpoint,
)

from .blocks import Comment, CssBlock, Statement
from .breakpoints import ordered_breakpoints

logger = logging.getLogger(__name__)

INDEX_FILE = "index.css"

IndexItem = CssBlock | Comment | Statement


@dataclass
class CategorizedFiles:
    """Tier stylesheets split by how the index imports them."""

    primitive: list[str] = field(default_factory=list)
    color: list[str] = field(default_factory=list)
    dimension: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)


def categorize(files: list[str]) -> CategorizedFiles:
    groups = CategorizedFiles()
    for file in files:
        if "primitive" in file:
            groups.primitive.append(file)
        elif file.startswith("color/"):
            groups.color.append(file)
        elif file.startswith("dimension/"):
            groups.dimension.append(file)
        else:
            groups.other.append(file)
    return groups


def import_statement(file: str) -> Statement:
    return Statement(f"@import './{file}'")


def color_file(theme: str, contrast: str) -> str:
    return f"color/{theme}/{contrast}.css"


def _attribute(name: str, value: str) -> str:
    return f'[{name}="{value}"]'


# =============================================================================
# Color layering
# =============================================================================


def color_import_sections(files: list[str]) -> list[list[IndexItem]]:
    """Layered color imports; only files that exist are imported."""
    present = set(files)
    light, dark = COLOR_MODES.default, COLOR_MODES.values[1]
    normal, high = CONTRAST_MODES.default, CONTRAST_MODES.values[1]

    def existing(theme: str, contrast: str) -> str | None:
        file = color_file(theme, contrast)
        return file if file in present else None

    sections: list[list[IndexItem]] = []
    header: list[IndexItem] = [Comment("Color tokens with media queries and data attribute overrides")]
    baseline = existing(light, normal)
    if baseline:
        header.append(import_statement(baseline))
    sections.append(header)

    dark_normal = existing(dark, normal)
    light_high = existing(light, high)
    dark_high = existing(dark, high)
    for condition, file in (
        (PREFERS_DARK, dark_normal),
        (PREFERS_MORE_CONTRAST, light_high),
        (f"{PREFERS_DARK} and {PREFERS_MORE_CONTRAST}", dark_high),
    ):
        if file:
            sections.append([CssBlock(f"@media {condition}", children=[import_statement(file)])])

    pairs: list[IndexItem] = []
    for theme in COLOR_MODES.values:
        for contrast in CONTRAST_MODES.values:
            file = existing(theme, contrast)
            if file is None:
                continue
            selector = _attribute(THEME_ATTRIBUTE, theme) + _attribute(
                CONTRAST_ATTRIBUTE, CONTRAST_ATTRIBUTE_VALUES[contrast]
            )
            pairs.append(CssBlock(selector, children=[import_statement(file)]))
    if pairs:
        sections.append([Comment("Data attribute overrides")])
        sections.extend([block] for block in pairs)

    if dark_normal and light_high:
        for theme in COLOR_MODES.values:
            block = _fallback_block(
                _attribute(THEME_ATTRIBUTE, theme) + f":not([{CONTRAST_ATTRIBUTE}])",
                existing(theme, normal),
                PREFERS_MORE_CONTRAST,
                existing(theme, high),
            )
            if block:
                sections.append([block])
        for contrast in CONTRAST_MODES.values:
            block = _fallback_block(
                _attribute(CONTRAST_ATTRIBUTE, CONTRAST_ATTRIBUTE_VALUES[contrast])
                + f":not([{THEME_ATTRIBUTE}])",
                existing(light, contrast),
                PREFERS_DARK,
                existing(dark, contrast),
            )
            if block:
                sections.append([block])
    return sections


def _fallback_block(
    selector: str, base: str | None, condition: str, conditional: str | None
) -> CssBlock | None:
    children: list[CssBlock | Statement | Comment] = []
    if base:
        children.append(import_statement(base))
    if conditional:
        children.append(CssBlock(f"@media {condition}", children=[import_statement(conditional)]))
    return CssBlock(selector, children=children) if children else None


# =============================================================================
# Breakpoints
# =============================================================================


def dimension_import_sections(
    files: list[str], breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS
) -> list[list[IndexItem]]:
    present = set(files)
    ordered = ordered_breakpoints(breakpoints)
    known = {f"dimension/{bp.name}.css" for bp in ordered}
    for file in sorted(present - known):
        logger.warning("Skipping %s: no breakpoint named for it", file)
    header: list[IndexItem] = [Comment("Dimension tokens with breakpoint media queries")]
    sections: list[list[IndexItem]] = [header]
    for position, breakpoint in enumerate(ordered):
        file = f"dimension/{breakpoint.name}.css"
        if file not in present:
            continue
        if position == 0:
            header.append(import_statement(file))
        else:
            sections.append(
                [CssBlock(f"@media (min-width: {breakpoint.min_width})", children=[import_statement(file)])]
            )
    return sections


# =============================================================================
# Assembly
# =============================================================================


def render_index(
    files: list[str], tier_name: str, breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS
) -> str:
    """Render ``index.css`` text for the given tier-relative stylesheet paths."""
    groups = categorize(sorted(files))
    sections: list[list[IndexItem]] = []
    if groups.primitive:
        sections.append([import_statement(f) for f in groups.primitive])
    if groups.other:
        sections.append([import_statement(f) for f in groups.other])
    if groups.color:
        sections.extend(color_import_sections(groups.color))
    if groups.dimension:
        sections.extend(dimension_import_sections(groups.dimension, breakpoints))

    header = f"/* Auto-generated index file for {tier_name} tier CSS tokens */"
    body = "\n\n".join("\n".join(item.render() for item in section) for section in sections)
    return f"{header}\n\n{body}\n"


def build_index(
    tier_dir: Path, tier_name: str | None = None, breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS
) -> str | None:
    """
    Scan *tier_dir* and render its index.

    Returns:
        The index text, or None when the directory holds no stylesheets
    """
    files = discover_css_files(tier_dir, exclude=INDEX_FILE)
    if not files:
        logger.info("Note: No CSS files found in %s", tier_dir)
        return None
    return render_index(files, tier_name or tier_dir.name, breakpoints)


def write_index(
    tier_dir: Path, tier_name: str | None = None, breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS
) -> Path | None:
    """Write ``index.css`` into *tier_dir*; nothing is written for an empty tier."""
    text = build_index(tier_dir, tier_name, breakpoints)
    if text is None:
        return None
    index_path = tier_dir / INDEX_FILE
    atomic_write(index_path, text)
    logger.info("Generated CSS index: %s (%d imports)", index_path, text.count("@import"))
    return index_path
