"""
CSS output document model.

Renderers build an ordered list of blocks; text is produced only at the
end, so ordering decisions stay explicit and testable.
"""

from __future__ import annotations

from dataclasses import dataclass, field

FILE_HEADER = "/**\n * Do not edit directly, this file was auto-generated.\n */\n\n"

INDENT = "  "


@dataclass(frozen=True)
class Declaration:
    """One ``property: value`` pair."""

    property: str
    value: str

    def render(self, indent: int = 0) -> str:
        return f"{INDENT * indent}{self.property}: {self.value};"


def custom_property(name: str, value: str) -> Declaration:
    """Declaration for a ``--name`` custom property."""
    return Declaration(f"--{name}", value)


@dataclass
class CssBlock:
    """A selector, media query, or other at-rule with its contents."""

    selector: str
    declarations: list[Declaration] = field(default_factory=list)
    children: list[CssBlock | Statement | Comment] = field(default_factory=list)

    def render(self, indent: int = 0) -> str:
        pad = INDENT * indent
        lines = [f"{pad}{self.selector} {{"]
        lines.extend(d.render(indent + 1) for d in self.declarations)
        lines.extend(child.render(indent + 1) for child in self.children)
        lines.append(f"{pad}}}")
        return "\n".join(lines)


@dataclass(frozen=True)
class Comment:
    """A standalone ``/* ... */`` line."""

    text: str

    def render(self, indent: int = 0) -> str:
        return f"{INDENT * indent}/* {self.text} */"


@dataclass(frozen=True)
class Statement:
    """A bare at-rule statement such as ``@import './a.css';``."""

    text: str

    def render(self, indent: int = 0) -> str:
        return f"{INDENT * indent}{self.text};"


@dataclass
class RenderResult:
    """Output of a category renderer: root declarations plus conditional blocks."""

    root: list[Declaration] = field(default_factory=list)
    conditional: list[CssBlock] = field(default_factory=list)

    def extend(self, other: RenderResult) -> None:
        self.root.extend(other.root)
        self.conditional.extend(other.conditional)


def media_block(condition: str, selector: str, declarations: list[Declaration]) -> CssBlock:
    """``@media <condition> { <selector> { ... } }``."""
    return CssBlock(f"@media {condition}", children=[CssBlock(selector, declarations)])


def render_document(
    items: list[CssBlock | Comment | Statement], header: str = FILE_HEADER
) -> str:
    """Join rendered items with blank lines under the standard header."""
    body = "\n\n".join(item.render() for item in items)
    return f"{header}{body}\n" if body else header
