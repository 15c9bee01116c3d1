"""
Document assembly.

The DocumentAssembler is the explicit render pipeline: it holds the chosen
color strategy, the breakpoint table and the shared render options, selects
the tokens of one category and hands them to that category's renderer.
No renderer is looked up by name from a global registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.errors import TokenError
from dtcg_css.core.ir.config import CATEGORIES, BuildConfig, ColorModeStrategy
from dtcg_css.core.ir.modes import BREAKPOINTS, COLOR_MODES, Breakpoint, ModeAxis
from dtcg_css.core.ir.tokens import Token, TokenType

from .blocks import Comment, CssBlock, RenderResult, Statement, custom_property, render_document
from .breakpoints import render_breakpoints
from .color_modes import render_color_modes
from .modes import strip_modes
from .typography import is_composite_typography, is_primitive_typography, render_typography
from .values import RenderOptions

logger = logging.getLogger(__name__)

EMPTY_CATEGORY = "No tokens found for this category"


def token_category(token: Token) -> str:
    """Output category a token belongs to."""
    if token.type == TokenType.TYPOGRAPHY or is_primitive_typography(token):
        return "typography"
    if token.type in CATEGORIES:
        return str(token.type)
    return token.path[0] if token.path else "other"


@dataclass(frozen=True)
class DocumentAssembler:
    """Render pipeline for one platform configuration."""

    options: RenderOptions = field(default_factory=RenderOptions)
    color_strategy: ColorModeStrategy = ColorModeStrategy.LIGHT_DARK_FUNCTION
    color_axis: ModeAxis = COLOR_MODES
    breakpoints: tuple[Breakpoint, ...] = BREAKPOINTS
    semantic_elements: bool = False

    @classmethod
    def from_config(cls, config: BuildConfig) -> DocumentAssembler:
        css = config.css
        return cls(
            options=RenderOptions(
                selector=css.selector,
                prefix=css.prefix,
                output_references=css.output_references,
                uses_dtcg=config.build.use_dtcg,
            ),
            color_strategy=css.color_mode_strategy,
            breakpoints=css.breakpoints,
            semantic_elements=css.semantic_elements,
        )

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, tokens: list[Token], category: str) -> list[Token]:
        return [t for t in tokens if token_category(t) == category]

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    def render_category(self, category: str, tokens: list[Token], dictionary: Dictionary) -> str:
        """
        Render one category file.

        Args:
            category: Category name (color, dimension, typography, ...)
            tokens: Output tokens; other categories are filtered out
            dictionary: Dictionary for reference lookups

        Returns:
            Full CSS text; a placeholder comment when the category is empty
        """
        selected = self.select(tokens, category)
        logger.debug("Category %s: %d tokens", category, len(selected))
        if not selected:
            return render_document([Comment(EMPTY_CATEGORY)])

        items: list[CssBlock | Comment | Statement]
        if category == "color":
            items = self._blocks(
                render_color_modes(selected, dictionary, self.options, self.color_strategy, self.color_axis)
            )
        elif category == "dimension":
            items = self._blocks(render_breakpoints(selected, dictionary, self.options, self.breakpoints))
        elif category == "typography":
            items = list(
                render_typography(selected, dictionary, self.options, self.semantic_elements)
            )
        else:
            items = [
                CssBlock(
                    self.options.selector,
                    [custom_property(t.name, self.options.value(t, dictionary)) for t in selected],
                )
            ]
        return render_document(items or [Comment(EMPTY_CATEGORY)])

    def render_mode_file(
        self, category: str, mode: str, tokens: list[Token], dictionary: Dictionary
    ) -> str:
        """
        Render the file for one mode combination (e.g. ``dark/highContrast``).

        Every token lands in the root block under its mode-stripped name, so
        all mode files of a category define the same property names.
        """
        selected = self.select(tokens, category)
        if not selected:
            return render_document([Comment(EMPTY_CATEGORY)])

        modes = mode.split("/")
        seen: dict[str, Token] = {}
        declarations = []
        for token in selected:
            name = strip_modes(token, [*modes, *([token.mode] if token.mode else [])], self.options.prefix)
            if name in seen:
                raise TokenError(
                    f"Tokens {'.'.join(seen[name].path)} and {'.'.join(token.path)} "
                    f"both normalize to '{name}' in mode '{mode}'"
                )
            seen[name] = token
            declarations.append(custom_property(name, self.options.value(token, dictionary)))
        return render_document([CssBlock(self.options.selector, declarations)])

    def render_combined(self, tokens: list[Token], dictionary: Dictionary) -> str:
        """
        Render every category into one document.

        Colors and dimensions contribute root declarations plus their
        conditional blocks; composite typography is emitted as classes.
        """
        others = [
            t
            for t in tokens
            if t.type not in (TokenType.COLOR, TokenType.DIMENSION) and not is_composite_typography(t)
        ]
        result = RenderResult(
            root=[custom_property(t.name, self.options.value(t, dictionary)) for t in others]
        )
        result.extend(
            render_color_modes(tokens, dictionary, self.options, self.color_strategy, self.color_axis)
        )
        result.extend(render_breakpoints(tokens, dictionary, self.options, self.breakpoints))

        items: list[CssBlock | Comment | Statement] = self._blocks(result)
        composites = [t for t in tokens if is_composite_typography(t)]
        if composites:
            items.extend(render_typography(composites, dictionary, self.options, self.semantic_elements))
        return render_document(items)

    def _blocks(self, result: RenderResult) -> list[CssBlock | Comment | Statement]:
        return [CssBlock(self.options.selector, result.root), *result.conditional]
