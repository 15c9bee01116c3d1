"""
Build configuration IR types.

Defines the structure of tokens.yaml. Every section is optional; the
defaults reproduce the canonical sites/docs/apps tier layout.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .modes import BREAKPOINTS, Breakpoint

# =============================================================================
# Enums
# =============================================================================


class ColorModeStrategy(StrEnum):
    """How light/dark color tokens are combined in one document."""

    LIGHT_DARK_FUNCTION = "light-dark-function"
    MEDIA_QUERY = "media-query"


class LogLevel(StrEnum):
    """Build log verbosity."""

    SILENT = "silent"
    DEFAULT = "default"
    VERBOSE = "verbose"


class Environment(StrEnum):
    """Runtime environment, read from DTCG_CSS_ENV."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


# Output categories, in build order
CATEGORIES: tuple[str, ...] = (
    "color",
    "dimension",
    "typography",
    "asset",
    "grid",
    "duration",
    "shadow",
)


# =============================================================================
# Sections
# =============================================================================


class BuildSettings(BaseModel):
    """Core build settings."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = Field(default=LogLevel.VERBOSE, description="Build log verbosity")
    use_dtcg: bool = Field(default=True, description="Tokens use $value/$type keys")
    parallel_builds: bool = Field(default=True, description="Build tiers concurrently")


class CssSettings(BaseModel):
    """CSS platform settings."""

    model_config = ConfigDict(frozen=True)

    build_path: str = Field(default="dist/css", description="Output directory")
    selector: str = Field(default=":root", description="Selector for custom properties")
    prefix: str | None = Field(default=None, description="Prefix for every property name")
    output_references: bool = Field(default=True, description="Emit var() for references")
    color_mode_strategy: ColorModeStrategy = Field(
        default=ColorModeStrategy.LIGHT_DARK_FUNCTION,
        description="Combination strategy for light/dark tokens in one file",
    )
    breakpoints: tuple[Breakpoint, ...] = Field(default=BREAKPOINTS)
    semantic_elements: bool = Field(
        default=False, description="Also emit h1-h6 rules for heading typography"
    )


class FigmaSettings(BaseModel):
    """Design-tool JSON export settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False)
    build_path: str = Field(default="dist/figma")


class TierConfig(BaseModel):
    """One tier of the token system.

    ``include`` files are loaded for reference resolution only; ``source``
    files are rendered. ``modes`` maps a category to mode name -> token file.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    include: tuple[str, ...] = ()
    source: tuple[str, ...] = ()
    modes: dict[str, dict[str, str]] = Field(default_factory=dict)

    @property
    def primitive_source(self) -> tuple[str, ...]:
        return tuple(p for p in self.source if "/primitive/" in p)


def _default_tiers() -> dict[str, TierConfig]:
    color_modes = {
        f"{theme}/{contrast}": (
            f"./tokens/canonical/sites/semantic/color/{theme}/{contrast}.tokens.json"
        )
        for theme in ("light", "dark")
        for contrast in ("normalContrast", "highContrast")
    }
    dimension_modes = {
        size: f"./tokens/canonical/sites/semantic/dimension/{size}.tokens.json"
        for size in ("small", "medium", "large", "xLarge")
    }
    sites_sources = (
        "./tokens/canonical/sites/primitive/**/*.tokens.json",
        "./tokens/canonical/sites/semantic/*.tokens.json",
    )
    modes = {"color": color_modes, "dimension": dimension_modes}
    return {
        "sites": TierConfig(
            name="sites",
            description="Marketing and product sites",
            source=sites_sources,
            modes=modes,
        ),
        "docs": TierConfig(
            name="docs",
            description="Documentation sites",
            include=sites_sources,
            source=("./tokens/canonical/docs/semantic/**/*.tokens.json",),
            modes=modes,
        ),
        "apps": TierConfig(
            name="apps",
            description="Web applications",
            include=sites_sources,
            source=("./tokens/canonical/apps/semantic/**/*.tokens.json",),
            modes=modes,
        ),
    }


class BuildConfig(BaseModel):
    """Root tokens.yaml configuration."""

    model_config = ConfigDict(frozen=True)

    build: BuildSettings = Field(default_factory=BuildSettings)
    css: CssSettings = Field(default_factory=CssSettings)
    figma: FigmaSettings = Field(default_factory=FigmaSettings)
    tiers: dict[str, TierConfig] = Field(default_factory=_default_tiers)
    environment: Environment = Field(default=Environment.DEVELOPMENT)

    def get_tier(self, name: str) -> TierConfig | None:
        return self.tiers.get(name)

    @property
    def tier_names(self) -> list[str]:
        return list(self.tiers)
