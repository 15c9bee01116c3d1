"""
Tier build orchestration.

A tier build writes, under ``<css.build_path>/<tier>/``:

1. ``<category>/primitive.css`` and ``<category>/<mode>.css`` for each
   category with configured modes
2. ``<category>.css`` for every other category
3. ``index.css`` once all category files exist
4. optionally the Figma JSON documents under ``<figma.build_path>/<tier>/``

Tiers are independent: a failure in one is recorded in its BuildResult and
never stops the others.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.errors import ErrorContext, TierBuildError
from dtcg_css.core.fileset import atomic_write
from dtcg_css.core.ir.config import CATEGORIES, BuildConfig, LogLevel, TierConfig
from dtcg_css.core.ir.tokens import Token
from dtcg_css.core.loader import expand_patterns, load_dictionary
from dtcg_css.css.document import DocumentAssembler
from dtcg_css.css.index import write_index
from dtcg_css.figma.export import export_figma_files

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one tier build."""

    tier: str
    success: bool
    duration: float
    error: str | None = None
    files: list[Path] = field(default_factory=list)


@dataclass
class LoadedTokens:
    """A dictionary plus the subset of its tokens that is written out."""

    dictionary: Dictionary
    output: list[Token]


class TierBuilder:
    """Builds the output files of one tier."""

    def __init__(
        self,
        config: BuildConfig,
        project_root: Path,
        assembler: DocumentAssembler | None = None,
    ):
        self.config = config
        self.project_root = project_root
        self.assembler = assembler or DocumentAssembler.from_config(config)

    def output_dir(self, tier: TierConfig) -> Path:
        return self.project_root / self.config.css.build_path / tier.name

    def figma_dir(self, tier: TierConfig) -> Path:
        return self.project_root / self.config.figma.build_path / tier.name

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _mode_paths(self, tier: TierConfig) -> set[Path]:
        return {
            (self.project_root / file).resolve()
            for modes in tier.modes.values()
            for file in modes.values()
        }

    def load(
        self,
        tier: TierConfig,
        patterns: Iterable[str],
        extra: Iterable[Path] = (),
        reference: Iterable[str] = (),
    ) -> LoadedTokens:
        """
        Load a tier's include files plus *patterns* and *extra* files.

        Only tokens from *patterns* and *extra* are output; include files and
        *reference* patterns serve reference resolution. Mode files matched by
        *patterns* are skipped; they are only loaded explicitly through *extra*.
        """
        mode_paths = self._mode_paths(tier)
        include = expand_patterns([*tier.include, *reference], self.project_root)
        source = [
            path
            for path in expand_patterns(patterns, self.project_root)
            if path.resolve() not in mode_paths and path not in include
        ]
        source.extend(extra)

        dictionary = load_dictionary(
            [*include, *source], self.config.build.use_dtcg, self.config.css.prefix
        )
        output_sources = {str(path) for path in source}
        output = [t for t in dictionary if t.source in output_sources]
        logger.debug(
            "Tier %s: %d tokens loaded, %d for output", tier.name, len(dictionary), len(output)
        )
        return LoadedTokens(dictionary, output)

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def _write(self, path: Path, text: str) -> Path:
        atomic_write(path, text)
        if self.config.build.log_level == LogLevel.VERBOSE:
            logger.info("✓ %s", path.relative_to(self.project_root))
        return path

    def _build_mode_category(
        self, tier: TierConfig, category: str, modes: dict[str, str], out: Path
    ) -> list[Path]:
        written: list[Path] = []
        primitives = self.load(tier, tier.primitive_source)
        written.append(
            self._write(
                out / category / "primitive.css",
                self.assembler.render_category(category, primitives.output, primitives.dictionary),
            )
        )
        for mode, file in modes.items():
            mode_path = self.project_root / file
            if not mode_path.exists():
                raise TierBuildError(
                    f"Mode file for '{mode}' not found",
                    ErrorContext(file=mode_path, tier=tier.name, category=category),
                )
            loaded = self.load(tier, (), extra=[mode_path], reference=tier.primitive_source)
            written.append(
                self._write(
                    out / category / f"{mode}.css",
                    self.assembler.render_mode_file(category, mode, loaded.output, loaded.dictionary),
                )
            )
        return written

    def build(self, tier_name: str) -> list[Path]:
        """
        Build every output file of a tier.

        Returns:
            Paths written, in build order

        Raises:
            TierBuildError: Unknown tier or missing mode file
            TokenError: Token files that cannot be loaded or rendered
        """
        tier = self.config.get_tier(tier_name)
        if tier is None:
            raise TierBuildError(f"Tier '{tier_name}' not found")

        out = self.output_dir(tier)
        written: list[Path] = []

        for category, modes in tier.modes.items():
            written.extend(self._build_mode_category(tier, category, modes, out))

        full = self.load(tier, tier.source)
        for category in CATEGORIES:
            if category in tier.modes:
                continue
            written.append(
                self._write(
                    out / f"{category}.css",
                    self.assembler.render_category(category, full.output, full.dictionary),
                )
            )

        index_path = write_index(out, tier.name, self.assembler.breakpoints)
        if index_path is not None:
            written.append(index_path)

        if self.config.figma.enabled:
            written.extend(
                export_figma_files(
                    full.dictionary,
                    full.output,
                    self.figma_dir(tier),
                    self.config.build.use_dtcg,
                )
            )
        return written


# =============================================================================
# All tiers
# =============================================================================


def build_tier(config: BuildConfig, project_root: Path, tier_name: str) -> BuildResult:
    """Build one tier, capturing any failure in the result."""
    start = time.perf_counter()
    try:
        files = TierBuilder(config, project_root).build(tier_name)
    except Exception as e:
        duration = time.perf_counter() - start
        logger.error("Failed to build %s tokens: %s", tier_name, e)
        return BuildResult(tier=tier_name, success=False, duration=duration, error=str(e))

    duration = time.perf_counter() - start
    logger.info("Built all %s token files (%.0fms)", tier_name, duration * 1000)
    return BuildResult(tier=tier_name, success=True, duration=duration, files=files)


def build_all_tiers(
    config: BuildConfig,
    project_root: Path,
    tiers: list[str] | None = None,
    parallel: bool | None = None,
) -> list[BuildResult]:
    """
    Build several tiers, concurrently or one after another.

    Args:
        config: Build configuration
        project_root: Directory token and output paths are relative to
        tiers: Tier names (default: every configured tier)
        parallel: Override ``build.parallel_builds``

    Returns:
        One result per tier, in the order the tiers were requested
    """
    names = tiers if tiers is not None else config.tier_names
    run_parallel = config.build.parallel_builds if parallel is None else parallel
    if not names:
        return []

    if not run_parallel or len(names) == 1:
        return [build_tier(config, project_root, name) for name in names]

    results: dict[str, BuildResult] = {}
    with ThreadPoolExecutor(max_workers=min(4, len(names))) as executor:
        futures = {executor.submit(build_tier, config, project_root, name): name for name in names}
        for future in as_completed(futures):
            result = future.result()
            results[result.tier] = result
    return [results[name] for name in names]
