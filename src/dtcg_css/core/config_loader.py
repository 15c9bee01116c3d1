"""
Build configuration loading.

Reads tokens.yaml from the project root. Every section is optional; a
missing file yields the default sites/docs/apps configuration.

Default location: {project_root}/tokens.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .environment import default_log_level, get_environment
from .errors import ConfigError
from .ir.config import (
    CATEGORIES,
    BuildConfig,
    BuildSettings,
    CssSettings,
    FigmaSettings,
    TierConfig,
)
from .ir.modes import Breakpoint
from .loader import expand_patterns

logger = logging.getLogger(__name__)

CONFIG_FILE = "tokens.yaml"


# =============================================================================
# Path helpers
# =============================================================================


def get_config_path(project_root: Path) -> Path:
    """Get the tokens.yaml file path."""
    return project_root / CONFIG_FILE


# =============================================================================
# Loading
# =============================================================================


def _parse_breakpoints(data: Any) -> tuple[Breakpoint, ...]:
    """Accept either ``{name: width}`` or a list of ``{name, min_width}``."""
    if isinstance(data, dict):
        return tuple(Breakpoint(name=name, min_width=width) for name, width in data.items())
    return tuple(Breakpoint(**item) for item in data)


def _parse_tiers(data: dict[str, Any]) -> dict[str, TierConfig]:
    tiers: dict[str, TierConfig] = {}
    for name, tier_data in data.items():
        tier_data = dict(tier_data or {})
        tier_data.setdefault("name", name)
        for key in ("include", "source"):
            if isinstance(tier_data.get(key), str):
                tier_data[key] = [tier_data[key]]
        tiers[name] = TierConfig(**tier_data)
    return tiers


def _parse_config_data(data: dict[str, Any]) -> BuildConfig:
    """Parse BuildConfig from raw YAML data.

    The log level falls back to the environment default when the build
    section does not set one.
    """
    environment = get_environment()
    try:
        build_data = dict(data.get("build") or {})
        build_data.setdefault("log_level", default_log_level(environment))
        build = BuildSettings(**build_data)

        css_data = dict(data.get("css") or {})
        if "breakpoints" in css_data:
            css_data["breakpoints"] = _parse_breakpoints(css_data["breakpoints"])
        css = CssSettings(**css_data)

        figma_data = data.get("figma") or {}
        figma = FigmaSettings(**figma_data)

        kwargs: dict[str, Any] = {
            "build": build,
            "css": css,
            "figma": figma,
            "environment": environment,
        }
        if data.get("tiers"):
            kwargs["tiers"] = _parse_tiers(data["tiers"])
        return BuildConfig(**kwargs)
    except (KeyError, ValueError, TypeError) as e:
        raise ConfigError(f"Failed to parse build configuration: {e}") from e


def load_build_config(project_root: Path, path: Path | None = None) -> BuildConfig:
    """Load the build configuration.

    Args:
        project_root: Root directory of the token project.
        path: Explicit config file; when given it must exist.

    Returns:
        BuildConfig instance (defaults when no tokens.yaml is present).

    Raises:
        ConfigError: If the file is missing (explicit path), unreadable or invalid.
    """
    config_path = path or get_config_path(project_root)

    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Configuration not found: {config_path}")
        logger.debug("No tokens.yaml found, using defaults")
        return _parse_config_data({})

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if not data:
        logger.warning("Empty %s, using defaults", config_path)
        return _parse_config_data({})
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    try:
        return _parse_config_data(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration schema in {config_path}: {e}") from e


# =============================================================================
# Validation
# =============================================================================


class ConfigValidationResult:
    """Result of configuration validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def __repr__(self) -> str:
        return f"ConfigValidationResult(errors={len(self.errors)}, warnings={len(self.warnings)})"


def validate_build_config(config: BuildConfig, project_root: Path) -> ConfigValidationResult:
    """Check a configuration against the files in a project.

    Errors: unknown mode categories, missing mode files.
    Warnings: source patterns that match no files.
    """
    result = ConfigValidationResult()

    for tier in config.tiers.values():
        for category, modes in tier.modes.items():
            if category not in CATEGORIES:
                result.add_error(f"Tier '{tier.name}': unknown mode category '{category}'")
                continue
            for mode, file in modes.items():
                if not (project_root / file).exists():
                    result.add_error(
                        f"Tier '{tier.name}': {category} mode '{mode}' file not found: {file}"
                    )
        for pattern in (*tier.include, *tier.source):
            if not expand_patterns([pattern], project_root):
                result.add_warning(f"Tier '{tier.name}': no token files match {pattern}")

    return result
