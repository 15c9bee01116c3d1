"""Shared pytest fixtures for dtcg-css tests."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from dtcg_css.core.dictionary import Dictionary
from dtcg_css.core.loader import load_dictionary_from_data


def srgb(r: float, g: float, b: float) -> dict[str, Any]:
    return {"colorSpace": "srgb", "components": [r, g, b]}


def px(value: float) -> dict[str, Any]:
    return {"value": value, "unit": "px"}


PRIMITIVES: dict[str, Any] = {
    "palette": {
        "$type": "color",
        "white": {"$value": srgb(1, 1, 1)},
        "black": {"$value": srgb(0, 0, 0)},
        "blue": {"$value": srgb(0, 0, 1)},
    },
    "size": {
        "$type": "dimension",
        "s": {"$value": px(8)},
        "m": {"$value": px(16)},
        "l": {"$value": px(24)},
    },
    "font": {
        "family": {
            "$type": "fontFamily",
            "sans": {"$value": ["Helvetica Neue", "Arial", "sans-serif"]},
        },
        "weight": {
            "$type": "fontWeight",
            "regular": {"$value": 400},
            "bold": {"$value": 700},
        },
    },
}

SEMANTIC_COLORS: dict[str, Any] = {
    "color": {
        "$type": "color",
        "brand": {"$value": "{palette.blue}"},
        "light": {
            "$extensions": {"mode": "light"},
            "surface": {"$value": "{palette.white}"},
            "text": {"$value": "{palette.black}"},
        },
        "dark": {
            "$extensions": {"mode": "dark"},
            "surface": {"$value": "{palette.black}"},
            "text": {"$value": "{palette.white}"},
            "glow": {"$value": "{palette.blue}"},
        },
    }
}

SEMANTIC_SPACING: dict[str, Any] = {
    "spacing": {
        "$type": "dimension",
        "inset": {"$value": "{size.s}"},
        "small": {"$extensions": {"mode": "small"}, "gutter": {"$value": "{size.s}"}},
        "large": {"$extensions": {"mode": "large"}, "gutter": {"$value": "{size.l}"}},
        "medium": {"$extensions": {"mode": "medium"}, "gutter": {"$value": "{size.m}"}},
    }
}

TYPOGRAPHY: dict[str, Any] = {
    "typography": {
        "$type": "typography",
        "text": {
            "primary": {
                "default": {
                    "$value": {
                        "fontFamily": "{font.family.sans}",
                        "fontSize": "{size.m}",
                        "fontWeight": "{font.weight.regular}",
                        "lineHeight": 1.5,
                    }
                },
                "bold": {"$value": {"fontWeight": "{font.weight.bold}"}},
            },
            "note": {
                "empty": {"$value": {"fontStyle": ""}},
            },
        },
        "heading": {
            "1": {
                "$value": {
                    "fontFamily": "{font.family.sans}",
                    "fontSize": "{size.l}",
                    "fontWeight": "{font.weight.bold}",
                }
            },
        },
    }
}


def merged(*trees: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for tree in trees:
        result.update(copy.deepcopy(tree))
    return result


@pytest.fixture
def token_trees() -> dict[str, dict[str, Any]]:
    """Fresh copies of the sample token trees, keyed by role."""
    return {
        "primitives": copy.deepcopy(PRIMITIVES),
        "colors": copy.deepcopy(SEMANTIC_COLORS),
        "spacing": copy.deepcopy(SEMANTIC_SPACING),
        "typography": copy.deepcopy(TYPOGRAPHY),
    }


@pytest.fixture
def make_dictionary() -> Callable[..., Dictionary]:
    """Factory building a Dictionary from in-memory token trees."""

    def factory(*trees: dict[str, Any], prefix: str | None = None) -> Dictionary:
        return load_dictionary_from_data(merged(*trees), prefix=prefix)

    return factory


@pytest.fixture
def color_dictionary(make_dictionary) -> Dictionary:
    return make_dictionary(PRIMITIVES, SEMANTIC_COLORS)


@pytest.fixture
def spacing_dictionary(make_dictionary) -> Dictionary:
    return make_dictionary(PRIMITIVES, SEMANTIC_SPACING)


@pytest.fixture
def typography_dictionary(make_dictionary) -> Dictionary:
    return make_dictionary(PRIMITIVES, TYPOGRAPHY)


# =============================================================================
# On-disk token project
# =============================================================================


def write_json(path: Path, data: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def _color_mode_file(surface: str, text: str) -> dict[str, Any]:
    return {
        "color": {
            "$type": "color",
            "surface": {"$value": f"{{palette.{surface}}}"},
            "text": {"$value": f"{{palette.{text}}}"},
        }
    }


PROJECT_CONFIG = """\
build:
  parallel_builds: true
css:
  build_path: dist/css
tiers:
  sites:
    description: Marketing sites
    source:
      - tokens/sites/primitive/*.tokens.json
      - tokens/sites/semantic/*.tokens.json
    modes:
      color:
        light/normalContrast: tokens/sites/semantic/color/light-normal.tokens.json
        light/highContrast: tokens/sites/semantic/color/light-high.tokens.json
        dark/normalContrast: tokens/sites/semantic/color/dark-normal.tokens.json
        dark/highContrast: tokens/sites/semantic/color/dark-high.tokens.json
      dimension:
        small: tokens/sites/semantic/dimension/small.tokens.json
        medium: tokens/sites/semantic/dimension/medium.tokens.json
  apps:
    description: Applications
    include:
      - tokens/sites/primitive/*.tokens.json
    source:
      - tokens/apps/*.tokens.json
"""


@pytest.fixture
def token_project(tmp_path: Path) -> Path:
    """A two-tier token project with color and dimension modes."""
    tokens = tmp_path / "tokens"
    write_json(tokens / "sites" / "primitive" / "base.tokens.json", PRIMITIVES)
    write_json(tokens / "sites" / "semantic" / "typography.tokens.json", TYPOGRAPHY)

    color_dir = tokens / "sites" / "semantic" / "color"
    write_json(color_dir / "light-normal.tokens.json", _color_mode_file("white", "black"))
    write_json(color_dir / "light-high.tokens.json", _color_mode_file("white", "black"))
    write_json(color_dir / "dark-normal.tokens.json", _color_mode_file("black", "white"))
    write_json(color_dir / "dark-high.tokens.json", _color_mode_file("black", "white"))

    dimension_dir = tokens / "sites" / "semantic" / "dimension"
    write_json(
        dimension_dir / "small.tokens.json",
        {"spacing": {"$type": "dimension", "gutter": {"$value": "{size.s}"}}},
    )
    write_json(
        dimension_dir / "medium.tokens.json",
        {"spacing": {"$type": "dimension", "gutter": {"$value": "{size.m}"}}},
    )

    write_json(
        tokens / "apps" / "color.tokens.json",
        {"color": {"$type": "color", "accent": {"$value": "{palette.blue}"}}},
    )

    (tmp_path / "tokens.yaml").write_text(PROJECT_CONFIG, encoding="utf-8")
    return tmp_path
