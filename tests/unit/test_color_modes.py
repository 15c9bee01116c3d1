"""Tests for light/dark color rendering strategies."""

from __future__ import annotations

import pytest


def _colors(dictionary):
    return [t for t in dictionary if t.path[0] == "color"]


class TestLightDarkFunction:
    """Test the light-dark() strategy."""

    def test_pairs_siblings_in_order(self, color_dictionary):
        from dtcg_css.css.color_modes import render_light_dark_function
        from dtcg_css.css.values import RenderOptions

        result = render_light_dark_function(_colors(color_dictionary), color_dictionary, RenderOptions())

        assert [d.render() for d in result.root] == [
            "--color-brand: var(--palette-blue);",
            "--color-surface: light-dark(var(--palette-white), var(--palette-black));",
            "--color-text: light-dark(var(--palette-black), var(--palette-white));",
            "--color-glow: var(--palette-blue);",
        ]
        assert result.conditional == []

    def test_every_color_appears_once(self, color_dictionary):
        from dtcg_css.css.color_modes import render_light_dark_function
        from dtcg_css.css.values import RenderOptions

        result = render_light_dark_function(_colors(color_dictionary), color_dictionary, RenderOptions())
        names = [d.property for d in result.root]
        assert len(names) == len(set(names))
        assert set(names) == {"--color-brand", "--color-surface", "--color-text", "--color-glow"}

    def test_literal_values(self, color_dictionary):
        from dtcg_css.css.color_modes import render_light_dark_function
        from dtcg_css.css.values import RenderOptions

        options = RenderOptions(output_references=False)
        result = render_light_dark_function(_colors(color_dictionary), color_dictionary, options)
        surface = next(d for d in result.root if d.property == "--color-surface")
        assert surface.value == "light-dark(rgb(255, 255, 255), rgb(0, 0, 0))"

    def test_name_collision_in_one_mode(self, make_dictionary, token_trees):
        from dtcg_css.core.errors import TokenError
        from dtcg_css.css.color_modes import render_light_dark_function
        from dtcg_css.css.values import RenderOptions

        dictionary = make_dictionary(
            token_trees["primitives"],
            {
                "color": {
                    "$type": "color",
                    "dark": {"$extensions": {"mode": "dark"}, "bg": {"$value": "{palette.black}"}},
                    "bg": {"dark": {"$extensions": {"mode": "dark"}, "$value": "{palette.blue}"}},
                }
            },
        )
        with pytest.raises(TokenError):
            render_light_dark_function(_colors(dictionary), dictionary, RenderOptions())


class TestMediaQuery:
    """Test the prefers-color-scheme strategy."""

    def test_dark_values_behind_media_query(self, color_dictionary):
        from dtcg_css.css.color_modes import render_media_query
        from dtcg_css.css.values import RenderOptions

        result = render_media_query(_colors(color_dictionary), color_dictionary, RenderOptions())

        assert [d.render() for d in result.root] == [
            "--color-brand: var(--palette-blue);",
            "--color-surface: var(--palette-white);",
            "--color-text: var(--palette-black);",
        ]
        assert len(result.conditional) == 1
        assert result.conditional[0].render() == (
            "@media (prefers-color-scheme: dark) {\n"
            "  :root {\n"
            "    --color-surface: var(--palette-black);\n"
            "    --color-text: var(--palette-white);\n"
            "    --color-glow: var(--palette-blue);\n"
            "  }\n"
            "}"
        )

    def test_no_dark_block_without_dark_tokens(self, color_dictionary):
        from dtcg_css.css.color_modes import render_media_query
        from dtcg_css.css.values import RenderOptions

        light_only = [t for t in _colors(color_dictionary) if t.mode != "dark"]
        result = render_media_query(light_only, color_dictionary, RenderOptions())
        assert result.conditional == []
        assert len(result.root) == 3

    def test_custom_selector(self, color_dictionary):
        from dtcg_css.css.color_modes import render_media_query
        from dtcg_css.css.values import RenderOptions

        result = render_media_query(
            _colors(color_dictionary), color_dictionary, RenderOptions(selector=".theme")
        )
        assert "  .theme {" in result.conditional[0].render()


class TestRenderColorModes:
    """Test strategy dispatch."""

    def test_non_color_tokens_ignored(self, color_dictionary):
        from dtcg_css.css.color_modes import render_color_modes
        from dtcg_css.css.values import RenderOptions

        result = render_color_modes(color_dictionary.all_tokens, color_dictionary, RenderOptions())
        properties = [d.property for d in result.root]
        assert "--font-family-sans" not in properties
        assert properties[:3] == ["--palette-white", "--palette-black", "--palette-blue"]

    def test_media_query_strategy(self, color_dictionary):
        from dtcg_css.core.ir.config import ColorModeStrategy
        from dtcg_css.css.color_modes import render_color_modes
        from dtcg_css.css.values import RenderOptions

        result = render_color_modes(
            _colors(color_dictionary),
            color_dictionary,
            RenderOptions(),
            ColorModeStrategy.MEDIA_QUERY,
        )
        assert len(result.conditional) == 1
        assert all("light-dark(" not in d.value for d in result.root)
