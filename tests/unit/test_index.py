"""Tests for tier index generation."""

from __future__ import annotations

from pathlib import Path

COLOR_FILES = [
    "color/light/normalContrast.css",
    "color/light/highContrast.css",
    "color/dark/normalContrast.css",
    "color/dark/highContrast.css",
]


def _touch(root: Path, *files: str) -> None:
    for file in files:
        path = root / file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(":root {\n}\n", encoding="utf-8")


class TestColorLayering:
    """Test the layered color imports."""

    def test_full_layering_import_count(self):
        from dtcg_css.css.index import render_index

        text = render_index(COLOR_FILES, "sites")
        assert text.count("@import") == 16

    def test_layer_order(self):
        from dtcg_css.css.index import render_index

        text = render_index(COLOR_FILES, "sites")
        assert text.startswith(
            "/* Auto-generated index file for sites tier CSS tokens */\n\n"
            "/* Color tokens with media queries and data attribute overrides */\n"
            "@import './color/light/normalContrast.css';\n\n"
            "@media (prefers-color-scheme: dark) {\n"
            "  @import './color/dark/normalContrast.css';\n"
            "}\n\n"
            "@media (prefers-contrast: more) {\n"
            "  @import './color/light/highContrast.css';\n"
            "}\n\n"
            "@media (prefers-color-scheme: dark) and (prefers-contrast: more) {\n"
            "  @import './color/dark/highContrast.css';\n"
            "}\n\n"
            "/* Data attribute overrides */\n\n"
            '[data-theme="light"][data-contrast="normal"] {\n'
        )
        positions = [
            text.index('[data-theme="light"][data-contrast="normal"]'),
            text.index('[data-theme="light"][data-contrast="high"]'),
            text.index('[data-theme="dark"][data-contrast="normal"]'),
            text.index('[data-theme="dark"][data-contrast="high"]'),
            text.index('[data-theme="light"]:not([data-contrast])'),
            text.index('[data-contrast="high"]:not([data-theme])'),
        ]
        assert positions == sorted(positions)

    def test_fallback_block(self):
        from dtcg_css.css.index import render_index

        text = render_index(COLOR_FILES, "sites")
        assert (
            '[data-theme="dark"]:not([data-contrast]) {\n'
            "  @import './color/dark/normalContrast.css';\n"
            "  @media (prefers-contrast: more) {\n"
            "    @import './color/dark/highContrast.css';\n"
            "  }\n"
            "}"
        ) in text
        assert (
            '[data-contrast="normal"]:not([data-theme]) {\n'
            "  @import './color/light/normalContrast.css';\n"
            "  @media (prefers-color-scheme: dark) {\n"
            "    @import './color/dark/normalContrast.css';\n"
            "  }\n"
            "}"
        ) in text

    def test_no_fallbacks_without_light_high_contrast(self):
        from dtcg_css.css.index import render_index

        files = [f for f in COLOR_FILES if f != "color/light/highContrast.css"]
        text = render_index(files, "sites")
        assert ":not(" not in text
        assert "@media (prefers-contrast: more) {" not in text
        assert text.count("@import") == 6

    def test_missing_files_not_imported(self):
        from dtcg_css.css.index import render_index

        text = render_index(["color/dark/normalContrast.css"], "apps")
        assert "light/normalContrast" not in text
        assert "@media (prefers-color-scheme: dark) {\n  @import './color/dark/normalContrast.css';\n}" in text


class TestIndexSections:
    """Test primitive, category and dimension sections."""

    def test_primitives_first(self):
        from dtcg_css.css.index import render_index

        files = [
            "typography.css",
            "color/primitive.css",
            "color/light/normalContrast.css",
            "dimension/primitive.css",
        ]
        text = render_index(files, "sites")
        body = text.split("\n\n", 1)[1]
        assert body.startswith(
            "@import './color/primitive.css';\n"
            "@import './dimension/primitive.css';\n\n"
            "@import './typography.css';\n\n"
            "/* Color tokens"
        )

    def test_dimension_imports_ascend(self):
        from dtcg_css.css.index import render_index

        files = ["dimension/large.css", "dimension/small.css", "dimension/medium.css"]
        text = render_index(files, "sites")
        assert text.endswith(
            "/* Dimension tokens with breakpoint media queries */\n"
            "@import './dimension/small.css';\n\n"
            "@media (min-width: 620px) {\n"
            "  @import './dimension/medium.css';\n"
            "}\n\n"
            "@media (min-width: 1036px) {\n"
            "  @import './dimension/large.css';\n"
            "}\n"
        )

    def test_unknown_dimension_file_warns(self, caplog):
        import logging

        from dtcg_css.css.index import render_index

        files = ["dimension/small.css", "dimension/compact.css"]
        with caplog.at_level(logging.WARNING, logger="dtcg_css"):
            text = render_index(files, "sites")
        assert "compact.css" not in text
        assert "Skipping dimension/compact.css" in caplog.text


class TestWriteIndex:
    """Test scanning and writing index.css."""

    def test_writes_index(self, tmp_path):
        from dtcg_css.css.index import INDEX_FILE, write_index

        tier_dir = tmp_path / "sites"
        _touch(tier_dir, "typography.css", *COLOR_FILES)

        path = write_index(tier_dir)
        assert path == tier_dir / INDEX_FILE
        text = path.read_text(encoding="utf-8")
        assert text.startswith("/* Auto-generated index file for sites tier CSS tokens */")
        assert "@import './typography.css';" in text

    def test_existing_index_not_imported(self, tmp_path):
        from dtcg_css.css.index import write_index

        tier_dir = tmp_path / "sites"
        _touch(tier_dir, "typography.css")
        first = write_index(tier_dir).read_text(encoding="utf-8")
        second = write_index(tier_dir).read_text(encoding="utf-8")
        assert first == second
        assert "index.css" not in second

    def test_empty_directory(self, tmp_path):
        from dtcg_css.css.index import write_index

        assert write_index(tmp_path) is None
        assert not (tmp_path / "index.css").exists()

    def test_missing_directory(self, tmp_path):
        from dtcg_css.css.index import build_index

        assert build_index(tmp_path / "missing") is None

    def test_failed_write_removes_temp_file(self, tmp_path, monkeypatch):
        import os

        import pytest

        from dtcg_css.core.fileset import atomic_write

        def fail_replace(src, dst):
            raise PermissionError("target is locked")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(PermissionError):
            atomic_write(tmp_path / "index.css", "/* index */\n")
        assert list(tmp_path.iterdir()) == []

    def test_no_temp_files_left(self, tmp_path):
        from dtcg_css.css.index import write_index

        _touch(tmp_path, "grid.css")
        write_index(tmp_path, "docs")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["grid.css", "index.css"]
