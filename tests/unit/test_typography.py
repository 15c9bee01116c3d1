"""Tests for typography class expansion."""

from __future__ import annotations


def _render(dictionary, **kwargs):
    from dtcg_css.css.typography import render_typography
    from dtcg_css.css.values import RenderOptions

    return render_typography(dictionary.all_tokens, dictionary, RenderOptions(), **kwargs)


def _block(items, selector):
    return next(item for item in items if getattr(item, "selector", None) == selector)


class TestClassName:
    def test_category_prefix_removed(self):
        from dtcg_css.core.ir.tokens import Token
        from dtcg_css.css.typography import class_name

        token = Token(path=("typography", "text", "primary", "bold"), name="typography-text-primary-bold")
        assert class_name(token) == "text-primary-bold"

    def test_prefixed_name(self):
        from dtcg_css.core.ir.tokens import Token
        from dtcg_css.css.typography import class_name

        token = Token(path=("typography", "heading", "1"), name="ds-typography-heading-1")
        assert class_name(token) == "heading-1"


class TestRenderTypography:
    """Test composite expansion and default inheritance."""

    def test_default_variant_class(self, typography_dictionary):
        items = _render(typography_dictionary)
        assert _block(items, ".text-primary-default").render() == (
            ".text-primary-default {\n"
            "  font-family: var(--font-family-sans);\n"
            "  font-size: var(--size-m);\n"
            "  font-weight: var(--font-weight-regular);\n"
            "  line-height: 1.5;\n"
            "}"
        )

    def test_variant_inherits_from_default(self, typography_dictionary):
        items = _render(typography_dictionary)
        assert _block(items, ".text-primary-bold").render() == (
            ".text-primary-bold {\n"
            "  font-family: var(--font-family-sans);\n"
            "  font-size: var(--size-m);\n"
            "  font-weight: var(--font-weight-bold);\n"
            "  line-height: 1.5;\n"
            "}"
        )

    def test_variant_inherits_default_of_its_own_mode(self, make_dictionary):
        dictionary = make_dictionary(
            {
                "typography": {
                    "$type": "typography",
                    "heading": {
                        "small": {
                            "$extensions": {"mode": "small"},
                            "default": {"$value": {"fontFamily": "Arial", "fontSize": "16px"}},
                            "bold": {"$value": {"fontWeight": 700}},
                        },
                        "large": {
                            "$extensions": {"mode": "large"},
                            "default": {"$value": {"fontFamily": "Arial", "fontSize": "32px"}},
                        },
                    },
                }
            }
        )
        items = _render(dictionary)
        assert _block(items, ".heading-small-bold").render() == (
            ".heading-small-bold {\n"
            "  font-family: Arial;\n"
            "  font-size: 16px;\n"
            "  font-weight: 700;\n"
            "}"
        )

    def test_mode_variant_falls_back_to_untagged_default(self):
        from dtcg_css.core.ir.tokens import Token
        from dtcg_css.css.typography import default_variant_index, merge_with_default

        default = Token(
            path=("typography", "body", "default"),
            name="typography-body-default",
            type="typography",
            value={"fontSize": "16px"},
            original_value={"fontSize": "16px"},
        )
        bold = Token(
            path=("typography", "body", "small", "bold"),
            name="typography-body-small-bold",
            type="typography",
            value={"fontWeight": 700},
            original_value={"fontWeight": 700},
            mode="small",
        )
        merged = merge_with_default(bold, default_variant_index([default, bold]))
        assert merged.value == {"fontSize": "16px", "fontWeight": 700}

    def test_empty_class_without_default(self, typography_dictionary):
        items = _render(typography_dictionary)
        assert _block(items, ".text-note-empty").render() == ".text-note-empty {\n}"

    def test_literal_sub_values(self, typography_dictionary):
        from dtcg_css.css.typography import render_typography
        from dtcg_css.css.values import RenderOptions

        items = render_typography(
            typography_dictionary.all_tokens,
            typography_dictionary,
            RenderOptions(output_references=False),
        )
        rendered = _block(items, ".heading-1").render()
        assert "font-family: 'Helvetica Neue', Arial, sans-serif;" in rendered
        assert "font-size: 24px;" in rendered
        assert "font-weight: 700;" in rendered

    def test_primitives_in_root_block(self, typography_dictionary):
        items = _render(typography_dictionary)
        root = _block(items, ":root")
        assert [d.property for d in root.declarations] == [
            "--font-family-sans",
            "--font-weight-regular",
            "--font-weight-bold",
        ]
        assert items[0] is root

    def test_semantic_elements_off_by_default(self, typography_dictionary):
        items = _render(typography_dictionary)
        assert not any(getattr(item, "selector", None) == "h1" for item in items)

    def test_semantic_elements(self, typography_dictionary):
        from dtcg_css.css.blocks import Comment

        items = _render(typography_dictionary, semantic_elements=True)
        heading = _block(items, "h1")
        assert heading.render().startswith("h1 {\n  font-family: var(--font-family-sans);")
        assert Comment("Semantic HTML elements") in items
        assert items.index(heading) < items.index(_block(items, ".heading-1"))

    def test_no_tokens(self, make_dictionary, token_trees):
        from dtcg_css.css.typography import render_typography
        from dtcg_css.css.values import RenderOptions

        dictionary = make_dictionary(token_trees["colors"] | {"palette": token_trees["primitives"]["palette"]})
        colors = [t for t in dictionary if t.path[0] == "color"]
        assert render_typography(colors, dictionary, RenderOptions()) == []
