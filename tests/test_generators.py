"""
Tests for the format generators.

We test every format because output shape is easy to get wrong and
hard to spot once pasted into a stylesheet or token file.

Tests cover:
    - CSS declarations, order and var() references
    - camelCase flat maps
    - dotNotation nesting, value cleaning and round trip
    - W3C leaves and alias references
    - Reported counts
"""

from tokenexport.backends import (
    flatten_nested,
    generate_camel_case_tokens,
    generate_css_tokens,
    generate_dot_notation_tokens,
    generate_w3c_tokens,
    render_css,
    set_nested_property,
)
from tokenexport.names import split_path
from tokenexport.resolver import ResolvedToken


def token(name, path, value, is_alias=False):
    return ResolvedToken(
        name=name,
        path=split_path(path),
        value=value,
        is_alias=is_alias,
        source_name=path,
    )


class TestCssGenerator:

    def test_declaration_line(self):
        tokens = generate_css_tokens([token("--spacing-small", "spacing/small", "4")])
        assert "  --spacing-small: 4;" in render_css(tokens).split("\n")

    def test_single_rule_wraps_declarations(self):
        tokens = generate_css_tokens([
            token("--a", "a", "1"),
            token("--b", "b", "2"),
        ])
        assert render_css(tokens) == ":root {\n  --a: 1;\n  --b: 2;\n}"

    def test_input_order_kept(self):
        tokens = generate_css_tokens([
            token("--z", "z", "1"),
            token("--a", "a", "2"),
        ])
        assert list(tokens) == ["--z", "--a"]

    def test_alias_becomes_var_reference(self):
        tokens = generate_css_tokens([
            token("--color-text", "color/text", "--palette-gray", is_alias=True),
        ])
        assert tokens["--color-text"] == "var(--palette-gray)"

    def test_custom_selector_and_indent(self):
        text = render_css({"--a": "1"}, selector=".theme-dark", indent="\t")
        assert text == ".theme-dark {\n\t--a: 1;\n}"

    def test_empty(self):
        assert render_css({}) == ":root {\n}"


class TestCamelCaseGenerator:

    def test_flat_mapping(self):
        tokens, count = generate_camel_case_tokens([
            token("spacingSmall", "spacing/small", 4),
            token("colorBrand", "color/brand", {"r": 1, "g": 0, "b": 0, "a": 1}),
        ])
        assert tokens == {"spacingSmall": 4, "colorBrand": {"r": 1, "g": 0, "b": 0, "a": 1}}
        assert count == 2

    def test_alias_name_is_plain(self):
        tokens, _ = generate_camel_case_tokens([
            token("colorText", "color/text", "paletteGray", is_alias=True),
        ])
        assert tokens == {"colorText": "paletteGray"}

    def test_name_collision_counts_once(self):
        tokens, count = generate_camel_case_tokens([
            token("fontBody", "font/body", 1),
            token("fontBody", "font body", 2),
        ])
        assert tokens == {"fontBody": 2}
        assert count == 1


class TestSetNestedProperty:

    def test_creates_levels(self):
        tree = {}
        assert set_nested_property(tree, ["a", "b", "c"], "1")
        assert tree == {"a": {"b": {"c": "1"}}}

    def test_reuses_existing_objects(self):
        tree = {"a": {"x": "0"}}
        set_nested_property(tree, ["a", "y"], "1")
        assert tree == {"a": {"x": "0", "y": "1"}}

    def test_refuses_to_nest_under_leaf(self):
        tree = {"a": "0"}
        assert not set_nested_property(tree, ["a", "b"], "1")
        assert tree == {"a": "0"}


class TestDotNotationGenerator:

    def test_nests_by_segment(self):
        tokens, count = generate_dot_notation_tokens([
            token("color.brand.primary", "color/brand/primary", "rgb(255, 0, 0)"),
            token("color.brand.secondary", "color/brand/secondary", "rgb(0, 0, 255)"),
            token("spacing.small", "spacing/small", "4"),
        ])
        assert tokens == {
            "color": {"brand": {"primary": "rgb(255, 0, 0)", "secondary": "rgb(0, 0, 255)"}},
            "spacing": {"small": "4"},
        }
        assert count == 3

    def test_count_is_flat_pair_count(self):
        _, count = generate_dot_notation_tokens([
            token("a.b", "a/b", "1"),
            token("a.c", "a/c", "2"),
        ])
        assert count == 2

    def test_collision_with_leaf_is_dropped(self):
        tokens, count = generate_dot_notation_tokens([
            token("a", "a", "1"),
            token("a.b", "a/b", "2"),
        ])
        assert tokens == {"a": "1"}
        assert count == 1

    def test_round_trip_through_flatten(self):
        pairs = [
            token("color.brand.primary", "color/brand/primary", "rgb(255, 0, 0)"),
            token("color.text", "color/text", "rgb(26, 26, 26)"),
            token("font.family", "font/family", "Inter"),
        ]
        tokens, _ = generate_dot_notation_tokens(pairs)
        assert flatten_nested(tokens) == {t.name: t.value for t in pairs}


class TestW3cGenerator:

    def test_leaf_shape(self):
        tokens, count = generate_w3c_tokens([token("spacing.small", "spacing/small", 4)])
        assert tokens == {"spacing": {"small": {"value": 4, "original": "spacing/small"}}}
        assert count == 1

    def test_alias_reference(self):
        tokens, _ = generate_w3c_tokens([
            token("color.text", "color/text", "palette.gray.900", is_alias=True),
        ])
        assert tokens["color"]["text"] == {"value": "{palette.gray.900}", "original": "color/text"}
