"""Format generators for token output (CSS, camelCase, dot notation, W3C)."""

from .css_generator import css_reference, generate_css_tokens, render_css
from .json_generators import (
    flatten_nested,
    generate_camel_case_tokens,
    generate_dot_notation_tokens,
    generate_w3c_tokens,
    set_nested_property,
)

__all__ = [
    "css_reference",
    "generate_css_tokens",
    "render_css",
    "flatten_nested",
    "generate_camel_case_tokens",
    "generate_dot_notation_tokens",
    "generate_w3c_tokens",
    "set_nested_property",
]
