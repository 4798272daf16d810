"""
Scalar value serialization helpers.

Values leave the engine in one of three shapes:
    - plain: JSON-ready (colors as channel mappings, aliases as
      {"type": "VARIABLE_ALIAS", "id": ...})
    - css: declaration text ('Inter', rgba(...), 4, true)
    - canonical: stable string used for value-equality checks
"""

import json
from typing import Any, Dict

from tokenexport.model import Alias, Color, Value


ALIAS_TYPE = "VARIABLE_ALIAS"


def color_to_dict(color: Color) -> Dict[str, float]:
    return {"r": color.r, "g": color.g, "b": color.b, "a": color.a}


def to_plain(value: Value) -> Any:
    """Convert a Value to its JSON-ready form."""
    if isinstance(value, Color):
        return color_to_dict(value)
    if isinstance(value, Alias):
        return {"type": ALIAS_TYPE, "id": value.id}
    return value


def canonical_key(value: Value) -> str:
    """
    Stable serialization for value-equality checks.

    Structurally equal values (including aliases to the same id)
    produce the same key. 1 and 1.0 compare equal, True and 1 do not.
    """
    return json.dumps(_normalize_numbers(to_plain(value)), sort_keys=True)


def _normalize_numbers(node: Any) -> Any:
    if isinstance(node, dict):
        return {key: _normalize_numbers(child) for key, child in node.items()}
    if isinstance(node, float) and node.is_integer():
        return int(node)
    return node


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def _channel(value: float) -> int:
    return round(value * 255)


def color_to_css(color: Color) -> str:
    """
    Render a color as CSS functional notation.

    Example:
        Color(1, 0, 0)        -> rgb(255, 0, 0)
        Color(0, 0, 0, 0.5)   -> rgba(0, 0, 0, 0.5)
    """
    r, g, b = _channel(color.r), _channel(color.g), _channel(color.b)
    if color.a >= 1:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {format_number(round(color.a, 4))})"


def quote_css_string(text: str) -> str:
    """Single-quote a CSS string, escaping backslashes and quotes."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def to_css_text(value: Value) -> str:
    """Render a literal Value as CSS declaration text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, Color):
        return color_to_css(value)
    if isinstance(value, str):
        return quote_css_string(value)
    raise TypeError(f"Unsupported value type for CSS: {type(value)}")


def sanitize_value(text: str) -> str:
    """Strip quote characters and a trailing semicolon from value text."""
    cleaned = text.replace("'", "").replace('"', "")
    if cleaned.endswith(";"):
        cleaned = cleaned[:-1]
    return cleaned
