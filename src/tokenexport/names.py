"""
Name transformer: variable paths to format-specific identifiers.

    color/brand/primary  ->  --color-brand-primary   (cssVar)
                         ->  colorBrandPrimary       (camelCase)
                         ->  color.brand.primary     (dotNotation, w3c)

Every transform is deterministic and idempotent.
"""

import re
from typing import List, Tuple

from tokenexport.model import ExportFormat


PATH_SEPARATOR = "/"

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_SPLIT_RE = re.compile(r"[/\s\-_]+")


def split_path(path: str) -> Tuple[str, ...]:
    """Split a variable path into stripped, non-empty segments."""
    return tuple(part.strip() for part in path.split(PATH_SEPARATOR) if part.strip())


def to_css_variable_name(path: str) -> str:
    """
    Convert a path to a CSS custom property name.

    Example:
        "Color/Brand Primary" -> "--color-brand-primary"
    """
    name = "-".join(split_path(path)).lower()
    name = _WHITESPACE_RE.sub("-", name)
    if name.startswith("--"):
        return name
    return f"--{name}"


def to_camel_case_name(path: str) -> str:
    """
    Convert a path to a camelCase identifier.

    Example:
        "color/brand/primary" -> "colorBrandPrimary"
    """
    words: List[str] = [w for w in _WORD_SPLIT_RE.split(path) if w]
    if not words:
        return ""
    head = words[0][0].lower() + words[0][1:]
    tail = [w[0].upper() + w[1:] for w in words[1:]]
    return head + "".join(tail)


def to_dot_path(path: str) -> str:
    return ".".join(split_path(path))


def transform_name(path: str, export_format: ExportFormat) -> str:
    """
    Map a variable path to the flat identifier used by a format.

    For the nested formats (dotNotation, w3c) this is the dotted path;
    generators use split_path() for the actual nesting. The minimized
    set names its entries the CSS way.
    """
    if export_format in (ExportFormat.CSS_VAR, ExportFormat.MINIMIZED_SET):
        return to_css_variable_name(path)
    if export_format == ExportFormat.CAMEL_CASE:
        return to_camel_case_name(path)
    if export_format in (ExportFormat.DOT_NOTATION, ExportFormat.W3C):
        return to_dot_path(path)
    raise ValueError(f"Unsupported export format: {export_format}")
