"""
Export rendering settings.

Settings only affect the text rendering of a document, never the
document itself. They can be loaded from a YAML mapping:

    css_selector: ":root"
    css_indent: "  "
    json_indent: 2
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

from tokenexport.model import TokenExportError


class SettingsError(TokenExportError):
    """Raised when a settings file is malformed."""
    pass


@dataclass(frozen=True)
class ExportSettings:
    css_selector: str = ":root"
    css_indent: str = "  "
    json_indent: Optional[int] = 2


DEFAULT_SETTINGS = ExportSettings()


def settings_from_dict(d: Optional[Dict[str, Any]]) -> ExportSettings:
    if d is None:
        return DEFAULT_SETTINGS
    if not isinstance(d, dict):
        raise SettingsError(f"Settings must be a mapping, got {type(d).__name__}")
    known = {f.name for f in fields(ExportSettings)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(unknown)}")
    for key in ("css_selector", "css_indent"):
        if key in d and not isinstance(d[key], str):
            raise SettingsError(f"{key} must be a string, got {type(d[key]).__name__}")
    json_indent = d.get("json_indent")
    # bool is an int subclass but not an indent
    if json_indent is not None and (isinstance(json_indent, bool) or not isinstance(json_indent, int)):
        raise SettingsError(f"json_indent must be an integer or null, got {type(json_indent).__name__}")
    return replace(DEFAULT_SETTINGS, **d)


def settings_from_yaml(text: str) -> ExportSettings:
    return settings_from_dict(yaml.safe_load(text))


def load_settings(path: str) -> ExportSettings:
    """
    Read settings from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SettingsError: If the content is not a valid settings mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        return settings_from_yaml(f.read())


__all__ = [
    "ExportSettings",
    "SettingsError",
    "DEFAULT_SETTINGS",
    "settings_from_dict",
    "settings_from_yaml",
    "load_settings",
]
