"""Tests for export settings loading."""

import pytest
from tokenexport.settings import (
    DEFAULT_SETTINGS,
    ExportSettings,
    SettingsError,
    load_settings,
    settings_from_yaml,
)


def test_defaults():
    assert DEFAULT_SETTINGS == ExportSettings(css_selector=":root", css_indent="  ", json_indent=2)


def test_empty_yaml_gives_defaults():
    assert settings_from_yaml("") == DEFAULT_SETTINGS


def test_partial_override():
    settings = settings_from_yaml("css_selector: '.dark'\n")
    assert settings.css_selector == ".dark"
    assert settings.json_indent == 2


def test_unknown_key():
    with pytest.raises(SettingsError):
        settings_from_yaml("colour: red\n")


def test_not_a_mapping():
    with pytest.raises(SettingsError):
        settings_from_yaml("- a\n- b\n")


def test_load_settings_file(tmp_path):
    path = tmp_path / "export.yaml"
    path.write_text("json_indent: 4\n", encoding="utf-8")
    assert load_settings(str(path)).json_indent == 4


@pytest.mark.parametrize("text", ["[]\n", "0\n", "false\n", "'dark'\n"])
def test_falsy_or_scalar_document_is_not_a_mapping(text):
    with pytest.raises(SettingsError):
        settings_from_yaml(text)


def test_empty_mapping_gives_defaults():
    assert settings_from_yaml("{}\n") == DEFAULT_SETTINGS


@pytest.mark.parametrize("text", [
    "json_indent: [1]\n",
    "json_indent: '2'\n",
    "json_indent: true\n",
    "css_selector: 3\n",
    "css_indent: [' ']\n",
])
def test_wrong_value_types(text):
    with pytest.raises(SettingsError):
        settings_from_yaml(text)


def test_null_json_indent_is_allowed():
    assert settings_from_yaml("json_indent: null\n").json_indent is None
