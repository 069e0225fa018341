"""Tests for the JSON settings store."""

import json

from devtools_cli.config import settings


def test_defaults_when_file_missing(isolated_settings):
    settings.load_settings()

    assert settings.get_int("max_depth") == settings.DEFAULT_MAX_DEPTH
    assert settings.get_bool("color_enabled") is True
    assert settings.get_setting("session_title") == "DEV TOOLS CLI"


def test_file_values_override_defaults(isolated_settings):
    isolated_settings.write_text(json.dumps({"max_depth": 6, "session_title": "MINE"}))

    settings.load_settings()

    assert settings.get_int("max_depth") == 6
    assert settings.get_setting("session_title") == "MINE"
    assert settings.get_int("http_timeout_seconds") == settings.DEFAULT_HTTP_TIMEOUT_SECONDS


def test_invalid_json_falls_back_to_defaults(isolated_settings):
    isolated_settings.write_text("{not json")

    settings.load_settings()

    assert settings.settings_store.values == settings.DEFAULT_SETTINGS


def test_non_object_json_is_ignored(isolated_settings):
    isolated_settings.write_text("[1, 2, 3]")

    settings.load_settings()

    assert settings.settings_store.values == settings.DEFAULT_SETTINGS


def test_set_setting_persists(isolated_settings):
    settings.set_setting("color_enabled", False)

    saved = json.loads(isolated_settings.read_text())
    assert saved["color_enabled"] is False

    settings.load_settings()
    assert settings.get_bool("color_enabled", default=True) is False


def test_save_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "settings.json"

    settings.save_settings(path)

    assert json.loads(path.read_text()) == settings.DEFAULT_SETTINGS


def test_get_int_falls_back_on_bad_value():
    settings.settings_store.values["max_depth"] = "deep"
    assert settings.get_int("max_depth", 4) == 4

    settings.settings_store.values["max_depth"] = None
    assert settings.get_int("max_depth", 4) == 4


def test_get_setting_default_for_unknown_key():
    assert settings.get_setting("unknown", "fallback") == "fallback"
