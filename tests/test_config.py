"""Tests for configuration loading."""

import json
import logging

import pytest
from wind.config import DEFAULT_CONFIG, config_path, load_config
from wind.constants import EditorConstants
from wind.document import Document, Row
from wind.editor import Editor


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "missing.json")
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_defaults_are_not_shared(tmp_path):
    config = load_config(tmp_path / "missing.json")
    config["logging"]["keytrace"] = True
    assert DEFAULT_CONFIG["logging"]["keytrace"] is False


def test_overrides_merge_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "placeholder_path": "scratch.txt",
        "logging": {"keytrace": True},
    }))

    config = load_config(path)

    assert config["placeholder_path"] == "scratch.txt"
    assert config["logging"] == {"file_level": "INFO", "keytrace": True}


def test_invalid_json_falls_back(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with caplog.at_level(logging.WARNING, logger="wind.config"):
        config = load_config(path)

    assert config == DEFAULT_CONFIG
    assert "Could not load config" in caplog.text


def test_non_dict_is_ignored(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")

    with caplog.at_level(logging.WARNING, logger="wind.config"):
        config = load_config(path)

    assert config == DEFAULT_CONFIG
    assert "invalid format" in caplog.text


def test_config_path_location():
    path = config_path()
    assert path.name == "config.json"
    assert path.parent.name == "wind"


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return path


@pytest.mark.parametrize("data", [
    {"logging": "verbose"},
    {"logging": ["keytrace"]},
    {"logging": {"keytrace": "yes"}},
    {"logging": {"keytrace": 1}},
    {"logging": {"file_level": 10}},
])
def test_mistyped_logging_values_keep_defaults(tmp_path, caplog, data):
    with caplog.at_level(logging.WARNING, logger="wind.config"):
        config = load_config(write_config(tmp_path, data))

    assert config["logging"] == DEFAULT_CONFIG["logging"]
    assert "Ignoring config key" in caplog.text


@pytest.mark.parametrize("value", [None, 42, "", "   ", ["a.txt"]])
def test_invalid_placeholder_path_keeps_default(tmp_path, value):
    config = load_config(write_config(tmp_path, {"placeholder_path": value}))
    assert config["placeholder_path"] == EditorConstants.PLACEHOLDER_PATH


def test_null_placeholder_path_still_saves(tmp_path, monkeypatch):
    config = load_config(write_config(tmp_path, {"placeholder_path": None}))
    monkeypatch.chdir(tmp_path)
    editor = Editor(Document([Row("abc")]), placeholder_path=config["placeholder_path"])

    assert editor.save() is True
    assert (tmp_path / EditorConstants.PLACEHOLDER_PATH).read_bytes().startswith(b"abc")


def test_unknown_keys_are_kept(tmp_path):
    config = load_config(write_config(tmp_path, {"theme": "dark"}))
    assert config["theme"] == "dark"
