import json

import pytest

from icon_extractor.config import config_manager
from icon_extractor.config.config_manager import DEFAULT_CONFIG, load_config, merge_config


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "get_config_path", lambda: path)
    return path


def test_first_load_writes_defaults(config_path):
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert json.loads(config_path.read_text()) == DEFAULT_CONFIG


def test_partial_file_is_completed_from_defaults(config_path):
    config_path.write_text(json.dumps({"EXTRACTION": {"default_format": "png"}}))

    config = load_config()

    assert config["EXTRACTION"]["default_format"] == "png"
    assert config["EXTRACTION"]["output_basename"] == "icon"
    assert config["LOGGING"] == DEFAULT_CONFIG["LOGGING"]


def test_broken_file_falls_back_to_defaults(config_path):
    config_path.write_text("{not json")
    assert load_config() == DEFAULT_CONFIG


def test_loaded_config_does_not_share_defaults(config_path):
    config = load_config()
    config["EXTRACTION"]["default_index"] = 7
    assert DEFAULT_CONFIG["EXTRACTION"]["default_index"] == 0


def test_merge_replaces_scalars_and_recurses_into_sections():
    merged = merge_config({"a": 1, "b": {"c": 2, "d": 3}}, {"a": 5, "b": {"d": 4}})
    assert merged == {"a": 5, "b": {"c": 2, "d": 4}}
