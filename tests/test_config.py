"""Tests for configuration loading."""

import pytest
import yaml
from pydantic import ValidationError

from topictree.config import TopicTreeConfig, load_config


def test_load_config_from_yaml(tmp_path):
    config_data = {
        "storage": {"backend": "sqlite", "db_path": "/var/lib/topictree/tree.db"},
        "seed": {"enabled": False},
        "logging": {"level": "debug", "format": "json"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config_data))

    cfg = load_config(path)
    assert cfg.storage.db_path == "/var/lib/topictree/tree.db"
    assert cfg.storage.topics_key == "topics"
    assert cfg.seed.enabled is False
    assert cfg.logging.format == "json"


def test_load_config_defaults():
    cfg = TopicTreeConfig()
    assert cfg.storage.backend == "sqlite"
    assert cfg.storage.db_path == "./data/topictree.db"
    assert cfg.storage.contents_key == "contents"
    assert cfg.seed.enabled is True
    assert cfg.logging.level == "warning"


def test_load_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == TopicTreeConfig()


def test_load_config_file_not_found():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/path.yaml")


def test_invalid_backend_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.dump({"storage": {"backend": "s3"}}))
    with pytest.raises(ValidationError):
        load_config(path)


def test_unknown_log_level_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.dump({"logging": {"level": "verbose"}}))
    with pytest.raises(ValidationError):
        load_config(path)


def test_log_level_case_insensitive(tmp_path):
    path = tmp_path / "upper.yaml"
    path.write_text(yaml.dump({"logging": {"level": "DEBUG"}}))
    assert load_config(path).logging.level == "debug"
