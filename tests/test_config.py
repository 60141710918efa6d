"""Tests for configuration loading."""
from pathlib import Path

import pytest

from promproto.config import Config, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PROMPROTO_PORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


def test_defaults():
    config = Config()
    assert config.server.port == 8000
    assert config.server.path == "/metrics"
    assert config.format.framing == "family"
    assert config.format.const_labels == {}
    assert config.self_metrics.enabled is True


def test_load_yaml(tmp_path):
    path = write_config(tmp_path, """
global:
  log_level: DEBUG
server:
  port: 9100
format:
  framing: metric
  const_labels:
    job: api
""")

    config = load_config(path)

    assert config.global_.log_level == "DEBUG"
    assert config.server.port == 9100
    assert config.format.framing == "metric"
    assert config.format.const_labels == {"job": "api"}


def test_empty_file_gives_defaults(tmp_path):
    config = load_config(write_config(tmp_path, ""))
    assert config.server.port == 8000


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("PROMPROTO_PORT", "9200")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    config = load_config(write_config(tmp_path, "server:\n  port: 9100\n"))

    assert config.server.port == 9200
    assert config.global_.log_level == "WARNING"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_invalid_framing(tmp_path):
    with pytest.raises(ValueError, match="Configuration validation failed"):
        load_config(write_config(tmp_path, "format:\n  framing: lines\n"))


def test_invalid_path(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_config(tmp_path, "server:\n  path: metrics\n"))


def test_bundled_config_loads():
    config = load_config(str(Path(__file__).parent.parent / "configs" / "default.yaml"))
    assert config.server.path == "/metrics"
