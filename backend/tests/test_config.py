"""Tests for config loading and storage root path resolution."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from minidrive.config import AppConfig, StorageSettings, load_config


def test_defaults_when_settings_file_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    cfg = load_config(settings_path=tmp_path / "missing.yaml")

    assert cfg.server.port == 8080
    assert cfg.logging.level == "info"
    assert cfg.storage.max_depth is None
    assert Path(cfg.storage.root_dir) == tmp_path / "uploads"


def test_root_dir_relative_to_settings_file(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    settings_file = config_dir / "minidrive.settings.yaml"
    settings_file.write_text(
        "server:\n"
        "  port: 9090\n"
        "storage:\n"
        "  root_dir: data/uploads\n"
        "  max_depth: 3\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)

    assert cfg.server.port == 9090
    assert cfg.storage.max_depth == 3
    assert Path(cfg.storage.root_dir) == config_dir / "data" / "uploads"


def test_absolute_root_dir_unchanged(tmp_path):
    absolute_root = tmp_path / "absolute" / "store"
    settings_file = tmp_path / "minidrive.settings.yaml"
    settings_file.write_text(
        "storage:\n"
        f"  root_dir: {absolute_root}\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.root_dir) == absolute_root


def test_empty_settings_file_gives_defaults(tmp_path):
    settings_file = tmp_path / "minidrive.settings.yaml"
    settings_file.write_text("", encoding="utf-8")

    cfg = load_config(settings_path=settings_file)
    assert cfg.server.host == "0.0.0.0"
    assert cfg.storage.max_files_per_upload == 1000


def test_negative_max_depth_rejected():
    with pytest.raises(ValidationError):
        StorageSettings(max_depth=-1)


def test_config_serialisation():
    d = AppConfig().model_dump()
    assert set(d) == {"server", "storage", "logging"}
