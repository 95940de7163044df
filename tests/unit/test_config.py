from __future__ import annotations

from pathlib import Path

import pytest

from cukes.core import config, paths


def test_config_path_prefers_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CUKES_CONFIG_PATH", str(tmp_path / "c.toml"))
    assert config.config_path() == tmp_path / "c.toml"


def test_config_path_falls_back_to_xdg(tmp_path, monkeypatch):
    monkeypatch.delenv("CUKES_CONFIG_PATH", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config.config_path() == tmp_path / "cukes" / "config.toml"


def test_missing_config_is_empty(tmp_path, monkeypatch):
    monkeypatch.setenv("CUKES_CONFIG_PATH", str(tmp_path / "absent.toml"))
    assert config.get_config() == {}
    assert config.get_config_value("features", "dir", default="d") == "d"


def test_invalid_config_raises(tmp_path, monkeypatch):
    p = tmp_path / "bad.toml"
    p.write_text("[features\n", encoding="utf-8")
    monkeypatch.setenv("CUKES_CONFIG_PATH", str(p))
    with pytest.raises(ValueError, match="Invalid config file"):
        config.load_config()


def test_features_dir_precedence(tmp_path, monkeypatch):
    p = tmp_path / "c.toml"
    p.write_text('[features]\ndir = "from-config"\npattern = "*.story"\n', encoding="utf-8")
    monkeypatch.setenv("CUKES_CONFIG_PATH", str(p))
    monkeypatch.delenv("CUKES_FEATURES_DIR", raising=False)

    assert paths.features_dir() == Path("from-config")
    assert paths.feature_pattern() == "*.story"

    monkeypatch.setenv("CUKES_FEATURES_DIR", str(tmp_path / "from-env"))
    assert paths.features_dir() == tmp_path / "from-env"
    assert paths.features_dir("cli") == Path("cli")
    assert paths.feature_pattern("x*.feature") == "x*.feature"


def test_features_dir_default(tmp_path, monkeypatch):
    monkeypatch.setenv("CUKES_CONFIG_PATH", str(tmp_path / "absent.toml"))
    monkeypatch.delenv("CUKES_FEATURES_DIR", raising=False)
    assert paths.features_dir() == paths.DEFAULT_FEATURES_DIR
    assert paths.feature_pattern() == "*.feature"
