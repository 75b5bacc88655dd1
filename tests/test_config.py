import pytest

from crowbot.config import load_config, load_yaml


def test_load_config_from_file(tmp_path, monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    p = tmp_path / "settings.yaml"
    p.write_text("app:\n  env: test\nlogging:\n  level: debug\nhttp:\n  timeout_s: 5\nsearch:\n  engine: Google\n")

    cfg = load_config(p)
    assert cfg.env == "test"
    assert cfg.log_level == "DEBUG"
    assert cfg.http_timeout_s == 5.0
    assert cfg.search_engine == "google"


def test_env_overrides(tmp_path, monkeypatch):
    p = tmp_path / "settings.yaml"
    p.write_text("app:\n  env: test\n")
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    cfg = load_config(p)
    assert cfg.env == "prod"
    assert cfg.log_level == "WARNING"
    assert cfg.search_engine == "duckduckgo"


def test_bad_timeout(tmp_path, monkeypatch):
    p = tmp_path / "settings.yaml"
    p.write_text("http:\n  timeout_s: soon\n")
    with pytest.raises(ValueError):
        load_config(p)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / "missing.yaml")
