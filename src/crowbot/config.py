from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv


def repo_root() -> Path:
    # Assumes this file lives at: repo/src/crowbot/config.py
    return Path(__file__).resolve().parents[2]


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class AppConfig:
    env: str
    log_level: str
    http_timeout_s: float
    search_engine: str
    settings: Dict[str, Any]


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    load_dotenv(repo_root() / ".env")

    settings_path = settings_path or (repo_root() / "configs" / "settings.yaml")
    settings = load_yaml(settings_path)

    env = os.getenv("APP_ENV", settings.get("app", {}).get("env", "local"))
    log_level = os.getenv("LOG_LEVEL", settings.get("logging", {}).get("level", "INFO"))

    timeout = settings.get("http", {}).get("timeout_s", 20)
    try:
        timeout_s = float(timeout)
    except (TypeError, ValueError) as e:
        raise ValueError(f"configs/settings.yaml: http.timeout_s must be a number, got {timeout!r}") from e

    engine = str(settings.get("search", {}).get("engine", "duckduckgo")).strip().lower()

    return AppConfig(
        env=str(env),
        log_level=str(log_level).upper(),
        http_timeout_s=timeout_s,
        search_engine=engine,
        settings=settings,
    )
