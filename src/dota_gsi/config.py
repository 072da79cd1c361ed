"""加载 config.yaml 与默认配置。"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

_CONFIG: dict[str, Any] | None = None


def _default_config() -> dict[str, Any]:
    return {
        "server": {
            "host": "127.0.0.1",
            "port": 9001,
            "path": "/",
            "debug": False,
        },
        "client": {
            "url": "http://127.0.0.1:9001/",
            "timeout": 10.0,
            "delay": 0.5,
        },
        "logging": {
            "level": "INFO",
        },
        "output": {
            "dir": "output",
            "state_file": "state.json",
        },
        "snapshot_dir": "snapshots",
    }


def load_config(config_path: str | Path | None = None, reload: bool = False) -> dict[str, Any]:
    """加载配置；若未提供路径则依次查找 DOTA_GSI_CONFIG、当前目录与项目根的 config.yaml。"""
    global _CONFIG
    if _CONFIG is not None and not reload and config_path is None:
        return _CONFIG

    base = _default_config()

    if config_path is None and os.environ.get("DOTA_GSI_CONFIG"):
        config_path = os.environ["DOTA_GSI_CONFIG"]
    if config_path is None:
        for root in [Path.cwd(), Path(__file__).resolve().parent.parent.parent]:
            p = root / "config.yaml"
            if p.is_file():
                config_path = p
                break

    if config_path and Path(config_path).is_file():
        with open(config_path, encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
        for key, value in user.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                base[key] = {**base[key], **value}
            else:
                base[key] = value

    _CONFIG = base
    return _CONFIG


def get_output_dir() -> Path:
    cfg = load_config()
    out = Path(cfg["output"]["dir"])
    out.mkdir(parents=True, exist_ok=True)
    return out
