"""HemoScan - Завантаження конфігурації"""
import yaml
from enum import Enum
from pathlib import Path
from dataclasses import asdict
from .settings import HemoScanConfig


def _plain(value):
    # Enum -> value, щоб YAML лишався читабельним без python/object тегів
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def save_yaml(config: HemoScanConfig, path: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _plain(asdict(config))
    # Ключ API не пишемо на диск
    data["remote"]["api_key"] = None
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def save_config(config: HemoScanConfig, path: str) -> None:
    save_yaml(config, path)


def load_config(path: str) -> HemoScanConfig:
    return HemoScanConfig.from_dict(load_yaml(path))
