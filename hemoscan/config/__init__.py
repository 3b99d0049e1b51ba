"""HemoScan - Модуль конфігурації"""
from .settings import (
    HemoScanConfig,
    get_default_config,
    RiskModelConfig,
    RemoteConfig,
    RecoveryConfig,
    ArchiveConfig,
    ArchiveBackend,
    DEFAULT_DATASET_PATH,
)
from .loader import save_config, load_config, save_yaml, load_yaml

__all__ = [
    "HemoScanConfig",
    "get_default_config",
    "RiskModelConfig",
    "RemoteConfig",
    "RecoveryConfig",
    "ArchiveConfig",
    "ArchiveBackend",
    "DEFAULT_DATASET_PATH",
    "save_config",
    "load_config",
    "save_yaml",
    "load_yaml",
]
