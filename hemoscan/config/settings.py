"""
HemoScan - Налаштування системи

Всі параметри системи зібрані в dataclass-и для:
- Типізації та валідації
- Легкого доступу через config.risk_model.epochs
- Серіалізації в YAML
"""

import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum


DEFAULT_DATASET_PATH = str(Path(__file__).resolve().parent.parent / "data" / "anemia_dataset.csv")

# Значення ключа, які вважаються "не налаштовано"
PLACEHOLDER_API_KEYS = ("your_api_key_here", "dummy-key")


# =============================================================================
# ENUMS
# =============================================================================

class ArchiveBackend(str, Enum):
    """Реалізація архіву звітів"""
    MEMORY = "memory"
    SQLITE = "sqlite"


# =============================================================================
# LINEAR RISK MODEL
# =============================================================================

@dataclass
class RiskModelConfig:
    """Параметри лінійної моделі ризику (ridge-логістична регресія)"""

    # Архітектура
    n_features: int = 5  # gender, hemoglobin, mcv, mch, mchc

    # Навчання
    learning_rate: float = 0.01
    l2: float = 0.01
    epochs: int = 100
    batch_size: int = 32
    validation_split: float = 0.2
    seed: int = 42

    # Стандартизація
    epsilon: float = 1e-7

    # Пороги
    low_threshold: float = 0.3
    high_threshold: float = 0.6
    decision_threshold: float = 0.5

    # Дані
    dataset_path: str = DEFAULT_DATASET_PATH

    # Лог прогресу кожні N епох
    log_every: int = 20


# =============================================================================
# REMOTE AI
# =============================================================================

@dataclass
class RemoteConfig:
    """Параметри віддаленого AI сервісу (Gemini)"""

    api_key: Optional[str] = None
    model: str = "gemini-2.5-flash"
    temperature: float = 0.0

    # Retry для 429/503
    max_retries: int = 3
    retry_base_delay: float = 2.0

    @property
    def is_configured(self) -> bool:
        """Чи задано валідний (не placeholder) ключ"""
        if not self.api_key:
            return False
        key = self.api_key.strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS


# =============================================================================
# RECOVERY PATH
# =============================================================================

@dataclass
class RecoveryConfig:
    """Параметри аналізу тренду та плану відновлення"""

    # Зміна гемоглобіну (g/dL), нижче якої тренд вважається стабільним
    trend_threshold: float = 0.5

    # Дні до контрольного аналізу за рівнем ризику
    follow_up_days: Dict[str, int] = field(default_factory=lambda: {
        "Critical": 7,
        "High": 14,
        "Moderate": 30,
        "Low": 90,
    })
    default_follow_up_days: int = 30

    # Пороги гемоглобіну для правил
    urgent_hemoglobin: float = 10.0
    pacing_hemoglobin: float = 11.0

    # Перегляд дозування
    dosage_review_drop_percent: float = -10.0
    dosage_review_low_hemoglobin: float = 10.0
    dosage_review_mcv_shift: float = 5.0


# =============================================================================
# ARCHIVE
# =============================================================================

@dataclass
class ArchiveConfig:
    """Параметри архіву звітів"""
    backend: ArchiveBackend = ArchiveBackend.MEMORY
    sqlite_path: str = "hemoscan.db"


# =============================================================================
# MAIN CONFIGURATION
# =============================================================================

@dataclass
class HemoScanConfig:
    """
    Головна конфігурація HemoScan

    Об'єднує всі параметри системи в одному місці.

    Приклад використання:
        config = HemoScanConfig()
        print(config.risk_model.epochs)  # 100
        print(config.recovery.follow_up_days["High"])  # 14
    """

    version: str = "1.0.0"
    project_name: str = "HemoScan"

    risk_model: RiskModelConfig = field(default_factory=RiskModelConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    recovery: RecoveryConfig = field(default_factory=RecoveryConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)

    @classmethod
    def from_env(cls) -> "HemoScanConfig":
        """Створити конфігурацію з environment variables"""
        config = cls()

        raw_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if raw_key:
            # Прибираємо пробіли та лапки, які часто потрапляють з .env
            config.remote.api_key = raw_key.strip().replace('"', "").replace("'", "")

        if os.getenv("GEMINI_MODEL"):
            config.remote.model = os.getenv("GEMINI_MODEL").strip()

        if os.getenv("HEMOSCAN_DATASET"):
            config.risk_model.dataset_path = os.getenv("HEMOSCAN_DATASET")

        if os.getenv("HEMOSCAN_ARCHIVE"):
            config.archive.backend = ArchiveBackend(os.getenv("HEMOSCAN_ARCHIVE").lower())

        if os.getenv("HEMOSCAN_SQLITE_PATH"):
            config.archive.sqlite_path = os.getenv("HEMOSCAN_SQLITE_PATH")

        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HemoScanConfig":
        """Відновити конфігурацію зі словника (наприклад, з YAML)"""
        return _build_dataclass(cls, data or {})


def _build_dataclass(dc_type, data: Dict[str, Any]):
    known = {f.name: f for f in fields(dc_type)}
    unknown = set(data) - set(known)
    if unknown:
        raise ValueError(f"Unknown config keys for {dc_type.__name__}: {sorted(unknown)}")

    kwargs = {}
    for name, value in data.items():
        default = getattr(dc_type(), name)
        if is_dataclass(default) and isinstance(value, dict):
            kwargs[name] = _build_dataclass(type(default), value)
        elif isinstance(default, Enum):
            kwargs[name] = type(default)(value)
        else:
            kwargs[name] = value
    return dc_type(**kwargs)


# =============================================================================
# DEFAULT CONFIG INSTANCE
# =============================================================================

def get_default_config() -> HemoScanConfig:
    """Отримати конфігурацію за замовчуванням (з урахуванням env)"""
    return HemoScanConfig.from_env()
