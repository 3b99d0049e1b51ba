"""
HemoScan - Модуль датасету

Компоненти:
- DatasetLoader: читання CSV датасету анемії
- TrainingSample: один навчальний приклад
- samples_to_arrays: приклади → (X, y)

Приклад використання:
    from hemoscan.dataset import load_dataset, samples_to_arrays

    samples = load_dataset()
    X, y = samples_to_arrays(samples)
"""

from .loader import (
    DatasetLoader,
    TrainingSample,
    load_dataset,
    samples_to_arrays,
    REQUIRED_COLUMNS,
    FEATURE_NAMES,
)

__all__ = [
    "DatasetLoader",
    "TrainingSample",
    "load_dataset",
    "samples_to_arrays",
    "REQUIRED_COLUMNS",
    "FEATURE_NAMES",
]
