"""
HemoScan - Модуль гібридного скринінгу

Компоненти:
- HybridCombiner: Локальна модель + віддалений AI → ScreeningResult
- classify_by_indices: Правила ML-only режиму (MCV)
- ScreeningService: Скринінг + архів + план відновлення

Приклад використання:
    from hemoscan.pipeline import ScreeningService
    from hemoscan.config import get_default_config

    service = ScreeningService.from_config(get_default_config())
    outcome = service.screen("patient-1", record)

    print(outcome.result.mode.value)
    print(outcome.result.analysis_summary)
"""

from .rules import classify_by_indices, hybrid_summary, ml_only_summary
from .combiner import HybridCombiner
from .service import ScreeningOutcome, ScreeningService


__all__ = [
    # Rules
    "classify_by_indices",
    "hybrid_summary",
    "ml_only_summary",

    # Combiner
    "HybridCombiner",

    # Service
    "ScreeningOutcome",
    "ScreeningService",
]
