"""
HemoScan - Модуль віддаленого AI

Компоненти:
- GeminiAdapter: Класифікація ризику та витягування значень зі звітів
- RemoteSuccess / RemoteFailure: Явний результат класифікації
- ExtractedReport: Санітизовані значення зі звіту
- sanitize_extraction: Дефолти та обрізання витягнутих значень

Приклад використання:
    from hemoscan.remote import GeminiAdapter, RemoteSuccess

    adapter = GeminiAdapter()
    outcome = adapter.classify_risk(record, local_prediction)

    if isinstance(outcome, RemoteSuccess):
        print(outcome.classification.risk_level.value)
"""

from .results import (
    ExtractedReport,
    RemoteClassification,
    RemoteFailure,
    RemoteOutcome,
    RemoteSuccess,
)
from .sanitize import NUMERIC_RANGES, clamp, sanitize_extraction
from .adapter import SUPPORTED_MEDIA_TYPES, GeminiAdapter


__all__ = [
    # Results
    "ExtractedReport",
    "RemoteClassification",
    "RemoteFailure",
    "RemoteOutcome",
    "RemoteSuccess",

    # Sanitize
    "NUMERIC_RANGES",
    "clamp",
    "sanitize_extraction",

    # Adapter
    "GeminiAdapter",
    "SUPPORTED_MEDIA_TYPES",
]
