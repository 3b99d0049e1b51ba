"""
HemoScan - Модуль плану відновлення

Компоненти:
- RecoveryAnalyzer: Тренд гемоглобіну → RecoveryPath → архів
- hemoglobin_trend / follow_up_date / needs_dosage_review: Чисті правила
- hemoglobin_history: Серія для графіків

Приклад використання:
    from hemoscan.recovery import RecoveryAnalyzer, hemoglobin_trend

    trend, status, pct = hemoglobin_trend(previous=10.0, current=10.6)
    # (Increasing, Improving, 6.0)

    analyzer = RecoveryAnalyzer(archive)
    recovery = analyzer.generate(patient_id, record, result)
"""

from .rules import dietary_suggestions_for, lifestyle_changes_for, recommendations_for
from .analyzer import (
    RecoveryAnalyzer,
    follow_up_date,
    hemoglobin_history,
    hemoglobin_trend,
    needs_dosage_review,
)


__all__ = [
    # Rules
    "recommendations_for",
    "dietary_suggestions_for",
    "lifestyle_changes_for",

    # Analyzer
    "RecoveryAnalyzer",
    "hemoglobin_trend",
    "follow_up_date",
    "needs_dosage_review",
    "hemoglobin_history",
]
