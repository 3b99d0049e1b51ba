"""
HemoScan - Гібридний комбайнер

Порядок завжди однаковий:
1. Передбачення локальної моделі (навчає модель, якщо ще не навчена)
2. Спроба віддаленої класифікації
3. RemoteSuccess → гібрид: мітка та ризик від AI, впевненість = середнє
   RemoteFailure → ML-only: детерміновані правила від локальної моделі
"""

import logging

from hemoscan.remote import GeminiAdapter, RemoteFailure, RemoteOutcome, RemoteSuccess
from hemoscan.risk_model import LinearRiskModel
from hemoscan.schemas import AnalysisMode, LocalPrediction, PatientRecord, ScreeningResult

from .rules import classify_by_indices, hybrid_summary, ml_only_summary


logger = logging.getLogger(__name__)


class HybridCombiner:
    """
    Фінальний ScreeningResult для PatientRecord.

    Приклад використання:
        combiner = HybridCombiner(LinearRiskModel(), GeminiAdapter())
        result = combiner.classify(record)

        print(result.mode.value)            # "hybrid" або "ml_only"
        print(result.classification)
        print(f"{result.confidence_score:.1%}")
    """

    def __init__(self, model: LinearRiskModel, remote: GeminiAdapter):
        """
        Args:
            model: Локальна модель (будь-що з predict_record)
            remote: Адаптер віддаленого AI (будь-що з classify_risk)
        """
        self.model = model
        self.remote = remote

    def classify(self, record: PatientRecord) -> ScreeningResult:
        local = self.model.predict_record(record)
        logger.info(
            "Local prediction: %s (score=%.3f, confidence=%.1f%%, band=%s)",
            local.label, local.score, local.confidence * 100, local.risk_band.value
        )

        outcome = self.remote.classify_risk(record, local)
        return self.combine(record, local, outcome)

    def combine(
        self,
        record: PatientRecord,
        local: LocalPrediction,
        outcome: RemoteOutcome
    ) -> ScreeningResult:
        """Результат за вже отриманими локальним та віддаленим виходами"""
        if isinstance(outcome, RemoteSuccess):
            return self._hybrid(local, outcome)
        if isinstance(outcome, RemoteFailure):
            return self.fallback(record, local, reason=outcome.message)
        raise TypeError(f"Unexpected remote outcome: {outcome!r}")

    @staticmethod
    def _hybrid(local: LocalPrediction, outcome: RemoteSuccess) -> ScreeningResult:
        remote = outcome.classification
        combined = (remote.confidence_score + local.confidence) / 2

        return ScreeningResult(
            classification=remote.classification,
            confidence_score=combined,
            risk_level=remote.risk_level,
            analysis_summary=hybrid_summary(local, remote.analysis_summary, combined),
            mode=AnalysisMode.HYBRID,
            local_prediction=local,
        )

    @staticmethod
    def fallback(record: PatientRecord, local: LocalPrediction, reason: str = "not configured") -> ScreeningResult:
        """ML-only результат: лише локальна модель та MCV"""
        classification = classify_by_indices(record, local)
        logger.info("ML-only classification: %s", classification.value)

        return ScreeningResult(
            classification=classification.value,
            confidence_score=local.confidence,
            risk_level=local.risk_band.to_risk_level(),
            analysis_summary=ml_only_summary(record, local, classification, reason),
            mode=AnalysisMode.ML_ONLY,
            local_prediction=local,
        )
