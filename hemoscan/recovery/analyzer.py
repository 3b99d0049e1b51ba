"""
HemoScan - Аналізатор тренду та плану відновлення

Порівнює новий звіт з попереднім:
    delta = Hb_new - Hb_prev
    delta >  0.5 → Increasing / Improving
    delta < -0.5 → Decreasing / Declining
    інакше       → Stable / Stable (improvement = 0)

Ризик Critical завжди дає статус Critical, незалежно від тренду.
"""

import logging
from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from hemoscan.archive import ReportArchive
from hemoscan.config import RecoveryConfig
from hemoscan.errors import ReportNotFoundError
from hemoscan.schemas import (
    ArchivedReport,
    HemoglobinTrend,
    HistoryPoint,
    PatientRecord,
    RecoveryPath,
    RecoveryRecord,
    RecoveryStatus,
    RiskLevel,
    ScreeningResult,
)

from .rules import dietary_suggestions_for, lifestyle_changes_for, recommendations_for


logger = logging.getLogger(__name__)


def hemoglobin_trend(
    previous: float,
    current: float,
    threshold: float = 0.5
) -> Tuple[HemoglobinTrend, RecoveryStatus, Optional[float]]:
    """
    Тренд, статус та відсоток зміни гемоглобіну.

    Відсоток округлено до 2 знаків; None, якщо попередній Hb = 0.
    """
    delta = current - previous

    if delta > threshold:
        trend, status = HemoglobinTrend.INCREASING, RecoveryStatus.IMPROVING
    elif delta < -threshold:
        trend, status = HemoglobinTrend.DECREASING, RecoveryStatus.DECLINING
    else:
        return HemoglobinTrend.STABLE, RecoveryStatus.STABLE, 0.0

    if previous == 0:
        return trend, status, None
    return trend, status, round(delta / previous * 100, 2)


def follow_up_date(risk_level: RiskLevel, today: date, config: Optional[RecoveryConfig] = None) -> date:
    """Дата контрольного аналізу: Critical 7, High 14, Moderate 30, Low 90 днів"""
    config = config or RecoveryConfig()
    level = risk_level.value if isinstance(risk_level, RiskLevel) else str(risk_level)
    days = config.follow_up_days.get(level, config.default_follow_up_days)
    return today + timedelta(days=days)


def needs_dosage_review(
    previous: PatientRecord,
    current: PatientRecord,
    improvement_percentage: Optional[float],
    config: Optional[RecoveryConfig] = None
) -> bool:
    """Чи варто переглянути дозування препаратів"""
    config = config or RecoveryConfig()
    if improvement_percentage is not None and improvement_percentage < config.dosage_review_drop_percent:
        return True
    low = config.dosage_review_low_hemoglobin
    if current.hemoglobin < low and previous.hemoglobin < low:
        return True
    return abs(current.mcv - previous.mcv) > config.dosage_review_mcv_shift


def hemoglobin_history(reports: Sequence[ArchivedReport]) -> List[HistoryPoint]:
    """Хронологічна серія (найстаріший першим) для графіків"""
    ordered = sorted(reports, key=lambda r: r.record.observed_at)
    return [
        HistoryPoint(
            observed_at=r.record.observed_at,
            hemoglobin=r.record.hemoglobin,
            mcv=r.record.mcv,
            confidence_score=r.result.confidence_score,
            risk_level=r.result.risk_level.value,
        )
        for r in ordered
    ]


class RecoveryAnalyzer:
    """
    Генерація плану відновлення після збереження нового звіту.

    Приклад використання:
        analyzer = RecoveryAnalyzer(archive)

        saved = archive.save_report(patient_id, record, result)
        recovery = analyzer.generate(patient_id, record, result, report_id=saved.report_id)

        if recovery is None:
            print("First report, nothing to compare with yet")
        else:
            print(recovery.path.current_status.value)
    """

    def __init__(
        self,
        archive: ReportArchive,
        config: Optional[RecoveryConfig] = None,
        clock: Callable[[], date] = date.today
    ):
        """
        Args:
            archive: Архів звітів (джерело історії та місце збереження)
            config: Пороги та таблиця контрольних дат
            clock: Джерело "сьогодні" для дати контролю
        """
        self.archive = archive
        self.config = config or RecoveryConfig()
        self.clock = clock

    def derive(
        self,
        record: PatientRecord,
        result: ScreeningResult,
        previous: PatientRecord,
        today: Optional[date] = None
    ) -> RecoveryPath:
        """План відновлення за новим та попереднім записами (без побічних ефектів)"""
        today = today or self.clock()

        trend, status, improvement = hemoglobin_trend(
            previous.hemoglobin, record.hemoglobin, self.config.trend_threshold
        )
        if result.risk_level == RiskLevel.CRITICAL:
            status = RecoveryStatus.CRITICAL

        return RecoveryPath(
            current_status=status,
            hemoglobin_trend=trend,
            improvement_percentage=improvement,
            recommendations=recommendations_for(result.classification, record.hemoglobin, self.config),
            dietary_suggestions=dietary_suggestions_for(result.classification),
            lifestyle_changes=lifestyle_changes_for(result.classification, record.hemoglobin, self.config),
            follow_up_date=follow_up_date(result.risk_level, today, self.config),
            needs_dosage_review=needs_dosage_review(previous, record, improvement, self.config),
            ai_insights=result.analysis_summary,
        )

    def generate(
        self,
        patient_id: str,
        record: PatientRecord,
        result: ScreeningResult,
        report_id: Optional[str] = None
    ) -> Optional[RecoveryRecord]:
        """
        Побудувати та зберегти план для щойно збереженого звіту.

        Args:
            patient_id: Пацієнт
            record, result: Новий запис та його результат
            report_id: Щойно збережений звіт (за замовчуванням найновіший в архіві)

        Returns:
            RecoveryRecord або None, якщо попереднього звіту ще немає

        Raises:
            ReportNotFoundError: в архіві немає жодного звіту пацієнта
        """
        reports = self.archive.list_reports_for_patient(patient_id)
        if not reports:
            raise ReportNotFoundError(f"No archived report for patient {patient_id}")

        current = reports[0] if report_id is None else next(
            (r for r in reports if r.report_id == report_id), None
        )
        if current is None:
            raise ReportNotFoundError(f"Report {report_id} not found for patient {patient_id}")

        earlier = [r for r in reports if r.report_id != current.report_id]
        if not earlier:
            logger.info("Patient %s has a single report, no recovery path yet", patient_id)
            return None

        path = self.derive(record, result, earlier[0].record)
        saved = self.archive.save_recovery_path(patient_id, current.report_id, path)

        logger.info(
            "Recovery path for %s: %s (trend=%s, follow-up %s)",
            patient_id, path.current_status.value,
            path.hemoglobin_trend.value, path.follow_up_date.isoformat()
        )
        return saved
