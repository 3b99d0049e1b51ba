"""
HemoScan - Правила ML-only режиму та тексти підсумків

Детерміновані функції без стану: одна й та сама пара
(PatientRecord, LocalPrediction) завжди дає той самий результат.
"""

from hemoscan.schemas import AnemiaType, LocalPrediction, PatientRecord


MICROCYTIC_MCV = 80.0
MACROCYTIC_MCV = 100.0

HYBRID_HEADER = "Hybrid Analysis (ML + AI)"
ML_ONLY_HEADER = "ML-Only Analysis (Ridge Classifier)"


def classify_by_indices(record: PatientRecord, local: LocalPrediction) -> AnemiaType:
    """
    Класифікація за передбаченням локальної моделі та MCV.

    - норма за моделлю → NO_ANEMIA
    - MCV < 80 → мікроцитарна (ймовірно дефіцит заліза)
    - MCV > 100 → макроцитарна (ймовірно дефіцит B12/фолату)
    - інакше → нормоцитарна
    """
    if not local.is_anemic:
        return AnemiaType.NO_ANEMIA
    if record.mcv < MICROCYTIC_MCV:
        return AnemiaType.MICROCYTIC
    if record.mcv > MACROCYTIC_MCV:
        return AnemiaType.MACROCYTIC
    return AnemiaType.NORMOCYTIC


def hybrid_summary(local: LocalPrediction, remote_summary: str, combined_confidence: float) -> str:
    return (
        f"{HYBRID_HEADER}:\n\n"
        f"ML Prediction: {local.label} ({local.confidence * 100:.1f}% confidence)\n\n"
        f"{remote_summary.strip()}\n\n"
        f"Combined Confidence Score: {combined_confidence * 100:.1f}%"
    )


def ml_only_summary(
    record: PatientRecord,
    local: LocalPrediction,
    classification: AnemiaType,
    reason: str
) -> str:
    hb_marker = "LOW" if record.is_hemoglobin_low else "OK"
    if local.is_anemic:
        closing = (
            "Recommendation: Consult a healthcare provider for comprehensive "
            "evaluation and treatment plan."
        )
    else:
        closing = "Blood values appear within normal ranges based on ML analysis."

    return (
        f"{ML_ONLY_HEADER} - remote AI unavailable: {reason}\n\n"
        f"Prediction: {local.label.upper()}\n"
        f"Confidence: {local.confidence * 100:.1f}%\n"
        f"Risk Level: {local.risk_band.value}\n\n"
        "Blood Values:\n"
        f"  - Hemoglobin: {record.hemoglobin} g/dL {hb_marker}\n"
        f"  - MCV: {record.mcv} fL\n"
        f"  - MCH: {record.mch} pg\n"
        f"  - MCHC: {record.mchc} g/dL\n\n"
        f"Classification: {classification.value}\n\n"
        f"{closing}"
    )
