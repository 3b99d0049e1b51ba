"""HemoScan - Промпти для віддаленого AI"""

from google.genai import types

from hemoscan.schemas import LocalPrediction, PatientRecord


CLASSIFICATION_SYSTEM_INSTRUCTION = (
    "You are a Senior Hematopathology Consultant working with ML predictions. "
    "Analyze blood lab data and provide precise clinical classifications based on WHO guidelines. "
    "Consider the ML prediction but rely on your medical expertise for final classification. "
    "riskLevel must be one of: Low, Moderate, High, Critical. "
    "confidenceScore must be a number between 0 and 1."
)

EXTRACTION_PROMPT = (
    "Act as a Medical Clinical Data Specialist. Extract the following from this lab report:\n"
    "1. Hemoglobin (Hb) in g/dL\n"
    "2. MCV (Mean Corpuscular Volume) in fL\n"
    "3. MCH (Mean Corpuscular Hemoglobin) in pg\n"
    "4. MCHC (Mean Corpuscular Hemoglobin Concentration) in g/dL\n"
    "5. Patient's Name\n"
    "6. Age (years)\n"
    "7. Gender (M/F/Male/Female)\n"
    "8. Test Date or Report Date (format: YYYY-MM-DD)\n\n"
    "If a value is not clearly present in the report, omit that key. "
    "Output strictly in JSON format."
)

CLASSIFICATION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "classification": types.Schema(type=types.Type.STRING),
        "confidenceScore": types.Schema(type=types.Type.NUMBER),
        "riskLevel": types.Schema(type=types.Type.STRING),
        "analysisSummary": types.Schema(type=types.Type.STRING),
    },
    required=["classification", "confidenceScore", "riskLevel", "analysisSummary"],
)

EXTRACTION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "hemoglobin": types.Schema(type=types.Type.NUMBER),
        "mcv": types.Schema(type=types.Type.NUMBER),
        "mch": types.Schema(type=types.Type.NUMBER),
        "mchc": types.Schema(type=types.Type.NUMBER),
        "gender": types.Schema(type=types.Type.STRING),
        "age": types.Schema(type=types.Type.NUMBER),
        "name": types.Schema(type=types.Type.STRING),
        "testDate": types.Schema(type=types.Type.STRING),
    },
)


def build_classification_prompt(record: PatientRecord, local: LocalPrediction) -> str:
    """Промпт оцінки ризику: значення пацієнта + передбачення локальної моделі"""
    return (
        "Perform a comprehensive hematology risk assessment for the following patient profile:\n"
        f"  - Gender: {record.gender.value}\n"
        f"  - Age: {record.age}\n"
        f"  - Hemoglobin (Hb): {record.hemoglobin} g/dL\n"
        f"  - MCV (Mean Corpuscular Volume): {record.mcv} fL\n"
        f"  - MCH (Mean Corpuscular Hemoglobin): {record.mch} pg\n"
        f"  - MCHC (MCH Concentration): {record.mchc} g/dL\n\n"
        f"Our ML model predicts: {local.label.upper()} "
        f"(confidence: {local.confidence * 100:.1f}%)\n\n"
        "Evaluate the relationship between these primary red cell indices. "
        "Classify the anemia type (if present) and provide a professional clinical summary "
        "that considers both the ML prediction and the blood values."
    )
