"""
HemoScan - Адаптер віддаленого AI (Google Gemini)

Дві операції:
1. classify_risk: класифікація ризику → RemoteSuccess | RemoteFailure
   (збій не фатальний - комбайнер переходить у ML-only режим)
2. extract_report: витягування значень з фото/PDF звіту → ExtractedReport
   (збій фатальний для операції - ExtractionError)

Транспортні помилки ніколи не виходять за межі адаптера у сирому вигляді:
вони класифікуються як RemoteErrorKind.
"""

import json
import logging
import random
import time
from datetime import date
from typing import Any, Callable, Dict, Optional

import httpx
from google import genai
from google.genai import types
from google.genai.errors import APIError
from pydantic import ValidationError

from hemoscan.config import RemoteConfig
from hemoscan.errors import ExtractionError, RemoteErrorKind, RemoteServiceError
from hemoscan.schemas import LocalPrediction, PatientRecord
from .prompts import (
    CLASSIFICATION_SCHEMA,
    CLASSIFICATION_SYSTEM_INSTRUCTION,
    EXTRACTION_PROMPT,
    EXTRACTION_SCHEMA,
    build_classification_prompt,
)
from .results import ExtractedReport, RemoteClassification, RemoteFailure, RemoteOutcome, RemoteSuccess
from .sanitize import sanitize_extraction


logger = logging.getLogger(__name__)

SUPPORTED_MEDIA_TYPES = ("image/jpeg", "image/png", "image/webp", "application/pdf")

# 429 (quota) та 503 (перевантаження) повторюємо з backoff
RETRYABLE_CODES = (429, 503)

LAB_FIELDS = ("hemoglobin", "mcv", "mch", "mchc")

MISSING_KEY_MESSAGE = (
    "Gemini API key not configured. Set GEMINI_API_KEY and restart the server."
)
INVALID_KEY_MESSAGE = "Invalid Gemini API key. Please check your configuration."
EXTRACTION_FAILED_MESSAGE = "Failed to extract data from report. Please try a clearer image."


class GeminiAdapter:
    """
    Адаптер до Gemini через google-genai.

    Приклад використання:
        adapter = GeminiAdapter(RemoteConfig(api_key="..."))

        outcome = adapter.classify_risk(record, local_prediction)
        if isinstance(outcome, RemoteSuccess):
            print(outcome.classification.classification)
        else:
            print(f"Remote unavailable: {outcome.kind.value}")

        extracted = adapter.extract_report(image_bytes, "image/png")
    """

    def __init__(
        self,
        config: Optional[RemoteConfig] = None,
        client: Any = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            config: Параметри віддаленого сервісу
            client: Готовий клієнт з .models.generate_content (для тестів)
            sleep: Функція очікування між повторами
        """
        self.config = config or RemoteConfig()
        self._client = client
        self._sleep = sleep

    @property
    def is_configured(self) -> bool:
        """Чи є з чим ходити в сервіс (ключ або переданий клієнт)"""
        return self._client is not None or self.config.is_configured

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key.strip())
        return self._client

    # -------------------------------------------------------------------------
    # Транспорт
    # -------------------------------------------------------------------------

    def _generate(self, contents, schema: types.Schema, system_instruction: Optional[str] = None):
        """Виклик generate_content з retry та класифікацією помилок"""
        generate_config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
            system_instruction=system_instruction,
            temperature=self.config.temperature,
        )
        client = self._get_client()

        attempts = max(1, self.config.max_retries)
        for attempt in range(attempts):
            try:
                return client.models.generate_content(
                    model=self.config.model,
                    contents=contents,
                    config=generate_config,
                )
            except APIError as e:
                if e.code in RETRYABLE_CODES and attempt < attempts - 1:
                    delay = self.config.retry_base_delay * (2 ** attempt) + random.uniform(0, 1)
                    logger.warning(
                        "Gemini %s error, retrying in %.2fs (attempt %d/%d)",
                        e.code, delay, attempt + 1, attempts
                    )
                    self._sleep(delay)
                    continue
                raise _classify_api_error(e) from e
            except httpx.HTTPError as e:
                raise RemoteServiceError(RemoteErrorKind.TRANSPORT, f"Network error: {e}") from e
            except Exception as e:
                # SDK може кидати власні винятки поза APIError
                raise RemoteServiceError(
                    RemoteErrorKind.TRANSPORT, f"{type(e).__name__}: {e}"
                ) from e

    @staticmethod
    def _parse_json(response) -> Dict[str, Any]:
        text = getattr(response, "text", None)
        if not text:
            raise RemoteServiceError(RemoteErrorKind.MALFORMED_RESPONSE, "Empty response from Gemini")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RemoteServiceError(
                RemoteErrorKind.MALFORMED_RESPONSE, f"Response is not valid JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise RemoteServiceError(
                RemoteErrorKind.MALFORMED_RESPONSE, "Response JSON is not an object"
            )
        return data

    # -------------------------------------------------------------------------
    # Класифікація ризику
    # -------------------------------------------------------------------------

    def classify_risk(self, record: PatientRecord, local: LocalPrediction) -> RemoteOutcome:
        """
        Запросити клінічну класифікацію.

        Ніколи не кидає для зовнішніх збоїв - повертає RemoteFailure.
        """
        if not self.is_configured:
            logger.warning("No Gemini API key configured, using ML-only analysis")
            return RemoteFailure(RemoteErrorKind.MISSING_CREDENTIALS, "Gemini API key not configured")

        try:
            response = self._generate(
                build_classification_prompt(record, local),
                CLASSIFICATION_SCHEMA,
                system_instruction=CLASSIFICATION_SYSTEM_INSTRUCTION,
            )
            data = self._parse_json(response)
        except RemoteServiceError as e:
            logger.warning("AI analysis unavailable (%s): %s", e.kind.value, e.message)
            return RemoteFailure(e.kind, e.message)

        try:
            classification = RemoteClassification.model_validate(data)
        except ValidationError as e:
            logger.warning("AI analysis rejected, response failed schema validation: %s", e)
            return RemoteFailure(RemoteErrorKind.MALFORMED_RESPONSE, f"Schema validation failed: {e}")

        logger.info("AI analysis complete: %s", classification.classification)
        return RemoteSuccess(classification)

    # -------------------------------------------------------------------------
    # Витягування значень зі звіту
    # -------------------------------------------------------------------------

    def extract_report(
        self,
        content: bytes,
        mime_type: str,
        today: Optional[date] = None
    ) -> ExtractedReport:
        """
        Витягти CBC значення з фото або PDF звіту.

        Args:
            content: Бінарний вміст файлу
            mime_type: image/jpeg, image/png, image/webp або application/pdf
            today: Дата за замовчуванням для testDate

        Raises:
            ExtractionError: немає ключа, непідтримуваний тип, збій сервісу
                або у звіті не знайдено жодного лабораторного значення
        """
        mime_type = (mime_type or "").split(";")[0].strip().lower()
        if mime_type not in SUPPORTED_MEDIA_TYPES:
            raise ExtractionError(
                RemoteErrorKind.UNSUPPORTED_MEDIA,
                f"Unsupported file type {mime_type or 'unknown'!r}. "
                f"Upload one of: {', '.join(SUPPORTED_MEDIA_TYPES)}",
            )
        if not content:
            raise ExtractionError(RemoteErrorKind.UNSUPPORTED_MEDIA, "Uploaded file is empty")

        if not self.is_configured:
            logger.error("Report extraction requested but Gemini API key is not configured")
            raise ExtractionError(RemoteErrorKind.MISSING_CREDENTIALS, MISSING_KEY_MESSAGE)

        logger.info("Sending report (%s, %d bytes) to Gemini for extraction", mime_type, len(content))
        try:
            response = self._generate(
                [types.Part.from_bytes(data=content, mime_type=mime_type), EXTRACTION_PROMPT],
                EXTRACTION_SCHEMA,
            )
            data = self._parse_json(response)
        except RemoteServiceError as e:
            logger.error("Report extraction failed (%s): %s", e.kind.value, e.message)
            if e.kind is RemoteErrorKind.INVALID_CREDENTIALS:
                raise ExtractionError(e.kind, INVALID_KEY_MESSAGE) from e
            raise ExtractionError(e.kind, EXTRACTION_FAILED_MESSAGE) from e

        extracted = sanitize_extraction(data, today=today)

        # Без жодного лабораторного значення повернули б лише вигадані дефолти
        if all(name in extracted.defaulted_fields for name in LAB_FIELDS):
            logger.error("Report extraction returned no lab values")
            raise ExtractionError(RemoteErrorKind.MALFORMED_RESPONSE, EXTRACTION_FAILED_MESSAGE)

        logger.info("Parsed lab report (defaulted: %s)", extracted.defaulted_fields or "none")
        return extracted


def _classify_api_error(error: APIError) -> RemoteServiceError:
    """APIError → RemoteServiceError з відповідною категорією"""
    message = str(getattr(error, "message", None) or error)
    if error.code in (401, 403) or (error.code == 400 and "api key" in message.lower()):
        return RemoteServiceError(RemoteErrorKind.INVALID_CREDENTIALS, f"Gemini rejected credentials: {message}")
    return RemoteServiceError(RemoteErrorKind.TRANSPORT, f"Gemini API error {error.code}: {message}")
