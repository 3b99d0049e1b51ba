"""
HemoScan - Extraction Routes

Витягування значень аналізу з фото або PDF лабораторного звіту.
"""

import asyncio

from fastapi import APIRouter, Depends, File, UploadFile

from hemoscan.remote import ExtractedReport
from ..dependencies import ServicesManager, get_services
from ..models import ErrorResponse

router = APIRouter(prefix="/extractions", tags=["Extraction"])


@router.post(
    "",
    response_model=ExtractedReport,
    responses={415: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def extract_report(
    file: UploadFile = File(..., description="image/jpeg, image/png, image/webp або application/pdf"),
    services: ServicesManager = Depends(get_services)
) -> ExtractedReport:
    """
    Розпізнати лабораторний звіт.

    Без налаштованого ключа Gemini повертає 503: для цієї операції
    локальної альтернативи немає.
    """
    content = await file.read()
    return await asyncio.to_thread(
        services.service.remote.extract_report, content, file.content_type
    )
