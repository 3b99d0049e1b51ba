"""
HemoScan - Model Routes

Пряме передбачення локальної моделі (без віддаленого AI та архіву).
"""

import asyncio

from fastapi import APIRouter, Depends

from ..dependencies import ServicesManager, get_services
from ..models import PredictRequest, PredictResponse

router = APIRouter(prefix="/model", tags=["Model"])


@router.post("/predict", response_model=PredictResponse)
async def predict(
    request: PredictRequest,
    services: ServicesManager = Depends(get_services)
) -> PredictResponse:
    """Якщо модель ще навчається, запит дочекається завершення навчання"""
    prediction = await asyncio.to_thread(
        services.service.model.predict,
        request.gender.code,
        request.hemoglobin,
        request.mcv,
        request.mch,
        request.mchc,
    )
    return PredictResponse(
        score=prediction.score,
        label=prediction.label,
        is_anemic=prediction.is_anemic,
        confidence=prediction.confidence,
        risk_band=prediction.risk_band,
    )
