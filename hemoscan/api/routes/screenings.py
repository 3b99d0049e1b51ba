"""
HemoScan - Screening Routes

Скринінг одного запису: локальна модель + віддалений AI + архів.
"""

from fastapi import APIRouter, Depends

from ..dependencies import ServicesManager, get_services
from ..models import ScreeningRequest, ScreeningResponse

router = APIRouter(prefix="/screenings", tags=["Screening"])


@router.post("", response_model=ScreeningResponse)
async def create_screening(
    request: ScreeningRequest,
    services: ServicesManager = Depends(get_services)
) -> ScreeningResponse:
    """
    Скринінг на анемію.

    Приклад:
    ```json
    {
        "patient_id": "patient-1",
        "record": {"name": "Alex", "age": 34, "gender": "female",
                   "hemoglobin": 9.8, "mcv": 72, "mch": 23, "mchc": 30}
    }
    ```
    """
    outcome = await services.service.ascreen(request.patient_id, request.record, request.persist)

    return ScreeningResponse(
        patient_id=request.patient_id,
        record=outcome.record,
        result=outcome.result,
        report_id=outcome.report.report_id if outcome.report else None,
        recovery=outcome.recovery,
    )
