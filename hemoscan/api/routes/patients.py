"""
HemoScan - Patient Routes

Архів звітів, плани відновлення та історія гемоглобіну.
"""

import asyncio

from fastapi import APIRouter, Depends

from hemoscan.recovery import hemoglobin_history
from ..dependencies import ServicesManager, get_services
from ..models import HistoryResponse, RecoveryPathsResponse, ReportsResponse

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("/{patient_id}/reports", response_model=ReportsResponse)
async def list_reports(
    patient_id: str,
    services: ServicesManager = Depends(get_services)
) -> ReportsResponse:
    """Звіти пацієнта, найновіший першим"""
    reports = await asyncio.to_thread(services.service.archive.list_reports_for_patient, patient_id)
    return ReportsResponse(patient_id=patient_id, reports=reports, total=len(reports))


@router.get("/{patient_id}/recovery", response_model=RecoveryPathsResponse)
async def list_recovery_paths(
    patient_id: str,
    services: ServicesManager = Depends(get_services)
) -> RecoveryPathsResponse:
    """Плани відновлення пацієнта, найновіший першим"""
    paths = await asyncio.to_thread(services.service.archive.list_recovery_paths, patient_id)
    return RecoveryPathsResponse(patient_id=patient_id, recovery_paths=paths, total=len(paths))


@router.get("/{patient_id}/history", response_model=HistoryResponse)
async def get_history(
    patient_id: str,
    services: ServicesManager = Depends(get_services)
) -> HistoryResponse:
    """Хронологічна серія гемоглобіну для графіка"""
    reports = await asyncio.to_thread(services.service.archive.list_reports_for_patient, patient_id)
    return HistoryResponse(patient_id=patient_id, points=hemoglobin_history(reports))
