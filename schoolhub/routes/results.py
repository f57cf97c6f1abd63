from typing import List

from fastapi import APIRouter, Depends, status

from schoolhub.core.dependencies import get_result_service
from schoolhub.core.permissions import require_academic_staff
from schoolhub.core.security import Principal
from schoolhub.schemas.academics import ResultCreateRequest, ResultResponse
from schoolhub.schemas.auth import MessageResponse
from schoolhub.services import ResultService

router = APIRouter()


@router.get("", response_model=List[ResultResponse])
async def list_results(result_service: ResultService = Depends(get_result_service)):
    return await result_service.list_results()


@router.post("", response_model=ResultResponse, status_code=status.HTTP_201_CREATED)
async def record_result(
    request: ResultCreateRequest,
    current_user: Principal = Depends(require_academic_staff()),
    result_service: ResultService = Depends(get_result_service)
):
    """Record a score; percentage and grade are computed"""
    return await result_service.record_result(current_user, request)


@router.get("/{result_id}", response_model=ResultResponse)
async def get_result(
    result_id: str,
    result_service: ResultService = Depends(get_result_service)
):
    return await result_service.get_result(result_id)


@router.delete("/{result_id}", response_model=MessageResponse)
async def delete_result(
    result_id: str,
    current_user: Principal = Depends(require_academic_staff()),
    result_service: ResultService = Depends(get_result_service)
):
    await result_service.delete_result(result_id)
    return MessageResponse(message="Result deleted successfully", id=result_id)
