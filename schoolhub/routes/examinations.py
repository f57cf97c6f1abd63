from typing import List

from fastapi import APIRouter, Depends, status

from schoolhub.core.dependencies import get_examination_service
from schoolhub.core.permissions import require_academic_staff
from schoolhub.core.security import Principal
from schoolhub.schemas.academics import (
    ExaminationCreateRequest,
    ExaminationResponse,
    ExaminationUpdateRequest,
)
from schoolhub.schemas.auth import MessageResponse
from schoolhub.services import ExaminationService

# The school comes from the ?school_id= query parameter or the caller's token
router = APIRouter()


@router.get("", response_model=List[ExaminationResponse])
async def list_examinations(
    examination_service: ExaminationService = Depends(get_examination_service)
):
    return await examination_service.list_examinations()


@router.post("", response_model=ExaminationResponse, status_code=status.HTTP_201_CREATED)
async def create_examination(
    request: ExaminationCreateRequest,
    current_user: Principal = Depends(require_academic_staff()),
    examination_service: ExaminationService = Depends(get_examination_service)
):
    return await examination_service.create_examination(current_user, request)


@router.get("/{examination_id}", response_model=ExaminationResponse)
async def get_examination(
    examination_id: str,
    examination_service: ExaminationService = Depends(get_examination_service)
):
    return await examination_service.get_examination(examination_id)


@router.patch("/{examination_id}", response_model=ExaminationResponse)
async def update_examination(
    examination_id: str,
    request: ExaminationUpdateRequest,
    current_user: Principal = Depends(require_academic_staff()),
    examination_service: ExaminationService = Depends(get_examination_service)
):
    return await examination_service.update_examination(examination_id, request)


@router.delete("/{examination_id}", response_model=MessageResponse)
async def delete_examination(
    examination_id: str,
    current_user: Principal = Depends(require_academic_staff()),
    examination_service: ExaminationService = Depends(get_examination_service)
):
    await examination_service.delete_examination(examination_id)
    return MessageResponse(message="Examination deleted successfully", id=examination_id)
