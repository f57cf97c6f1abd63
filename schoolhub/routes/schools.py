from typing import List

from fastapi import APIRouter, Depends, status

from schoolhub.core.dependencies import (
    TenantContext,
    get_class_service,
    get_school_service,
    get_subject_service,
    get_tenant_context,
)
from schoolhub.core.permissions import require_school_admin, require_super_admin
from schoolhub.core.security import Principal
from schoolhub.schemas.academics import (
    ClassCreateRequest,
    ClassResponse,
    SubjectCreateRequest,
    SubjectResponse,
)
from schoolhub.schemas.school import (
    SchoolCreateRequest,
    SchoolCreatedResponse,
    SchoolDetailResponse,
    SchoolListResponse,
    SchoolResponse,
)
from schoolhub.services import ClassService, SchoolService, SubjectService

router = APIRouter()


@router.post("", response_model=SchoolCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_school(
    request: SchoolCreateRequest,
    current_user: Principal = Depends(require_super_admin()),
    school_service: SchoolService = Depends(get_school_service)
):
    """Register a school and provision its partition (Super Admin only)"""
    school = await school_service.provision_school(request)
    return {
        "message": "School created successfully",
        "school": SchoolResponse.model_validate(school),
    }


@router.get("", response_model=SchoolListResponse)
async def list_schools(
    current_user: Principal = Depends(require_super_admin()),
    school_service: SchoolService = Depends(get_school_service)
):
    schools = await school_service.list_schools()
    return {"schools": [SchoolResponse.model_validate(school) for school in schools]}


@router.get("/{school_id}", response_model=SchoolDetailResponse)
async def get_school(
    context: TenantContext = Depends(get_tenant_context),
    school_service: SchoolService = Depends(get_school_service)
):
    """School details with member and catalogue counts"""
    school = await school_service.get_school(context.tenant_key)
    stats = await school_service.get_school_stats(context.tenant_key)
    return SchoolDetailResponse(
        **SchoolResponse.model_validate(school).model_dump(),
        stats=stats
    )


# Classes

@router.get("/{school_id}/classes", response_model=List[ClassResponse])
async def list_classes(class_service: ClassService = Depends(get_class_service)):
    return await class_service.list_classes()


@router.post("/{school_id}/classes", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(
    request: ClassCreateRequest,
    current_user: Principal = Depends(require_school_admin()),
    class_service: ClassService = Depends(get_class_service)
):
    return await class_service.create_class(current_user, request)


# Subjects

@router.get("/{school_id}/subjects", response_model=List[SubjectResponse])
async def list_subjects(subject_service: SubjectService = Depends(get_subject_service)):
    return await subject_service.list_subjects()


@router.post("/{school_id}/subjects", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(
    request: SubjectCreateRequest,
    current_user: Principal = Depends(require_school_admin()),
    subject_service: SubjectService = Depends(get_subject_service)
):
    return await subject_service.create_subject(request)
