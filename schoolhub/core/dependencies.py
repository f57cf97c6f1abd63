from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request

from schoolhub.core.exceptions import ValidationError
from schoolhub.core.model_factory import BoundModel, ModelRegistry, SchemaDescriptor
from schoolhub.core.permissions import enforce_tenant_access
from schoolhub.core.security import Principal, get_current_principal
from schoolhub.core.tenancy import resolve_tenant_key
from schoolhub.models.descriptors import CLASSES, SUBJECTS, EXAMINATIONS, RESULTS
from schoolhub.services.auth_service import AuthService
from schoolhub.services.class_service import ClassService, SubjectService
from schoolhub.services.examination_service import ExaminationService
from schoolhub.services.result_service import ResultService
from schoolhub.services.school_service import SchoolService

TENANT_PARAM = "school_id"


@dataclass(frozen=True)
class TenantContext:
    """Authorized principal plus the tenant the request operates on"""
    principal: Principal
    tenant_key: str


# Registry access
def get_model_registry(request: Request) -> ModelRegistry:
    return request.app.state.models


# Service providers
def get_school_service(models: ModelRegistry = Depends(get_model_registry)) -> SchoolService:
    return SchoolService(models)


def get_auth_service(models: ModelRegistry = Depends(get_model_registry)) -> AuthService:
    return AuthService(models)


# Tenant resolution and the access gate
def get_requested_school_id(request: Request) -> Optional[str]:
    """Explicit school id from the path, then the query string"""
    return request.path_params.get(TENANT_PARAM) or request.query_params.get(TENANT_PARAM)


def get_tenant_key(
    request: Request,
    principal: Principal = Depends(get_current_principal)
) -> Optional[str]:
    """The school a request targets: path, then query, then the caller's home school"""
    return resolve_tenant_key(principal, get_requested_school_id(request))


async def get_tenant_context(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    tenant_key: Optional[str] = Depends(get_tenant_key),
    school_service: SchoolService = Depends(get_school_service)
) -> TenantContext:
    """
    Enforce the access guard for the resolved school.

    Nothing in the tenant's partition is touched before the guard passes.
    """
    enforce_tenant_access(principal, tenant_key)

    if tenant_key is None:
        raise ValidationError(
            message="School ID is required",
            details=[{"path": TENANT_PARAM, "message": "Field required"}]
        )

    await school_service.require_active_school(tenant_key)
    request.state.tenant_key = tenant_key
    return TenantContext(principal=principal, tenant_key=tenant_key)


def tenant_model(descriptor: SchemaDescriptor) -> Callable[..., Awaitable[BoundModel]]:
    """Dependency factory returning ``descriptor`` bound to the authorized tenant"""
    async def dependency(
        context: TenantContext = Depends(get_tenant_context),
        models: ModelRegistry = Depends(get_model_registry)
    ) -> BoundModel:
        return await models.get(descriptor, context.tenant_key)
    return dependency


# Tenant-scoped service providers
def get_class_service(classes: BoundModel = Depends(tenant_model(CLASSES))) -> ClassService:
    return ClassService(classes)


def get_subject_service(subjects: BoundModel = Depends(tenant_model(SUBJECTS))) -> SubjectService:
    return SubjectService(subjects)


def get_examination_service(
    examinations: BoundModel = Depends(tenant_model(EXAMINATIONS))
) -> ExaminationService:
    return ExaminationService(examinations)


def get_result_service(results: BoundModel = Depends(tenant_model(RESULTS))) -> ResultService:
    return ResultService(results)
