from fastapi import APIRouter, Depends, status

from schoolhub.core.dependencies import get_auth_service
from schoolhub.core.security import Principal, get_current_principal
from schoolhub.schemas.auth import (
    MeResponse,
    MessageResponse,
    SchoolSignInRequest,
    SchoolSignupRequest,
    SignInRequest,
    SuperAdminSignupRequest,
    TokenResponse,
)
from schoolhub.services import AuthService

router = APIRouter()


@router.post("/super-admin/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def super_admin_signup(
    request: SuperAdminSignupRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    """Create the platform super admin; only one may exist"""
    user = await auth_service.signup_super_admin(request)
    return MessageResponse(message="Super admin created successfully", id=user.id)


@router.post("/super-admin/signin", response_model=TokenResponse)
async def super_admin_signin(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    return await auth_service.signin_super_admin(request)


@router.post("/school/signin", response_model=TokenResponse)
async def school_signin(
    request: SchoolSignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Sign in to a school; the token is bound to that school"""
    return await auth_service.signin_school_user(request)


@router.post("/school/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def school_signup(
    request: SchoolSignupRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    user = await auth_service.signup_school_user(request)
    return MessageResponse(message="User created successfully", id=user.id)


@router.get("/me", response_model=MeResponse)
async def me(principal: Principal = Depends(get_current_principal)):
    return {"user": principal.to_dict()}
