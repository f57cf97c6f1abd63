from typing import Any, Dict, Optional

from schoolhub.core.config import get_token_expires_delta
from schoolhub.core.exceptions import DuplicateResourceError, UnauthenticatedError, ValidationError
from schoolhub.core.logging import logger
from schoolhub.core.model_factory import ModelRegistry
from schoolhub.core.security import (
    Principal,
    create_access_token,
    get_password_hash,
    verify_password,
)
from schoolhub.models import SystemUser, User
from schoolhub.models.descriptors import SYSTEM_USERS, USERS
from schoolhub.schemas.auth import (
    SchoolSignInRequest,
    SchoolSignupRequest,
    SignInRequest,
    SuperAdminSignupRequest,
)
from schoolhub.schemas.enums import UserRole
from schoolhub.services.school_service import SchoolService


class AuthService:
    """Account creation and sign-in for super admins and school members"""

    def __init__(self, models: ModelRegistry):
        self.models = models
        self.schools = SchoolService(models)

    # Tokens

    @staticmethod
    def issue_token(principal: Principal) -> Dict[str, Any]:
        expires_delta = get_token_expires_delta()
        return {
            "access_token": create_access_token(principal, expires_delta),
            "token_type": "bearer",
            "expires_in": int(expires_delta.total_seconds()),
            "user": principal.to_dict(),
        }

    @staticmethod
    def _check_credentials(account, password: str) -> None:
        if account is None or not verify_password(password, account.password_hash):
            raise UnauthenticatedError("Invalid email or password")
        if not account.is_active:
            raise UnauthenticatedError("Account is inactive")

    # Super admin

    async def signup_super_admin(self, data: SuperAdminSignupRequest) -> SystemUser:
        """Create the platform's single super admin"""
        users = await self.models.get(SYSTEM_USERS)

        if await users.count({"role": UserRole.SUPER_ADMIN.value}) > 0:
            raise ValidationError("Super admin already exists", error_code="SUPER_ADMIN_EXISTS")
        if await users.find_one({"email": data.email}) is not None:
            raise DuplicateResourceError("Email already registered")

        user = await users.insert_one({
            "name": data.name,
            "email": data.email,
            "password_hash": get_password_hash(data.password),
            "role": UserRole.SUPER_ADMIN,
        })
        logger.info(f"Super admin {user.id} created")
        return user

    async def signin_super_admin(self, data: SignInRequest) -> Dict[str, Any]:
        users = await self.models.get(SYSTEM_USERS)
        user = await users.find_one({"email": data.email})
        self._check_credentials(user, data.password)

        logger.info(f"Super admin {user.id} signed in", extra={'user_id': user.id})
        return self.issue_token(Principal(
            id=user.id,
            role=UserRole(user.role),
            email=user.email,
            name=user.name,
        ))

    async def ensure_super_admin(self, email: Optional[str], password: Optional[str]) -> Optional[SystemUser]:
        """Create the configured super admin at startup if none exists yet"""
        if not email or not password:
            return None

        users = await self.models.get(SYSTEM_USERS)
        if await users.count({"role": UserRole.SUPER_ADMIN.value}) > 0:
            return None

        logger.info(f"Bootstrapping super admin {email}")
        return await self.signup_super_admin(
            SuperAdminSignupRequest(name="Super Admin", email=email, password=password)
        )

    # School members

    async def signin_school_user(self, data: SchoolSignInRequest) -> Dict[str, Any]:
        school = await self.schools.require_active_school(data.school_id)

        users = await self.models.get(USERS, school.id)
        user = await users.find_one({"email": data.email})
        self._check_credentials(user, data.password)

        logger.info(
            f"User {user.id} signed in to school {school.id}",
            extra={'user_id': user.id, 'school_id': school.id}
        )
        return self.issue_token(Principal(
            id=user.id,
            role=UserRole(user.role),
            school_id=school.id,
            email=user.email,
            name=user.name,
        ))

    async def signup_school_user(self, data: SchoolSignupRequest) -> User:
        school = await self.schools.require_active_school(data.school_id)

        users = await self.models.get(USERS, school.id)
        if await users.find_one({"email": data.email}) is not None:
            raise DuplicateResourceError("Email already registered")

        user = await users.insert_one({
            "name": data.name,
            "email": data.email,
            "password_hash": get_password_hash(data.password),
            "role": data.user_type.to_role(),
        })
        logger.info(
            f"User {user.id} registered in school {school.id} as {user.role}",
            extra={'user_id': user.id, 'school_id': school.id}
        )
        return user
