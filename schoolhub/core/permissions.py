# schoolhub/core/permissions.py
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional
from fastapi import Depends

from schoolhub.core.exceptions import ForbiddenError, UnauthenticatedError
from schoolhub.core.logging import logger
from schoolhub.core.security import Principal, get_current_principal
from schoolhub.schemas.enums import UserRole


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason)


def authorize(principal: Optional[Principal], tenant_key: Optional[str]) -> AccessDecision:
    """
    Decide whether ``principal`` may touch ``tenant_key``'s partition.

    Super admins reach every partition. Everyone else only reaches their
    home school; a ``None`` tenant key is the system partition, which no
    school member belongs to.
    """
    if principal is None:
        return AccessDecision.deny(DenyReason.UNAUTHENTICATED)
    if not principal.is_super_admin and principal.school_id != tenant_key:
        return AccessDecision.deny(DenyReason.FORBIDDEN)
    return AccessDecision.allow()


def enforce_tenant_access(principal: Optional[Principal], tenant_key: Optional[str]) -> None:
    """Raise on denial; must run before any tenant-scoped read or write"""
    decision = authorize(principal, tenant_key)
    if decision.allowed:
        return
    if decision.reason == DenyReason.UNAUTHENTICATED:
        raise UnauthenticatedError()
    logger.warning(
        f"Cross-tenant access denied: user {principal.id} ({principal.role.value}) "
        f"from school {principal.school_id} requested school {tenant_key}"
    )
    raise ForbiddenError("Not authorized to access this school")


class RoleChecker:
    """Role gate usable as a FastAPI dependency"""

    def __init__(self, allowed_roles: Iterable[UserRole]):
        self.allowed_roles = frozenset(allowed_roles)

    async def __call__(self, principal: Principal = Depends(get_current_principal)) -> Principal:
        """Makes RoleChecker callable as a FastAPI dependency"""
        return self.check(principal)

    def check(self, principal: Optional[Principal]) -> Principal:
        if principal is None:
            raise UnauthenticatedError()
        if principal.role not in self.allowed_roles:
            logger.warning(
                f"Permission denied: User {principal.id} with role {principal.role.value} "
                f"attempted to access resource requiring roles {sorted(r.value for r in self.allowed_roles)}"
            )
            raise ForbiddenError("Operation not permitted")
        return principal


# Factory functions for common role checks
def require_super_admin() -> RoleChecker:
    return RoleChecker([UserRole.SUPER_ADMIN])


def require_school_admin() -> RoleChecker:
    return RoleChecker([UserRole.SUPER_ADMIN, UserRole.SCHOOL_ADMIN])


def require_academic_staff() -> RoleChecker:
    return RoleChecker([
        UserRole.SUPER_ADMIN,
        UserRole.SCHOOL_ADMIN,
        UserRole.TEACHER,
        UserRole.STAFF
    ])
