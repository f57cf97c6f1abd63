# schoolhub/core/security.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import secrets
from typing import Dict, Optional, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request

from schoolhub.core.config import settings, get_token_expires_delta
from schoolhub.core.exceptions import UnauthenticatedError
from schoolhub.core.logging import logger
from schoolhub.schemas.enums import UserRole


class SecurityConfig:
    """Security configuration constants"""
    PASSWORD_ROUNDS = 12
    ACCESS_TOKEN_TYPE = "access"


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=SecurityConfig.PASSWORD_ROUNDS
)


@dataclass(frozen=True)
class Principal:
    """
    The authenticated caller of a request.

    Built from a verified access token and never mutated afterwards.
    ``school_id`` is the home tenant; super admins have none.
    """
    id: str
    role: UserRole
    school_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "school_id": self.school_id,
        }


def get_password_hash(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
    """Create access token carrying the principal's identity, role and home school"""
    expire = datetime.now(timezone.utc) + (expires_delta or get_token_expires_delta())
    to_encode = {
        "sub": principal.id,
        "role": principal.role.value,
        "school_id": principal.school_id,
        "email": principal.email,
        "name": principal.name,
        "iss": settings.TOKEN_ISSUER,
        "exp": expire,
        "type": SecurityConfig.ACCESS_TOKEN_TYPE,
        "jti": secrets.token_urlsafe(16),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Principal:
    """
    Verify a JWT and rebuild the principal from its claims.

    Raises UnauthenticatedError for bad signatures, expired tokens, wrong
    token types and unknown roles.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            issuer=settings.TOKEN_ISSUER
        )
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        raise UnauthenticatedError("Invalid or expired token")

    if payload.get("type") != SecurityConfig.ACCESS_TOKEN_TYPE:
        raise UnauthenticatedError("Invalid token type")

    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        raise UnauthenticatedError("Invalid token role")

    subject = payload.get("sub")
    if not subject:
        raise UnauthenticatedError("Invalid token subject")

    return Principal(
        id=subject,
        role=role,
        school_id=payload.get("school_id") or None,
        email=payload.get("email"),
        name=payload.get("name"),
    )


def extract_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the access_token cookie"""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None

    token = request.cookies.get("access_token")
    if token:
        return token.replace("Bearer ", "").strip('"') or None
    return None


async def get_optional_principal(request: Request) -> Optional[Principal]:
    """The caller's principal, or None when no token was sent"""
    token = extract_token(request)
    if token is None:
        return None
    principal = decode_access_token(token)
    request.state.principal = principal
    return principal


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal)
) -> Principal:
    if principal is None:
        raise UnauthenticatedError("Not authenticated - No token found")
    return principal
