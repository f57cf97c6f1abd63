# schoolhub/schemas/user/base.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from ..enums import UserRole


class SystemUserRecord(BaseModel):
    """Stored shape of a super admin account"""
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password_hash: str
    role: UserRole = UserRole.SUPER_ADMIN
    is_active: bool = True

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True


class UserRecord(BaseModel):
    """Stored shape of a school member account"""
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password_hash: str
    role: UserRole
    phone: Optional[str] = None
    is_active: bool = True

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True
