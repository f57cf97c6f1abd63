from pydantic import BaseModel, EmailStr, Field
from ..enums import SignupUserType


class SuperAdminSignupRequest(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class SchoolSignInRequest(SignInRequest):
    school_id: str = Field(min_length=1, max_length=64)


class SchoolSignupRequest(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    school_id: str = Field(min_length=1, max_length=64)
    user_type: SignupUserType
