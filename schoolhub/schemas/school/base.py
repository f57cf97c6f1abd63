from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional, Dict, List
from ..enums import SchoolStatus, SubscriptionTier


class SchoolRecord(BaseModel):
    """Stored shape of a school registry entry"""
    name: str = Field(min_length=2, max_length=255)
    address: str = Field(min_length=5, max_length=255)
    phone: str = Field(min_length=10, max_length=32)
    email: EmailStr
    website: Optional[str] = None
    description: Optional[str] = None
    principal_name: str = Field(min_length=2, max_length=255)
    principal_email: EmailStr
    subscription_tier: SubscriptionTier = SubscriptionTier.BASIC
    features: Dict[str, bool] = Field(default_factory=dict)
    ai_features: List[str] = Field(default_factory=list)
    status: SchoolStatus = SchoolStatus.PENDING

    @validator('website', pre=True)
    def blank_website_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True
