from pydantic import BaseModel, EmailStr, Field, AnyUrl, validator
from typing import Optional, Dict, List, Any
from ..enums import SubscriptionTier


class SubscriptionRequest(BaseModel):
    tier: SubscriptionTier = SubscriptionTier.BASIC
    features: Dict[str, bool] = Field(default_factory=dict)
    ai_features: List[str] = Field(default_factory=list)


class SchoolCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    address: str = Field(min_length=5, max_length=255)
    phone: str = Field(min_length=10, max_length=32, examples=["+254722000000"])
    email: EmailStr
    website: Optional[AnyUrl] = None
    description: Optional[str] = None
    principal_name: str = Field(min_length=2, max_length=255)
    principal_email: EmailStr
    subscription: SubscriptionRequest = Field(default_factory=SubscriptionRequest)

    @validator('website', pre=True)
    def blank_website_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_record(self) -> Dict[str, Any]:
        """Flatten into the stored school shape"""
        return {
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "website": str(self.website) if self.website else None,
            "description": self.description,
            "principal_name": self.principal_name,
            "principal_email": self.principal_email,
            "subscription_tier": self.subscription.tier,
            "features": self.subscription.features,
            "ai_features": self.subscription.ai_features,
        }
