from pydantic import BaseModel
from typing import Optional, Dict, List
from datetime import datetime


class SchoolResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    website: Optional[str] = None
    description: Optional[str] = None
    principal_name: str
    principal_email: str
    subscription_tier: str
    features: Dict[str, bool] = {}
    ai_features: List[str] = []
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SchoolStats(BaseModel):
    users: int = 0
    classes: int = 0
    subjects: int = 0


class SchoolDetailResponse(SchoolResponse):
    stats: SchoolStats


class SchoolCreatedResponse(BaseModel):
    message: str
    school: SchoolResponse


class SchoolListResponse(BaseModel):
    schools: List[SchoolResponse]
