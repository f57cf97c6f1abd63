from pydantic import BaseModel
from typing import Optional


class PrincipalResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    school_id: Optional[str] = None
