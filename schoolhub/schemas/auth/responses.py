from pydantic import BaseModel
from typing import Optional
from ..user.responses import PrincipalResponse


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: PrincipalResponse


class MessageResponse(BaseModel):
    message: str
    id: Optional[str] = None


class MeResponse(BaseModel):
    user: PrincipalResponse
