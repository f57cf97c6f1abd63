from .base import SystemUserRecord, UserRecord
from .responses import PrincipalResponse

__all__ = [
    "SystemUserRecord",
    "UserRecord",
    "PrincipalResponse"
]
