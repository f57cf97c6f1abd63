# schoolhub/schemas/school/__init__.py
from .base import SchoolRecord
from .requests import SchoolCreateRequest, SubscriptionRequest
from .responses import (
    SchoolResponse,
    SchoolStats,
    SchoolDetailResponse,
    SchoolCreatedResponse,
    SchoolListResponse
)

__all__ = [
    'SchoolRecord',
    'SchoolCreateRequest',
    'SubscriptionRequest',
    'SchoolResponse',
    'SchoolStats',
    'SchoolDetailResponse',
    'SchoolCreatedResponse',
    'SchoolListResponse'
]
