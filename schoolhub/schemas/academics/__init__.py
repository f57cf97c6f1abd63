# schoolhub/schemas/academics/__init__.py
from .base import ClassRecord, SubjectRecord, ExaminationRecord, ResultRecord
from .requests import (
    ClassCreateRequest,
    SubjectCreateRequest,
    ExaminationCreateRequest,
    ExaminationUpdateRequest,
    ResultCreateRequest
)
from .responses import (
    ClassResponse,
    SubjectResponse,
    ExaminationResponse,
    ResultResponse
)

__all__ = [
    'ClassRecord',
    'SubjectRecord',
    'ExaminationRecord',
    'ResultRecord',
    'ClassCreateRequest',
    'SubjectCreateRequest',
    'ExaminationCreateRequest',
    'ExaminationUpdateRequest',
    'ResultCreateRequest',
    'ClassResponse',
    'SubjectResponse',
    'ExaminationResponse',
    'ResultResponse'
]
