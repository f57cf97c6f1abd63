from pydantic import BaseModel, Field, validator, model_validator
from typing import Optional, List
from datetime import date
from ..enums import ExaminationStatus, ExamType, Term
from .base import TIME_PATTERN


class ClassCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    grade: str = Field(min_length=1, max_length=50)
    section: Optional[str] = None
    academic_year: str = Field(min_length=1, max_length=20)
    capacity: Optional[int] = Field(default=None, ge=1)
    teacher_ids: List[str] = Field(default_factory=list)


class SubjectCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
    department: Optional[str] = None
    grade_level: str = Field(min_length=1, max_length=50)
    head_teacher_id: Optional[str] = None
    teacher_ids: List[str] = Field(default_factory=list)
    credits: Optional[float] = Field(default=None, ge=0)


class ExaminationCreateRequest(BaseModel):
    title: str = Field(min_length=2, max_length=255)
    code: Optional[str] = Field(default=None, max_length=64)
    description: Optional[str] = None
    subject: str = Field(min_length=1, max_length=100)
    grade_level: str = Field(min_length=1, max_length=50)
    exam_date: date
    start_time: str = Field(pattern=TIME_PATTERN)
    duration: int = Field(ge=1)
    total_marks: int = Field(ge=1)
    passing_marks: int = Field(ge=1)
    venue: str = Field(min_length=1, max_length=255)
    examiner_id: str = Field(min_length=1)
    supervisors: List[str] = Field(default_factory=list)
    instructions: Optional[str] = None


class ExaminationUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = None
    exam_date: Optional[date] = None
    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    duration: Optional[int] = Field(default=None, ge=1)
    total_marks: Optional[int] = Field(default=None, ge=1)
    passing_marks: Optional[int] = Field(default=None, ge=1)
    venue: Optional[str] = Field(default=None, min_length=1, max_length=255)
    examiner_id: Optional[str] = None
    supervisors: Optional[List[str]] = None
    instructions: Optional[str] = None
    status: Optional[ExaminationStatus] = None

    @validator('status')
    def reject_deleted_status(cls, v):
        if v == ExaminationStatus.DELETED:
            raise ValueError("Use DELETE to remove an examination")
        return v


class ResultCreateRequest(BaseModel):
    student_name: str = Field(min_length=1, max_length=255)
    subject: str = Field(min_length=1, max_length=100)
    exam_type: ExamType
    score: float = Field(ge=0)
    total_marks: float = Field(ge=1)
    term: Term
    academic_year: str = Field(min_length=1, max_length=20)
    remarks: Optional[str] = None

    @model_validator(mode='after')
    def check_score(self) -> 'ResultCreateRequest':
        if self.score > self.total_marks:
            raise ValueError("Score cannot exceed total marks")
        return self
