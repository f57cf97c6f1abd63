from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime


class TenantRecordResponse(BaseModel):
    id: str
    school_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClassResponse(TenantRecordResponse):
    name: str
    grade: str
    section: Optional[str] = None
    academic_year: str
    capacity: Optional[int] = None
    teacher_ids: List[str] = []
    created_by: Optional[str] = None


class SubjectResponse(TenantRecordResponse):
    name: str
    code: str
    description: Optional[str] = None
    department: Optional[str] = None
    grade_level: str
    head_teacher_id: Optional[str] = None
    teacher_ids: List[str] = []
    credits: Optional[float] = None


class ExaminationResponse(TenantRecordResponse):
    title: str
    code: str
    description: Optional[str] = None
    subject: str
    grade_level: str
    exam_date: date
    start_time: str
    duration: int
    total_marks: int
    passing_marks: int
    venue: str
    examiner_id: str
    supervisors: List[str] = []
    instructions: Optional[str] = None
    status: str
    created_by: Optional[str] = None


class ResultResponse(TenantRecordResponse):
    student_name: str
    subject: str
    exam_type: str
    score: float
    total_marks: float
    percentage: float
    grade: str
    term: str
    academic_year: str
    remarks: Optional[str] = None
    teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None
    status: str
