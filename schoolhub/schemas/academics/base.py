from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date
from ..enums import ExaminationStatus, ResultStatus, ExamType, Term

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ClassRecord(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    grade: str = Field(min_length=1, max_length=50)
    section: Optional[str] = Field(default=None, max_length=50)
    academic_year: str = Field(min_length=1, max_length=20)
    capacity: Optional[int] = Field(default=None, ge=1)
    teacher_ids: List[str] = Field(default_factory=list)
    created_by: Optional[str] = None

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True


class SubjectRecord(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
    department: Optional[str] = None
    grade_level: str = Field(min_length=1, max_length=50)
    head_teacher_id: Optional[str] = None
    teacher_ids: List[str] = Field(default_factory=list)
    credits: Optional[float] = Field(default=None, ge=0)

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True


class ExaminationRecord(BaseModel):
    title: str = Field(min_length=2, max_length=255)
    code: str = Field(min_length=1, max_length=64)
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
    status: ExaminationStatus = ExaminationStatus.UPCOMING
    created_by: Optional[str] = None

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True

    @model_validator(mode='after')
    def check_passing_marks(self) -> 'ExaminationRecord':
        if self.passing_marks > self.total_marks:
            raise ValueError("Passing marks cannot exceed total marks")
        return self


class ResultRecord(BaseModel):
    student_name: str = Field(min_length=1, max_length=255)
    subject: str = Field(min_length=1, max_length=100)
    exam_type: ExamType
    score: float = Field(ge=0)
    total_marks: float = Field(ge=1)
    percentage: float = Field(ge=0, le=100)
    grade: str = Field(min_length=1, max_length=2)
    term: Term
    academic_year: str = Field(min_length=1, max_length=20)
    remarks: Optional[str] = None
    teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None
    status: ResultStatus = ResultStatus.ACTIVE

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True

    @model_validator(mode='after')
    def check_score(self) -> 'ResultRecord':
        if self.score > self.total_marks:
            raise ValueError("Score cannot exceed total marks")
        return self
