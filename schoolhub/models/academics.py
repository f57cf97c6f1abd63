from sqlalchemy import Column, String, Integer, Float, Date, JSON, Text
from .base import TenantBase, TenantModel
from schoolhub.schemas.enums import ExaminationStatus, ResultStatus


class Class(TenantModel, TenantBase):
    __tablename__ = "classes"

    name = Column(String(100), nullable=False)
    grade = Column(String(50), nullable=False)
    section = Column(String(50), nullable=True)
    academic_year = Column(String(20), nullable=False)
    capacity = Column(Integer, nullable=True)
    teacher_ids = Column(JSON, nullable=False, default=list)
    created_by = Column(String(32), nullable=True)

    def __repr__(self):
        return f"<Class(name={self.name}, grade={self.grade}, academic_year={self.academic_year})>"


class Subject(TenantModel, TenantBase):
    __tablename__ = "subjects"

    name = Column(String(100), nullable=False)
    code = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    department = Column(String(100), nullable=True)
    grade_level = Column(String(50), nullable=False)
    head_teacher_id = Column(String(32), nullable=True)
    teacher_ids = Column(JSON, nullable=False, default=list)
    credits = Column(Float, nullable=True)

    def __repr__(self):
        return f"<Subject(code={self.code}, name={self.name})>"


class Examination(TenantModel, TenantBase):
    """Soft-deleted only, examinations are kept for audit"""
    __tablename__ = "examinations"

    title = Column(String(255), nullable=False)
    code = Column(String(64), nullable=False)
    description = Column(Text, nullable=True)
    subject = Column(String(100), nullable=False)
    grade_level = Column(String(50), nullable=False)
    exam_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    duration = Column(Integer, nullable=False)
    total_marks = Column(Integer, nullable=False)
    passing_marks = Column(Integer, nullable=False)
    venue = Column(String(255), nullable=False)
    examiner_id = Column(String(32), nullable=False)
    supervisors = Column(JSON, nullable=False, default=list)
    instructions = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default=ExaminationStatus.UPCOMING.value, index=True)
    created_by = Column(String(32), nullable=True)

    def __repr__(self):
        return f"<Examination(code={self.code}, status={self.status})>"


class Result(TenantModel, TenantBase):
    """Soft-deleted only, results are kept for audit"""
    __tablename__ = "results"

    student_name = Column(String(255), nullable=False)
    subject = Column(String(100), nullable=False)
    exam_type = Column(String(20), nullable=False)
    score = Column(Float, nullable=False)
    total_marks = Column(Float, nullable=False)
    percentage = Column(Float, nullable=False)
    grade = Column(String(2), nullable=False)
    term = Column(String(10), nullable=False)
    academic_year = Column(String(20), nullable=False)
    remarks = Column(Text, nullable=True)
    teacher_id = Column(String(32), nullable=True)
    teacher_name = Column(String(255), nullable=True)
    status = Column(String(32), nullable=False, default=ResultStatus.ACTIVE.value, index=True)

    def __repr__(self):
        return f"<Result(student={self.student_name}, subject={self.subject}, grade={self.grade})>"
