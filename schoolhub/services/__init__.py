from .auth_service import AuthService
from .school_service import SchoolService
from .class_service import ClassService, SubjectService
from .examination_service import ExaminationService, generate_exam_code
from .result_service import ResultService, calculate_grade

__all__ = [
    "AuthService",
    "SchoolService",
    "ClassService",
    "SubjectService",
    "ExaminationService",
    "ResultService",
    "generate_exam_code",
    "calculate_grade"
]
