# schoolhub/schemas/enums.py
from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    SCHOOL_ADMIN = "school_admin"
    TEACHER = "teacher"
    STAFF = "staff"
    PARENT = "parent"
    STUDENT = "student"


class SchoolStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class SubscriptionTier(str, Enum):
    BASIC = "basic"
    STANDARD = "standard"


class SignupUserType(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    PRINCIPAL = "principal"

    def to_role(self) -> UserRole:
        if self is SignupUserType.PRINCIPAL:
            return UserRole.SCHOOL_ADMIN
        return UserRole(self.value)


class ExaminationStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DELETED = "deleted"


class ResultStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class ExamType(str, Enum):
    QUIZ = "Quiz"
    TEST = "Test"
    MIDTERM = "Midterm"
    FINAL = "Final"


class Term(str, Enum):
    FIRST = "First"
    SECOND = "Second"
    THIRD = "Third"


# Status value written by soft deletes
DELETED_STATUS = "deleted"
