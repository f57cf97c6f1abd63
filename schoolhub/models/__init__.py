from .base import SystemBase, TenantBase, TenantModel
from .school import School
from .user import SystemUser, User
from .academics import Class, Subject, Examination, Result

__all__ = [
    'SystemBase',
    'TenantBase',
    'TenantModel',
    'School',
    'SystemUser',
    'User',
    'Class',
    'Subject',
    'Examination',
    'Result'
]
