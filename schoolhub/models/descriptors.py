# Schema descriptors bound per partition by the model factory
from schoolhub.core.model_factory import SchemaDescriptor
from schoolhub.schemas.school import SchoolRecord
from schoolhub.schemas.user import SystemUserRecord, UserRecord
from schoolhub.schemas.academics import ClassRecord, SubjectRecord, ExaminationRecord, ResultRecord
from .school import School
from .user import SystemUser, User
from .academics import Class, Subject, Examination, Result

# System partition
SCHOOLS = SchemaDescriptor(name="school", model=School, schema=SchoolRecord)
SYSTEM_USERS = SchemaDescriptor(name="user", model=SystemUser, schema=SystemUserRecord)

# Tenant partitions
USERS = SchemaDescriptor(name="user", model=User, schema=UserRecord)
CLASSES = SchemaDescriptor(name="class", model=Class, schema=ClassRecord, default_order=("name",))
SUBJECTS = SchemaDescriptor(name="subject", model=Subject, schema=SubjectRecord, default_order=("code",))
EXAMINATIONS = SchemaDescriptor(
    name="examination",
    model=Examination,
    schema=ExaminationRecord,
    soft_delete=True,
    default_order=("-exam_date", "-created_at"),
)
RESULTS = SchemaDescriptor(
    name="result",
    model=Result,
    schema=ResultRecord,
    soft_delete=True,
    default_order=("-created_at",),
)
