from typing import List

from schoolhub.core.exceptions import DuplicateResourceError
from schoolhub.core.logging import logger
from schoolhub.core.model_factory import BoundModel
from schoolhub.core.security import Principal
from schoolhub.models import Class, Subject
from schoolhub.schemas.academics import ClassCreateRequest, SubjectCreateRequest


class ClassService:
    def __init__(self, classes: BoundModel):
        self.classes = classes

    async def list_classes(self) -> List[Class]:
        return await self.classes.find_many()

    async def create_class(self, principal: Principal, class_data: ClassCreateRequest) -> Class:
        """Create a class; names are unique per academic year within a school"""
        existing = await self.classes.find_one({
            "name": class_data.name,
            "academic_year": class_data.academic_year,
        })
        if existing is not None:
            raise DuplicateResourceError(
                f"Class {class_data.name} already exists for {class_data.academic_year}"
            )

        new_class = await self.classes.insert_one({
            **class_data.model_dump(),
            "created_by": principal.id,
        })
        logger.info(
            f"Class {new_class.id} created by {principal.id}",
            extra={'school_id': self.classes.tenant_key, 'user_id': principal.id}
        )
        return new_class


class SubjectService:
    def __init__(self, subjects: BoundModel):
        self.subjects = subjects

    async def list_subjects(self) -> List[Subject]:
        return await self.subjects.find_many()

    async def create_subject(self, subject_data: SubjectCreateRequest) -> Subject:
        if await self.subjects.find_one({"code": subject_data.code}) is not None:
            raise DuplicateResourceError(f"Subject code {subject_data.code} already exists")

        subject = await self.subjects.insert_one(subject_data.model_dump())
        logger.info(f"Subject {subject.code} created", extra={'school_id': self.subjects.tenant_key})
        return subject
