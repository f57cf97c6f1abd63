import random
from datetime import datetime
from typing import List, Optional

from schoolhub.core.exceptions import NotFoundError
from schoolhub.core.logging import logger
from schoolhub.core.model_factory import BoundModel
from schoolhub.core.security import Principal
from schoolhub.models import Examination
from schoolhub.schemas.academics import ExaminationCreateRequest, ExaminationUpdateRequest
from schoolhub.schemas.enums import ExaminationStatus, DELETED_STATUS


def generate_exam_code(title: str, subject: str, grade_level: str, year: Optional[int] = None) -> str:
    """
    Build a readable exam code, e.g. "Mid Term" in Mathematics for G1 in 2025
    becomes ``MT-MAT-G1-2025-123``. The trailing number is random.
    """
    title_code = "".join(word[0] for word in title.split()).upper()
    subject_code = subject[:3].upper()
    year = year or datetime.now().year
    return f"{title_code}-{subject_code}-{grade_level.upper()}-{year}-{random.randint(100, 999)}"


class ExaminationService:
    def __init__(self, examinations: BoundModel):
        self.examinations = examinations

    async def list_examinations(self) -> List[Examination]:
        """Examinations that are not deleted, latest exam date first"""
        return await self.examinations.find_many()

    async def get_examination(self, examination_id: str) -> Examination:
        return await self.examinations.get(examination_id)

    async def _get_live(self, examination_id: str) -> Examination:
        examination = await self.examinations.get(examination_id)
        if examination.status == DELETED_STATUS:
            raise NotFoundError("Examination not found")
        return examination

    async def create_examination(self, principal: Principal, exam_data: ExaminationCreateRequest) -> Examination:
        values = exam_data.model_dump()
        if not values.get("code"):
            values["code"] = generate_exam_code(exam_data.title, exam_data.subject, exam_data.grade_level)

        examination = await self.examinations.insert_one({
            **values,
            "status": ExaminationStatus.UPCOMING,
            "created_by": principal.id,
        })
        logger.info(
            f"Examination {examination.code} created by {principal.id}",
            extra={'school_id': self.examinations.tenant_key, 'user_id': principal.id}
        )
        return examination

    async def update_examination(self, examination_id: str, exam_data: ExaminationUpdateRequest) -> Examination:
        await self._get_live(examination_id)
        changes = exam_data.model_dump(exclude_unset=True)
        return await self.examinations.update_one(examination_id, changes)

    async def delete_examination(self, examination_id: str) -> None:
        await self._get_live(examination_id)
        await self.examinations.soft_delete(examination_id)
        logger.info(
            f"Examination {examination_id} deleted",
            extra={'school_id': self.examinations.tenant_key}
        )
