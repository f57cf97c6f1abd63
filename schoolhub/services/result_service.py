from typing import List

from schoolhub.core.exceptions import NotFoundError
from schoolhub.core.logging import logger
from schoolhub.core.model_factory import BoundModel
from schoolhub.core.security import Principal
from schoolhub.models import Result
from schoolhub.schemas.academics import ResultCreateRequest
from schoolhub.schemas.enums import ResultStatus, DELETED_STATUS

# Lowest percentage for each letter grade, best first
GRADE_THRESHOLDS = (
    (97, "A+"),
    (93, "A"),
    (90, "B+"),
    (87, "B"),
    (83, "C+"),
    (80, "C"),
    (77, "D+"),
    (70, "D"),
)


def calculate_grade(percentage: float) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if percentage >= threshold:
            return grade
    return "F"


class ResultService:
    def __init__(self, results: BoundModel):
        self.results = results

    async def list_results(self) -> List[Result]:
        return await self.results.find_many()

    async def get_result(self, result_id: str) -> Result:
        return await self.results.get(result_id)

    async def record_result(self, principal: Principal, result_data: ResultCreateRequest) -> Result:
        """Store a score with its percentage and letter grade; the caller is recorded as teacher"""
        percentage = round(result_data.score / result_data.total_marks * 100, 2)

        result = await self.results.insert_one({
            **result_data.model_dump(),
            "percentage": percentage,
            "grade": calculate_grade(percentage),
            "teacher_id": principal.id,
            "teacher_name": principal.name,
            "status": ResultStatus.ACTIVE,
        })
        logger.info(
            f"Result {result.id} recorded by {principal.id}",
            extra={'school_id': self.results.tenant_key, 'user_id': principal.id}
        )
        return result

    async def delete_result(self, result_id: str) -> None:
        result = await self.results.get(result_id)
        if result.status == DELETED_STATUS:
            raise NotFoundError("Result not found")
        await self.results.soft_delete(result_id)
