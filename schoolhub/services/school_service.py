from typing import List, Optional

from schoolhub.core.exceptions import (
    DuplicateResourceError,
    NotFoundError,
    ProvisioningPartialFailure,
    StorageError,
)
from schoolhub.core.logging import logger, log_function_call
from schoolhub.core.model_factory import BoundModel, ModelRegistry
from schoolhub.core.tenancy import normalize_tenant_key
from schoolhub.models import School
from schoolhub.models.descriptors import SCHOOLS, USERS, CLASSES, SUBJECTS
from schoolhub.schemas.enums import SchoolStatus
from schoolhub.schemas.school import SchoolCreateRequest, SchoolStats


class SchoolService:
    def __init__(self, models: ModelRegistry):
        """Initialize SchoolService with the bound model registry"""
        self.models = models
        self.connections = models.connections

    async def _schools(self) -> BoundModel:
        return await self.models.get(SCHOOLS)

    @log_function_call(logger)
    async def provision_school(self, school_data: SchoolCreateRequest) -> School:
        """
        Register a school and create its partition.

        The registry entry is written as pending first, then the partition is
        initialized and the entry activated. If the partition step fails the
        entry is removed again so the same email can be retried.

        Raises:
            DuplicateResourceError: A school with this email already exists
            StorageError: The partition could not be initialized
            ProvisioningPartialFailure: The cleanup after a failed init failed too
        """
        schools = await self._schools()

        if await schools.find_one({"email": school_data.email}) is not None:
            raise DuplicateResourceError("School with this email already exists")

        school = await schools.insert_one(school_data.to_record())
        logger.info(f"Registered school {school.id} ({school.name}) as pending")

        try:
            await self.initialize_partition(school.id)
        except StorageError as e:
            await self._remove_orphan(schools, school.id, e)
            raise

        school = await schools.update_one(school.id, {"status": SchoolStatus.ACTIVE.value})
        logger.info(f"School {school.id} provisioned", extra={'school_id': school.id})
        return school

    async def _remove_orphan(self, schools: BoundModel, school_id: str, cause: StorageError) -> None:
        try:
            await schools.delete_one(school_id)
        except StorageError as e:
            logger.critical(
                f"Orphaned school record {school_id}: partition init failed ({cause.message}) "
                f"and cleanup failed ({e.message})",
                extra={'school_id': school_id}
            )
            raise ProvisioningPartialFailure(school_id) from e
        await self.models.discard(school_id)
        logger.warning(f"Rolled back school {school_id} after partition init failure")

    async def initialize_partition(self, school_id: str) -> None:
        connection = await self.connections.get_connection(school_id)
        await self.connections.init_partition(connection)

    async def list_schools(self) -> List[School]:
        schools = await self._schools()
        return await schools.find_many()

    async def get_school(self, school_id: str) -> School:
        schools = await self._schools()
        school = await schools.find_by_id(school_id)
        if school is None:
            raise NotFoundError("School not found")
        return school

    async def require_active_school(self, school_id: Optional[str]) -> School:
        """The school's registry entry; unknown and inactive schools are not found"""
        school_id = normalize_tenant_key(school_id)
        if school_id is None:
            raise NotFoundError("School not found")

        school = await self.get_school(school_id)
        if school.status != SchoolStatus.ACTIVE.value:
            raise NotFoundError("School not found")
        return school

    async def get_school_stats(self, school_id: str) -> SchoolStats:
        """Member and catalogue counts; zero when the partition cannot be read"""
        try:
            users = await self.models.get(USERS, school_id)
            classes = await self.models.get(CLASSES, school_id)
            subjects = await self.models.get(SUBJECTS, school_id)
            return SchoolStats(
                users=await users.count(),
                classes=await classes.count(),
                subjects=await subjects.count(),
            )
        except StorageError as e:
            logger.warning(
                f"Could not read stats for school {school_id}: {e.message}",
                extra={'school_id': school_id}
            )
            return SchoolStats()

    async def reconcile_pending_schools(self) -> int:
        """
        Finish provisioning for schools left pending by an interrupted request.

        Returns the number of schools activated.
        """
        schools = await self._schools()
        pending = await schools.find_many({"status": SchoolStatus.PENDING.value})

        activated = 0
        for school in pending:
            try:
                await self.initialize_partition(school.id)
                await schools.update_one(school.id, {"status": SchoolStatus.ACTIVE.value})
                activated += 1
            except StorageError as e:
                logger.error(
                    f"Reconciliation failed for school {school.id}: {e.message}",
                    extra={'school_id': school.id}
                )

        if pending:
            logger.info(f"Reconciled {activated} of {len(pending)} pending school(s)")
        return activated
