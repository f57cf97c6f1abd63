# schoolhub/core/model_factory.py
"""
Binds entity schemas to partition connections.

A SchemaDescriptor names a table class and the pydantic schema its rows must
satisfy. ``bind_model`` pairs a descriptor with one TenantConnection and
returns a BoundModel exposing the CRUD primitives route handlers use.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type

import pydantic
from sqlalchemy import func, select, update, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from schoolhub.core.database import TenantConnection, TenantConnectionRegistry
from schoolhub.core.errors import format_validation_errors
from schoolhub.core.exceptions import (
    DuplicateResourceError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from schoolhub.core.logging import logger
from schoolhub.core.tenancy import normalize_tenant_key
from schoolhub.models.base import TenantModel, utcnow
from schoolhub.schemas.enums import DELETED_STATUS


@dataclass(frozen=True)
class SchemaDescriptor:
    name: str
    model: Type[Any]
    schema: Type[pydantic.BaseModel]
    soft_delete: bool = False
    status_field: str = "status"
    default_order: Tuple[str, ...] = ("-created_at",)

    @property
    def tenant_scoped(self) -> bool:
        return issubclass(self.model, TenantModel)

    def __repr__(self):
        return f"<SchemaDescriptor(name={self.name})>"


def bind_model(descriptor: SchemaDescriptor, connection: TenantConnection) -> "BoundModel":
    """Attach a descriptor to a connection; performs no I/O"""
    if descriptor.tenant_scoped == connection.is_system:
        raise ValueError(
            f"{descriptor.name} cannot be bound to partition {connection.partition}"
        )
    return BoundModel(descriptor, connection)


class BoundModel:
    """CRUD over one table within one partition"""

    def __init__(self, descriptor: SchemaDescriptor, connection: TenantConnection):
        self.descriptor = descriptor
        self.connection = connection
        self.model = descriptor.model

    @property
    def tenant_key(self) -> Optional[str]:
        return self.connection.tenant_key

    def __repr__(self):
        return f"<BoundModel(name={self.descriptor.name}, partition={self.connection.partition})>"

    # Validation

    def validate(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Check data against the descriptor's schema and return column values"""
        try:
            record = self.descriptor.schema.model_validate(dict(data))
        except pydantic.ValidationError as e:
            raise ValidationError(
                message=f"Invalid {self.descriptor.name} data",
                details=format_validation_errors(e.errors())
            )
        return record.model_dump()

    def _column(self, name: str):
        column = getattr(self.model, name, None)
        if column is None or name not in self.model.__table__.columns:
            raise ValidationError(
                message=f"Unknown field for {self.descriptor.name}",
                details=[{"path": name, "message": "Unknown field"}]
            )
        return column

    def _where(self, stmt, filters: Optional[Mapping[str, Any]], include_deleted: bool):
        for name, value in (filters or {}).items():
            stmt = stmt.where(self._column(name) == value)
        if self.descriptor.soft_delete and not include_deleted:
            stmt = stmt.where(self._column(self.descriptor.status_field) != DELETED_STATUS)
        return stmt

    def _order(self, stmt, order_by: Optional[Iterable[str]]):
        for field in order_by if order_by is not None else self.descriptor.default_order:
            if field.startswith("-"):
                stmt = stmt.order_by(self._column(field[1:]).desc())
            else:
                stmt = stmt.order_by(self._column(field).asc())
        return stmt

    def _storage_error(self, action: str, error: SQLAlchemyError) -> StorageError:
        logger.error(
            f"Failed to {action} {self.descriptor.name} in {self.connection.partition}: {str(error)}",
            extra={'tenant_key': self.tenant_key}
        )
        return StorageError(f"Failed to {action} {self.descriptor.name}")

    # CRUD

    async def insert_one(self, data: Mapping[str, Any]):
        values = self.validate(data)
        if self.descriptor.tenant_scoped:
            values["school_id"] = self.tenant_key
        if data.get("id"):
            values["id"] = data["id"]
        instance = self.model(**values)

        try:
            async with self.connection.session() as session:
                async with session.begin():
                    session.add(instance)
        except IntegrityError as e:
            logger.info(f"Duplicate {self.descriptor.name} rejected in {self.connection.partition}")
            raise DuplicateResourceError(f"{self.descriptor.name.capitalize()} already exists") from e
        except SQLAlchemyError as e:
            raise self._storage_error("create", e) from e
        return instance

    async def find_many(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[Sequence[str]] = None,
        include_deleted: bool = False,
        limit: Optional[int] = None
    ) -> List[Any]:
        stmt = self._where(select(self.model), filters, include_deleted)
        stmt = self._order(stmt, order_by)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self.connection.session() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._storage_error("list", e) from e

    async def find_one(self, filters: Mapping[str, Any], include_deleted: bool = False):
        rows = await self.find_many(filters, order_by=(), include_deleted=include_deleted, limit=1)
        return rows[0] if rows else None

    async def find_by_id(self, record_id: str):
        """Fetch by id, soft-deleted rows included"""
        try:
            async with self.connection.session() as session:
                return await session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._storage_error("fetch", e) from e

    async def get(self, record_id: str):
        instance = await self.find_by_id(record_id)
        if instance is None:
            raise NotFoundError(f"{self.descriptor.name.capitalize()} not found")
        return instance

    async def count(self, filters: Optional[Mapping[str, Any]] = None, include_deleted: bool = False) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filters, include_deleted)
        try:
            async with self.connection.session() as session:
                result = await session.execute(stmt)
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise self._storage_error("count", e) from e

    async def update_one(self, record_id: str, changes: Mapping[str, Any]):
        """Apply changes after validating the merged record"""
        try:
            async with self.connection.session() as session:
                async with session.begin():
                    instance = await session.get(self.model, record_id)
                    if instance is None:
                        raise NotFoundError(f"{self.descriptor.name.capitalize()} not found")

                    current = {
                        name: getattr(instance, name)
                        for name in self.descriptor.schema.model_fields
                        if hasattr(instance, name)
                    }
                    values = self.validate({**current, **changes})
                    for name in changes:
                        if name in values:
                            setattr(instance, name, values[name])
                    instance.updated_at = utcnow()
        except IntegrityError as e:
            raise DuplicateResourceError(f"{self.descriptor.name.capitalize()} already exists") from e
        except SQLAlchemyError as e:
            raise self._storage_error("update", e) from e
        return instance

    async def soft_delete(self, record_id: str) -> None:
        """Mark a record deleted; it stays retrievable by id"""
        if not self.descriptor.soft_delete:
            raise ValueError(f"{self.descriptor.name} does not support soft delete")

        stmt = (
            update(self.model)
            .where(self.model.id == record_id)
            .values({self.descriptor.status_field: DELETED_STATUS, "updated_at": utcnow()})
        )
        try:
            async with self.connection.session() as session:
                async with session.begin():
                    result = await session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._storage_error("delete", e) from e

        if result.rowcount == 0:
            raise NotFoundError(f"{self.descriptor.name.capitalize()} not found")

    async def delete_one(self, record_id: str) -> bool:
        """Physically remove a record"""
        try:
            async with self.connection.session() as session:
                async with session.begin():
                    result = await session.execute(delete(self.model).where(self.model.id == record_id))
        except SQLAlchemyError as e:
            raise self._storage_error("remove", e) from e
        return result.rowcount > 0


class ModelRegistry:
    """
    Typed cache of bound models keyed by (descriptor, tenant key).

    Connections come from the TenantConnectionRegistry, so a bound model is
    never shared across partitions.
    """

    def __init__(self, connections: TenantConnectionRegistry):
        self.connections = connections
        self._bound: Dict[Tuple[SchemaDescriptor, Optional[str]], BoundModel] = {}

    async def get(self, descriptor: SchemaDescriptor, tenant_key: Optional[str] = None) -> BoundModel:
        connection = await self.connections.get_connection(tenant_key)
        key = (descriptor, connection.tenant_key)

        bound = self._bound.get(key)
        if bound is None or bound.connection is not connection:
            bound = bind_model(descriptor, connection)
            self._bound[key] = bound
        return bound

    async def discard(self, tenant_key: Optional[str]) -> None:
        """Drop a tenant's bound models and close its connection"""
        key = normalize_tenant_key(tenant_key)
        self._bound = {k: v for k, v in self._bound.items() if k[1] != key}
        await self.connections.discard(key)

    def clear(self) -> None:
        self._bound.clear()
