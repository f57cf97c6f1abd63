# base.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base, declared_attr

# Tables living in the system-wide partition (school registry, super admins)
SystemBase = declarative_base()

# Tables created inside every school's own partition
TenantBase = declarative_base()


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordMixin:
    """Primary key and audit timestamps shared by every table"""

    @declared_attr
    def id(cls):
        return Column(String(32), primary_key=True, default=generate_id)

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @declared_attr
    def updated_at(cls):
        return Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class TenantModel(RecordMixin):
    """
    A base mixin for tenant partition tables.
    Every row carries the school_id of the partition that wrote it.
    """

    @declared_attr
    def school_id(cls):
        return Column(String(64), nullable=False, index=True)
