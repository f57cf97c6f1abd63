from sqlalchemy import Column, String, JSON, Text
from .base import SystemBase, RecordMixin
from schoolhub.schemas.enums import SchoolStatus, SubscriptionTier


class School(RecordMixin, SystemBase):
    """
    School registry entry in the system-wide partition.
    Its id is the tenant key naming the school's own partition.
    """
    __tablename__ = "schools"

    # Basic information
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(32), nullable=False)
    address = Column(String(255), nullable=False)
    website = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    # Principal contact
    principal_name = Column(String(255), nullable=False)
    principal_email = Column(String(255), nullable=False)

    # Subscription
    subscription_tier = Column(String(32), nullable=False, default=SubscriptionTier.BASIC.value)
    features = Column(JSON, nullable=False, default=dict)
    ai_features = Column(JSON, nullable=False, default=list)

    # pending until the school's partition is initialized
    status = Column(String(32), nullable=False, default=SchoolStatus.PENDING.value)

    def __repr__(self):
        return f"<School(id={self.id}, name={self.name}, status={self.status})>"
