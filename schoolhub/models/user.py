from sqlalchemy import Column, String, Boolean
from .base import SystemBase, TenantBase, RecordMixin, TenantModel


class SystemUser(RecordMixin, SystemBase):
    """Super admin account stored in the system-wide partition"""
    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<SystemUser(id={self.id}, email={self.email}, role={self.role})>"


class User(TenantModel, TenantBase):
    """School member account stored in the school's own partition"""
    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    phone = Column(String(32), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name}, role={self.role})>"
