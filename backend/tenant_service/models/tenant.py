import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, String, UniqueConstraint, DateTime
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()


def utcnow() -> datetime:
    # Naive UTC, matching what DateTime columns hand back
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class TenantStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING = "PENDING"


class Tenant(Base):
    __tablename__ = "tenants"
    __table_args__ = (UniqueConstraint("subdomain", name="uq_tenant_subdomain"),)

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    subdomain = Column(String(63), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=TenantStatus.ACTIVE.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    users = relationship("TenantUser", back_populates="tenant", cascade="all, delete-orphan")
    preferences = relationship(
        "TenantPreferences", back_populates="tenant", uselist=False, cascade="all, delete-orphan"
    )
    subscription = relationship(
        "TenantSubscription", back_populates="tenant", uselist=False, cascade="all, delete-orphan"
    )
