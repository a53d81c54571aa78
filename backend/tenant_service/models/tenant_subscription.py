from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tenant_service.models.tenant import Base, new_id, utcnow


class PlanType(str, Enum):
    BASIC = "BASIC"
    PREMIUM = "PREMIUM"
    ENTERPRISE = "ENTERPRISE"


class BillingCycle(str, Enum):
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


DEFAULT_PLAN_NAME = "Basic Plan"
DEFAULT_MAX_USERS = 10
DEFAULT_MAX_STORAGE_GB = 5


class TenantSubscription(Base):
    __tablename__ = "tenant_subscriptions"

    id = Column(String(36), primary_key=True, default=new_id)
    tenant_id = Column(
        String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    plan_type = Column(String(20), nullable=False, default=PlanType.BASIC.value)
    plan_name = Column(String(255), nullable=False, default=DEFAULT_PLAN_NAME)
    max_users = Column(Integer, nullable=False, default=DEFAULT_MAX_USERS)
    max_storage_gb = Column(Integer, nullable=False, default=DEFAULT_MAX_STORAGE_GB)
    is_active = Column(Boolean, nullable=False, default=True)
    billing_cycle = Column(String(20), nullable=False, default=BillingCycle.MONTHLY.value)
    next_billing_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tenant = relationship("Tenant", back_populates="subscription")
