from .tenant import Tenant, TenantStatus
from .tenant_user import TenantUser
from .tenant_preferences import TenantPreferences
from .tenant_subscription import TenantSubscription, PlanType, BillingCycle

__all__ = [
    "Tenant",
    "TenantStatus",
    "TenantUser",
    "TenantPreferences",
    "TenantSubscription",
    "PlanType",
    "BillingCycle",
]
