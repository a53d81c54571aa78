from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr

from tenant_service.core.roles import UserRole
from tenant_service.models.tenant import TenantStatus
from tenant_service.models.tenant_subscription import BillingCycle, PlanType


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int


# Tenants

class TenantCreate(BaseModel):
    name: str
    subdomain: str
    status: Optional[TenantStatus] = None


class TenantUpdate(BaseModel):
    name: Optional[str] = None
    subdomain: Optional[str] = None
    status: Optional[TenantStatus] = None


class TenantOut(BaseModel):
    id: str
    name: str
    subdomain: str
    status: TenantStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Users

class UserCreate(BaseModel):
    email: EmailStr
    password: Optional[str] = None
    role: UserRole


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class TenantUserOut(BaseModel):
    id: str
    tenant_id: str
    # Stored value as-is; addresses are checked on the way in
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Preferences

class PreferencesIn(BaseModel):
    playback_settings: Optional[dict[str, Any]] = None
    genre_preferences: Optional[List[str]] = None
    ad_rules: Optional[dict[str, Any]] = None
    volume_default: Optional[int] = None


class PreferencesOut(BaseModel):
    id: str
    tenant_id: str
    playback_settings: dict[str, Any]
    genre_preferences: List[str]
    ad_rules: dict[str, Any]
    volume_default: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Subscriptions

class SubscriptionIn(BaseModel):
    plan_type: Optional[PlanType] = None
    plan_name: Optional[str] = None
    max_users: Optional[int] = None
    max_storage_gb: Optional[int] = None
    is_active: Optional[bool] = None
    billing_cycle: Optional[BillingCycle] = None
    next_billing_date: Optional[datetime] = None


class SubscriptionOut(BaseModel):
    id: str
    tenant_id: str
    plan_type: PlanType
    plan_name: str
    max_users: int
    max_storage_gb: int
    is_active: bool
    billing_cycle: BillingCycle
    next_billing_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Authentication

class LoginRequest(BaseModel):
    tenant_id: str
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class LoginResult(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: TenantUserOut
