import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from tenant_service.core.errors import TenantNotFoundError, TenantValidationError
from tenant_service.models.tenant import utcnow
from tenant_service.models.tenant_subscription import (
    DEFAULT_MAX_STORAGE_GB,
    DEFAULT_MAX_USERS,
    DEFAULT_PLAN_NAME,
    BillingCycle,
    PlanType,
    TenantSubscription,
)
from tenant_service.schemas import SubscriptionIn, SubscriptionOut
from tenant_service.services.pagination import paginate
from tenant_service.services.tenant_service import get_tenant_entity


logger = logging.getLogger(__name__)


def _to_out(subscription: TenantSubscription) -> SubscriptionOut:
    return SubscriptionOut.model_validate(subscription)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _validate(data: SubscriptionIn) -> None:
    if data.plan_name is not None and not data.plan_name.strip():
        raise TenantValidationError("Plan name cannot be empty")
    if data.max_users is not None and data.max_users < 1:
        raise TenantValidationError("Max users must be at least 1")
    if data.max_storage_gb is not None and data.max_storage_gb < 1:
        raise TenantValidationError("Max storage must be at least 1 GB")
    if data.next_billing_date is not None and _as_naive_utc(data.next_billing_date) < utcnow():
        raise TenantValidationError("Next billing date cannot be in the past")


def _apply(subscription: TenantSubscription, data: SubscriptionIn) -> None:
    if data.plan_type is not None:
        subscription.plan_type = data.plan_type.value
    if data.plan_name is not None:
        subscription.plan_name = data.plan_name
    if data.max_users is not None:
        subscription.max_users = data.max_users
    if data.max_storage_gb is not None:
        subscription.max_storage_gb = data.max_storage_gb
    if data.is_active is not None:
        subscription.is_active = data.is_active
    if data.billing_cycle is not None:
        subscription.billing_cycle = data.billing_cycle.value
    if data.next_billing_date is not None:
        subscription.next_billing_date = _as_naive_utc(data.next_billing_date)


def _find(db: Session, tenant_id: str):
    return db.query(TenantSubscription).filter(TenantSubscription.tenant_id == tenant_id).first()


def _get_entity(db: Session, tenant_id: str) -> TenantSubscription:
    subscription = _find(db, tenant_id)
    if not subscription:
        raise TenantNotFoundError(f"Subscription not found for tenant: {tenant_id}")
    return subscription


def save_subscription(db: Session, tenant_id: str, data: SubscriptionIn) -> SubscriptionOut:
    logger.info("Saving subscription for tenant: %s", tenant_id)
    get_tenant_entity(db, tenant_id)
    _validate(data)

    subscription = _find(db, tenant_id)
    if subscription is None:
        subscription = TenantSubscription(
            tenant_id=tenant_id,
            plan_type=PlanType.BASIC.value,
            plan_name=DEFAULT_PLAN_NAME,
            max_users=DEFAULT_MAX_USERS,
            max_storage_gb=DEFAULT_MAX_STORAGE_GB,
            is_active=True,
            billing_cycle=BillingCycle.MONTHLY.value,
        )
        db.add(subscription)
    _apply(subscription, data)

    db.commit()
    db.refresh(subscription)
    logger.info("Saved subscription for tenant: %s", tenant_id)
    return _to_out(subscription)


def get_subscription(db: Session, tenant_id: str) -> SubscriptionOut:
    return _to_out(_get_entity(db, tenant_id))


def update_subscription(db: Session, tenant_id: str, data: SubscriptionIn) -> SubscriptionOut:
    logger.info("Updating subscription for tenant: %s", tenant_id)
    subscription = _get_entity(db, tenant_id)
    _validate(data)
    _apply(subscription, data)
    db.commit()
    db.refresh(subscription)
    return _to_out(subscription)


def delete_subscription(db: Session, tenant_id: str) -> None:
    logger.info("Deleting subscription for tenant: %s", tenant_id)
    subscription = _get_entity(db, tenant_id)
    db.delete(subscription)
    db.commit()


def _plan_type_query(db: Session, plan_type: PlanType):
    return db.query(TenantSubscription).filter(TenantSubscription.plan_type == plan_type.value)


def _billing_cycle_query(db: Session, billing_cycle: BillingCycle):
    return db.query(TenantSubscription).filter(TenantSubscription.billing_cycle == billing_cycle.value)


def _active_query(db: Session, active: bool):
    return db.query(TenantSubscription).filter(TenantSubscription.is_active.is_(active))


def list_by_plan_type(db: Session, plan_type: PlanType) -> list[SubscriptionOut]:
    return [_to_out(s) for s in _plan_type_query(db, plan_type).all()]


def page_by_plan_type(db: Session, plan_type: PlanType, page: int, size: int) -> dict:
    query = _plan_type_query(db, plan_type).order_by(TenantSubscription.created_at, TenantSubscription.id)
    return paginate(query, page, size, _to_out)


def list_by_billing_cycle(db: Session, billing_cycle: BillingCycle) -> list[SubscriptionOut]:
    return [_to_out(s) for s in _billing_cycle_query(db, billing_cycle).all()]


def list_active(db: Session) -> list[SubscriptionOut]:
    return [_to_out(s) for s in _active_query(db, True).all()]


def list_inactive(db: Session) -> list[SubscriptionOut]:
    return [_to_out(s) for s in _active_query(db, False).all()]


def list_by_max_users(db: Session, max_users: int) -> list[SubscriptionOut]:
    rows = db.query(TenantSubscription).filter(TenantSubscription.max_users == max_users).all()
    return [_to_out(s) for s in rows]


def list_by_max_storage(db: Session, max_storage_gb: int) -> list[SubscriptionOut]:
    rows = db.query(TenantSubscription).filter(TenantSubscription.max_storage_gb == max_storage_gb).all()
    return [_to_out(s) for s in rows]


def list_expiring_by(db: Session, expiry: datetime, tenant_id: Optional[str] = None) -> list[SubscriptionOut]:
    """Subscriptions whose next billing date falls on or before ``expiry``."""
    query = db.query(TenantSubscription).filter(
        TenantSubscription.next_billing_date.isnot(None),
        TenantSubscription.next_billing_date <= _as_naive_utc(expiry),
    )
    if tenant_id is not None:
        query = query.filter(TenantSubscription.tenant_id == tenant_id)
    return [_to_out(s) for s in query.order_by(TenantSubscription.next_billing_date).all()]


def count_by_plan_type(db: Session, plan_type: PlanType) -> int:
    return _plan_type_query(db, plan_type).count()


def count_by_billing_cycle(db: Session, billing_cycle: BillingCycle) -> int:
    return _billing_cycle_query(db, billing_cycle).count()


def count_active(db: Session) -> int:
    return _active_query(db, True).count()


def count_inactive(db: Session) -> int:
    return _active_query(db, False).count()


def subscription_exists(db: Session, tenant_id: str) -> bool:
    return _find(db, tenant_id) is not None
