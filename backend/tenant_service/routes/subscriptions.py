from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tenant_service.core.database import get_db
from tenant_service.core.deps import require_tenant_member
from tenant_service.models.tenant_subscription import BillingCycle, PlanType
from tenant_service.schemas import Page, SubscriptionIn, SubscriptionOut
from tenant_service.services import subscription_service


router = APIRouter(dependencies=[Depends(require_tenant_member)])


@router.post("", response_model=SubscriptionOut)
def save_subscription(tenant_id: str, data: SubscriptionIn, db: Session = Depends(get_db)):
    return subscription_service.save_subscription(db, tenant_id, data)


@router.get("", response_model=SubscriptionOut)
def get_subscription(tenant_id: str, db: Session = Depends(get_db)):
    return subscription_service.get_subscription(db, tenant_id)


@router.put("", response_model=SubscriptionOut)
def update_subscription(tenant_id: str, data: SubscriptionIn, db: Session = Depends(get_db)):
    return subscription_service.update_subscription(db, tenant_id, data)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(tenant_id: str, db: Session = Depends(get_db)):
    subscription_service.delete_subscription(db, tenant_id)


@router.get("/plan-type/{plan_type}", response_model=List[SubscriptionOut])
def subscriptions_by_plan_type(plan_type: PlanType, db: Session = Depends(get_db)):
    return subscription_service.list_by_plan_type(db, plan_type)


@router.get("/plan-type/{plan_type}/page", response_model=Page[SubscriptionOut])
def subscriptions_by_plan_type_page(plan_type: PlanType, page: int = 0, size: int = 20, db: Session = Depends(get_db)):
    return subscription_service.page_by_plan_type(db, plan_type, page, size)


@router.get("/billing-cycle/{billing_cycle}", response_model=List[SubscriptionOut])
def subscriptions_by_billing_cycle(billing_cycle: BillingCycle, db: Session = Depends(get_db)):
    return subscription_service.list_by_billing_cycle(db, billing_cycle)


@router.get("/active", response_model=List[SubscriptionOut])
def active_subscriptions(db: Session = Depends(get_db)):
    return subscription_service.list_active(db)


@router.get("/inactive", response_model=List[SubscriptionOut])
def inactive_subscriptions(db: Session = Depends(get_db)):
    return subscription_service.list_inactive(db)


@router.get("/max-users/{max_users}", response_model=List[SubscriptionOut])
def subscriptions_by_max_users(max_users: int, db: Session = Depends(get_db)):
    return subscription_service.list_by_max_users(db, max_users)


@router.get("/max-storage/{max_storage_gb}", response_model=List[SubscriptionOut])
def subscriptions_by_max_storage(max_storage_gb: int, db: Session = Depends(get_db)):
    return subscription_service.list_by_max_storage(db, max_storage_gb)


@router.get("/expiring", response_model=List[SubscriptionOut])
def subscriptions_expiring(expiry_date: datetime, db: Session = Depends(get_db)):
    return subscription_service.list_expiring_by(db, expiry_date)


@router.get("/expiring-by-tenant", response_model=List[SubscriptionOut])
def tenant_subscriptions_expiring(tenant_id: str, expiry_date: datetime, db: Session = Depends(get_db)):
    return subscription_service.list_expiring_by(db, expiry_date, tenant_id=tenant_id)


@router.get("/count/plan-type/{plan_type}", response_model=int)
def count_by_plan_type(plan_type: PlanType, db: Session = Depends(get_db)):
    return subscription_service.count_by_plan_type(db, plan_type)


@router.get("/count/billing-cycle/{billing_cycle}", response_model=int)
def count_by_billing_cycle(billing_cycle: BillingCycle, db: Session = Depends(get_db)):
    return subscription_service.count_by_billing_cycle(db, billing_cycle)


@router.get("/count/active", response_model=int)
def count_active(db: Session = Depends(get_db)):
    return subscription_service.count_active(db)


@router.get("/count/inactive", response_model=int)
def count_inactive(db: Session = Depends(get_db)):
    return subscription_service.count_inactive(db)


@router.get("/exists", response_model=bool)
def subscription_exists(tenant_id: str, db: Session = Depends(get_db)):
    return subscription_service.subscription_exists(db, tenant_id)
