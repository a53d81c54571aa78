import logging

from sqlalchemy.orm import Session

from tenant_service.core.roles import UserRole
from tenant_service.core.security import hash_password
from tenant_service.models.tenant import Tenant, TenantStatus
from tenant_service.models.tenant_preferences import DEFAULT_VOLUME, TenantPreferences
from tenant_service.models.tenant_subscription import TenantSubscription
from tenant_service.models.tenant_user import TenantUser


logger = logging.getLogger(__name__)

DEMO_SUBDOMAIN = "acme-demo"
DEMO_EMAIL = "master@acme-demo.com"
DEMO_PASSWORD = "secret123"


def seed_demo(db: Session):
    if db.query(Tenant).filter(Tenant.subdomain == DEMO_SUBDOMAIN).first():
        return
    tenant = Tenant(name="Acme Demo", subdomain=DEMO_SUBDOMAIN, status=TenantStatus.ACTIVE.value)
    db.add(tenant)
    db.flush()
    db.add(TenantUser(
        tenant_id=tenant.id,
        email=DEMO_EMAIL,
        password_hash=hash_password(DEMO_PASSWORD),
        role=UserRole.MASTER.value,
        is_active=True,
    ))
    db.add(TenantPreferences(
        tenant_id=tenant.id, playback_settings={}, genre_preferences=[], ad_rules={}, volume_default=DEFAULT_VOLUME
    ))
    db.add(TenantSubscription(tenant_id=tenant.id))
    db.commit()
    logger.info("Seeded demo tenant %s (%s) with master user %s", tenant.id, DEMO_SUBDOMAIN, DEMO_EMAIL)
