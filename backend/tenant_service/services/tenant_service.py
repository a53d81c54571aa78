import logging
from typing import Optional

from sqlalchemy.orm import Session

from tenant_service.core.errors import DuplicateSubdomainError, TenantNotFoundError
from tenant_service.core.validation import validate_subdomain, validate_tenant_id, validate_tenant_name
from tenant_service.models.tenant import Tenant, TenantStatus
from tenant_service.schemas import TenantCreate, TenantOut, TenantUpdate
from tenant_service.services.pagination import paginate


logger = logging.getLogger(__name__)


def _to_out(tenant: Tenant) -> TenantOut:
    return TenantOut.model_validate(tenant)


def get_tenant_entity(db: Session, tenant_id: str) -> Tenant:
    validate_tenant_id(tenant_id)
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise TenantNotFoundError(f"Tenant not found with ID: {tenant_id}")
    return tenant


def _subdomain_taken(db: Session, subdomain: str) -> bool:
    return db.query(Tenant.id).filter(Tenant.subdomain == subdomain).first() is not None


def create_tenant(db: Session, data: TenantCreate) -> TenantOut:
    logger.info("Creating tenant with subdomain: %s", data.subdomain)
    validate_tenant_name(data.name)
    validate_subdomain(data.subdomain)
    if _subdomain_taken(db, data.subdomain):
        raise DuplicateSubdomainError(f"Subdomain already exists: {data.subdomain}")

    tenant = Tenant(
        name=data.name,
        subdomain=data.subdomain,
        status=(data.status or TenantStatus.ACTIVE).value,
    )
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    logger.info("Created tenant with ID: %s", tenant.id)
    return _to_out(tenant)


def get_tenant(db: Session, tenant_id: str) -> TenantOut:
    return _to_out(get_tenant_entity(db, tenant_id))


def get_tenant_by_subdomain(db: Session, subdomain: str) -> TenantOut:
    tenant = db.query(Tenant).filter(Tenant.subdomain == subdomain).first()
    if not tenant:
        raise TenantNotFoundError(f"Tenant not found with subdomain: {subdomain}")
    return _to_out(tenant)


def update_tenant(db: Session, tenant_id: str, data: TenantUpdate) -> TenantOut:
    logger.info("Updating tenant with ID: %s", tenant_id)
    tenant = get_tenant_entity(db, tenant_id)

    if data.name is not None:
        validate_tenant_name(data.name)
    if data.subdomain is not None:
        validate_subdomain(data.subdomain)
        if data.subdomain != tenant.subdomain and _subdomain_taken(db, data.subdomain):
            raise DuplicateSubdomainError(f"Subdomain already exists: {data.subdomain}")

    if data.name is not None:
        tenant.name = data.name
    if data.subdomain is not None:
        tenant.subdomain = data.subdomain
    if data.status is not None:
        tenant.status = data.status.value

    db.commit()
    db.refresh(tenant)
    logger.info("Updated tenant with ID: %s", tenant.id)
    return _to_out(tenant)


def delete_tenant(db: Session, tenant_id: str) -> None:
    logger.info("Deleting tenant with ID: %s", tenant_id)
    tenant = get_tenant_entity(db, tenant_id)
    db.delete(tenant)
    db.commit()
    logger.info("Deleted tenant with ID: %s", tenant_id)


def list_tenants(db: Session, page: int, size: int, status: Optional[TenantStatus] = None) -> dict:
    query = db.query(Tenant)
    if status is not None:
        query = query.filter(Tenant.status == status.value)
    return paginate(query.order_by(Tenant.created_at, Tenant.id), page, size, _to_out)


def list_tenants_by_status(db: Session, status: TenantStatus) -> list[TenantOut]:
    tenants = db.query(Tenant).filter(Tenant.status == status.value).order_by(Tenant.created_at).all()
    return [_to_out(t) for t in tenants]


def search_tenants_by_name(db: Session, name: str) -> list[TenantOut]:
    tenants = db.query(Tenant).filter(Tenant.name.ilike(f"%{name}%")).order_by(Tenant.name).all()
    return [_to_out(t) for t in tenants]


def count_active_tenants(db: Session) -> int:
    return db.query(Tenant).filter(Tenant.status == TenantStatus.ACTIVE.value).count()


def tenant_exists(db: Session, tenant_id: str) -> bool:
    return db.query(Tenant.id).filter(Tenant.id == tenant_id).first() is not None


def subdomain_exists(db: Session, subdomain: str) -> bool:
    return _subdomain_taken(db, subdomain)
