from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tenant_service.core.database import get_db
from tenant_service.core.deps import require_tenant_master
from tenant_service.models.tenant import TenantStatus
from tenant_service.schemas import Page, TenantCreate, TenantOut, TenantUpdate
from tenant_service.services import tenant_service


router = APIRouter()


@router.post("", response_model=TenantOut, status_code=status.HTTP_201_CREATED)
def create_tenant(data: TenantCreate, db: Session = Depends(get_db)):
    return tenant_service.create_tenant(db, data)


@router.get("", response_model=Page[TenantOut])
def list_tenants(page: int = 0, size: int = 20, db: Session = Depends(get_db)):
    return tenant_service.list_tenants(db, page, size)


@router.get("/search", response_model=List[TenantOut])
def search_tenants(name: str, db: Session = Depends(get_db)):
    return tenant_service.search_tenants_by_name(db, name)


@router.get("/count/active", response_model=int)
def count_active_tenants(db: Session = Depends(get_db)):
    return tenant_service.count_active_tenants(db)


@router.get("/status/{tenant_status}", response_model=List[TenantOut])
def tenants_by_status(tenant_status: TenantStatus, db: Session = Depends(get_db)):
    return tenant_service.list_tenants_by_status(db, tenant_status)


@router.get("/status/{tenant_status}/page", response_model=Page[TenantOut])
def tenants_by_status_page(tenant_status: TenantStatus, page: int = 0, size: int = 20, db: Session = Depends(get_db)):
    return tenant_service.list_tenants(db, page, size, status=tenant_status)


@router.get("/subdomain/{subdomain}", response_model=TenantOut)
def get_tenant_by_subdomain(subdomain: str, db: Session = Depends(get_db)):
    return tenant_service.get_tenant_by_subdomain(db, subdomain)


@router.get("/subdomain/{subdomain}/exists", response_model=bool)
def subdomain_exists(subdomain: str, db: Session = Depends(get_db)):
    return tenant_service.subdomain_exists(db, subdomain)


@router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(tenant_id: str, db: Session = Depends(get_db)):
    return tenant_service.get_tenant(db, tenant_id)


@router.get("/{tenant_id}/exists", response_model=bool)
def tenant_exists(tenant_id: str, db: Session = Depends(get_db)):
    return tenant_service.tenant_exists(db, tenant_id)


@router.put("/{tenant_id}", response_model=TenantOut, dependencies=[Depends(require_tenant_master)])
def update_tenant(tenant_id: str, data: TenantUpdate, db: Session = Depends(get_db)):
    return tenant_service.update_tenant(db, tenant_id, data)


@router.delete(
    "/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_tenant_master)]
)
def delete_tenant(tenant_id: str, db: Session = Depends(get_db)):
    tenant_service.delete_tenant(db, tenant_id)
