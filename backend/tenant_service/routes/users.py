from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tenant_service.core.database import get_db
from tenant_service.core.deps import require_tenant_master, require_tenant_member
from tenant_service.core.roles import UserRole
from tenant_service.schemas import Page, TenantUserOut, UserCreate, UserUpdate
from tenant_service.services import tenant_user_service


# Every route is scoped to the {tenant_id} in the router prefix
router = APIRouter(dependencies=[Depends(require_tenant_member)])


@router.post(
    "",
    response_model=TenantUserOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_tenant_master)],
)
def create_user(tenant_id: str, data: UserCreate, db: Session = Depends(get_db)):
    return tenant_user_service.create_user(db, tenant_id, data)


@router.get("", response_model=Page[TenantUserOut])
def list_users(tenant_id: str, page: int = 0, size: int = 20, db: Session = Depends(get_db)):
    return tenant_user_service.list_users(db, tenant_id, page, size)


@router.get("/role/{role}", response_model=List[TenantUserOut])
def users_by_role(tenant_id: str, role: UserRole, db: Session = Depends(get_db)):
    return tenant_user_service.list_users_by_role(db, tenant_id, role)


@router.get("/active", response_model=List[TenantUserOut])
def active_users(tenant_id: str, db: Session = Depends(get_db)):
    return tenant_user_service.list_active_users(db, tenant_id)


@router.get("/count", response_model=int)
def count_users(tenant_id: str, db: Session = Depends(get_db)):
    return tenant_user_service.count_users(db, tenant_id)


@router.get("/count/active", response_model=int)
def count_active_users(tenant_id: str, db: Session = Depends(get_db)):
    return tenant_user_service.count_active_users(db, tenant_id)


@router.get("/email/{email}", response_model=TenantUserOut)
def get_user_by_email(tenant_id: str, email: str, db: Session = Depends(get_db)):
    return tenant_user_service.get_user(db, tenant_id, email)


@router.get("/email/{email}/exists", response_model=bool)
def user_exists(tenant_id: str, email: str, db: Session = Depends(get_db)):
    return tenant_user_service.user_exists(db, tenant_id, email)


@router.put("/{user_id}", response_model=TenantUserOut, dependencies=[Depends(require_tenant_master)])
def update_user(tenant_id: str, user_id: str, data: UserUpdate, db: Session = Depends(get_db)):
    return tenant_user_service.update_user(db, tenant_id, user_id, data)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_tenant_master)]
)
def delete_user(tenant_id: str, user_id: str, db: Session = Depends(get_db)):
    tenant_user_service.delete_user(db, tenant_id, user_id)
