from typing import Optional

from sqlalchemy.orm import Session

from tenant_service.models.tenant_user import TenantUser


class SqlAlchemyCredentialStore:
    """Tenant-scoped user lookup and persistence for the authentication flow."""

    def __init__(self, db: Session):
        self._db = db

    def find_by_tenant_and_email(self, tenant_id: str, email: str) -> Optional[TenantUser]:
        return (
            self._db.query(TenantUser)
            .filter(TenantUser.tenant_id == tenant_id, TenantUser.email == email)
            .first()
        )

    def save(self, user: TenantUser) -> TenantUser:
        self._db.add(user)
        self._db.commit()
        self._db.refresh(user)
        return user
