import logging

from sqlalchemy.orm import Session

from tenant_service.core.errors import DuplicateEmailError, TenantNotFoundError, TenantValidationError
from tenant_service.core.roles import UserRole
from tenant_service.core.security import hash_password
from tenant_service.core.validation import is_valid_email, validate_password
from tenant_service.models.tenant import Tenant
from tenant_service.models.tenant_user import TenantUser
from tenant_service.schemas import TenantUserOut, UserCreate, UserUpdate
from tenant_service.services.pagination import paginate


logger = logging.getLogger(__name__)


def _to_out(user: TenantUser) -> TenantUserOut:
    return TenantUserOut.model_validate(user)


def _ensure_tenant(db: Session, tenant_id: str) -> None:
    if db.query(Tenant.id).filter(Tenant.id == tenant_id).first() is None:
        raise TenantNotFoundError(f"Tenant not found with ID: {tenant_id}")


def _validate_email(email: str) -> None:
    if not is_valid_email(email):
        raise TenantValidationError(f"Invalid email format: {email}")


def _find(db: Session, tenant_id: str, email: str):
    return db.query(TenantUser).filter(TenantUser.tenant_id == tenant_id, TenantUser.email == email).first()


def get_user_entity(db: Session, tenant_id: str, email: str) -> TenantUser:
    user = _find(db, tenant_id, email)
    if not user:
        raise TenantNotFoundError(f"User not found with email: {email} in tenant: {tenant_id}")
    return user


def create_user(db: Session, tenant_id: str, data: UserCreate) -> TenantUserOut:
    logger.info("Creating user %s in tenant: %s", data.email, tenant_id)
    _ensure_tenant(db, tenant_id)
    _validate_email(data.email)
    validate_password(data.password)
    if _find(db, tenant_id, data.email) is not None:
        raise DuplicateEmailError(f"User with email {data.email} already exists in tenant: {tenant_id}")

    user = TenantUser(
        tenant_id=tenant_id,
        email=data.email,
        password_hash=hash_password(data.password) if data.password else None,
        role=data.role.value,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user with ID: %s in tenant: %s", user.id, tenant_id)
    return _to_out(user)


def get_user(db: Session, tenant_id: str, email: str) -> TenantUserOut:
    return _to_out(get_user_entity(db, tenant_id, email))


def _get_by_id(db: Session, tenant_id: str, user_id: str) -> TenantUser:
    user = db.query(TenantUser).filter(TenantUser.tenant_id == tenant_id, TenantUser.id == user_id).first()
    if not user:
        raise TenantNotFoundError(f"User not found with ID: {user_id} in tenant: {tenant_id}")
    return user


def update_user(db: Session, tenant_id: str, user_id: str, data: UserUpdate) -> TenantUserOut:
    logger.info("Updating user %s in tenant: %s", user_id, tenant_id)
    user = _get_by_id(db, tenant_id, user_id)

    if data.email is not None and data.email != user.email:
        _validate_email(data.email)
        if _find(db, tenant_id, data.email) is not None:
            raise DuplicateEmailError(f"User with email {data.email} already exists in tenant: {tenant_id}")
        user.email = data.email
    if data.password is not None:
        validate_password(data.password)
        user.password_hash = hash_password(data.password)
    if data.role is not None:
        user.role = data.role.value
    if data.is_active is not None:
        user.is_active = data.is_active

    db.commit()
    db.refresh(user)
    logger.info("Updated user with ID: %s", user.id)
    return _to_out(user)


def delete_user(db: Session, tenant_id: str, user_id: str) -> None:
    logger.info("Deleting user %s in tenant: %s", user_id, tenant_id)
    user = _get_by_id(db, tenant_id, user_id)
    db.delete(user)
    db.commit()


def list_users(db: Session, tenant_id: str, page: int, size: int) -> dict:
    _ensure_tenant(db, tenant_id)
    query = db.query(TenantUser).filter(TenantUser.tenant_id == tenant_id).order_by(
        TenantUser.created_at, TenantUser.id
    )
    return paginate(query, page, size, _to_out)


def list_users_by_role(db: Session, tenant_id: str, role: UserRole) -> list[TenantUserOut]:
    users = (
        db.query(TenantUser)
        .filter(TenantUser.tenant_id == tenant_id, TenantUser.role == role.value)
        .order_by(TenantUser.email)
        .all()
    )
    return [_to_out(u) for u in users]


def list_active_users(db: Session, tenant_id: str) -> list[TenantUserOut]:
    users = (
        db.query(TenantUser)
        .filter(TenantUser.tenant_id == tenant_id, TenantUser.is_active.is_(True))
        .order_by(TenantUser.email)
        .all()
    )
    return [_to_out(u) for u in users]


def count_users(db: Session, tenant_id: str) -> int:
    return db.query(TenantUser).filter(TenantUser.tenant_id == tenant_id).count()


def count_active_users(db: Session, tenant_id: str) -> int:
    return (
        db.query(TenantUser)
        .filter(TenantUser.tenant_id == tenant_id, TenantUser.is_active.is_(True))
        .count()
    )


def user_exists(db: Session, tenant_id: str, email: str) -> bool:
    return _find(db, tenant_id, email) is not None
