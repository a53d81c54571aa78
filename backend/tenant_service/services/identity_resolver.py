import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from tenant_service.core.errors import MalformedIdentityError, PrincipalNotFoundError
from tenant_service.core.roles import authority_for
from tenant_service.models.tenant_user import TenantUser


logger = logging.getLogger(__name__)

IDENTITY_DELIMITER = ":"


class CredentialStore(Protocol):
    def find_by_tenant_and_email(self, tenant_id: str, email: str) -> Optional[TenantUser]:
        ...

    def save(self, user: TenantUser) -> TenantUser:
        ...


@dataclass(frozen=True)
class PrincipalView:
    username: str
    password_hash: str
    authorities: Tuple[str, ...]


def compose_username(tenant_id: str, email: str) -> str:
    return f"{tenant_id}{IDENTITY_DELIMITER}{email}"


def split_username(username: Optional[str]) -> Optional[Tuple[str, str]]:
    """Split ``tenantId:email`` on the first delimiter; None unless both halves are non-empty."""
    if not username:
        return None
    tenant_id, sep, email = username.partition(IDENTITY_DELIMITER)
    if not sep or not tenant_id or not email:
        return None
    return tenant_id, email


class IdentityResolver:
    def __init__(self, store: CredentialStore):
        self._store = store

    def resolve(self, username: str) -> PrincipalView:
        logger.debug("Loading principal for username: %s", username)
        parts = split_username(username)
        if parts is None:
            logger.warning("Invalid username format: %s", username)
            raise MalformedIdentityError(f"Invalid username format: {username}")
        tenant_id, email = parts

        user = self._store.find_by_tenant_and_email(tenant_id, email)
        if user is None:
            logger.warning("User not found with email: %s in tenant: %s", email, tenant_id)
            raise PrincipalNotFoundError(f"User not found with email: {email} in tenant: {tenant_id}")
        if not user.is_active:
            logger.warning("Inactive user attempted login: %s in tenant: %s", email, tenant_id)
            raise PrincipalNotFoundError("User account is inactive")

        return PrincipalView(
            username=username,
            password_hash=user.password_hash or "",
            authorities=(authority_for(user.role),),
        )
