from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from tenant_service.core.config import settings
from tenant_service.core.database import get_db
from tenant_service.core.errors import AccessDeniedError, AuthenticationError, InvalidTokenError
from tenant_service.core.roles import UserRole
from tenant_service.core.security import PasswordHasher, password_hasher
from tenant_service.core.tokens import TokenService
from tenant_service.models.tenant_user import TenantUser
from tenant_service.services.auth_service import AuthService
from tenant_service.services.authentication import CredentialAuthenticator
from tenant_service.services.credential_store import SqlAlchemyCredentialStore
from tenant_service.services.identity_resolver import IdentityResolver, split_username


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.secret_key,
        access_ttl_ms=settings.jwt_expiration_ms,
        refresh_ttl_ms=settings.jwt_refresh_expiration_ms,
        algorithm=settings.jwt_algorithm,
    )


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_credential_store(db: Session = Depends(get_db)) -> SqlAlchemyCredentialStore:
    return SqlAlchemyCredentialStore(db)


def get_auth_service(
    store: SqlAlchemyCredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    authenticator = CredentialAuthenticator(IdentityResolver(store), hasher)
    return AuthService(store, tokens, authenticator)


def get_current_user(
    authorization: Optional[str] = Header(None),
    store: SqlAlchemyCredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
) -> TenantUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Not authenticated")
    token = authorization.split(" ", 1)[1]

    claims = tokens.try_decode(token)
    if claims is None:
        raise InvalidTokenError()
    principal = IdentityResolver(store).resolve(claims.subject)
    if not tokens.validate_for(token, principal.username):
        raise InvalidTokenError("Token expired or not issued for this user")

    tenant_id, email = split_username(principal.username)
    user = store.find_by_tenant_and_email(tenant_id, email)
    if user is None:
        raise InvalidTokenError()
    return user


def require_tenant_member(tenant_id: str, user: TenantUser = Depends(get_current_user)) -> TenantUser:
    if user.tenant_id != tenant_id:
        raise AccessDeniedError("Access to this tenant is not allowed")
    return user


def require_tenant_master(user: TenantUser = Depends(require_tenant_member)) -> TenantUser:
    if user.role != UserRole.MASTER.value:
        raise AccessDeniedError("Master role required")
    return user
