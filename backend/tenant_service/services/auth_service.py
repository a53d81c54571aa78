"""Login, token refresh and logout for tenant users.

Identity is always the pair (tenant_id, email), carried in tokens as the
composite ``"<tenantId>:<email>"`` subject. Refresh tokens are not revoked
server-side: a refresh token stays usable until it expires, even after it has
been exchanged, and logout only records the event.
"""

import logging

from tenant_service.core.errors import (
    AuthenticationFailedError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidTokenFormatError,
    UserNotFoundOrInactiveError,
)
from tenant_service.core.tokens import TokenService
from tenant_service.models.tenant import utcnow
from tenant_service.models.tenant_user import TenantUser
from tenant_service.schemas import LoginResult, TenantUserOut
from tenant_service.services.authentication import CredentialAuthenticator
from tenant_service.services.identity_resolver import CredentialStore, compose_username, split_username


logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        tokens: TokenService,
        authenticator: CredentialAuthenticator,
    ):
        self._store = store
        self._tokens = tokens
        self._authenticator = authenticator

    def login(self, tenant_id: str, email: str, password: str) -> LoginResult:
        logger.debug("Processing login for tenant: %s with email: %s", tenant_id, email)

        if self._store.find_by_tenant_and_email(tenant_id, email) is None:
            logger.warning("Login failed - user not found: %s in tenant: %s", email, tenant_id)
            raise InvalidCredentialsError()

        username = compose_username(tenant_id, email)
        try:
            principal = self._authenticator.authenticate(username, password)
        except AuthenticationFailedError as exc:
            logger.warning("Login failed - bad credentials: %s in tenant: %s", email, tenant_id)
            raise InvalidCredentialsError() from exc

        user = self._store.find_by_tenant_and_email(tenant_id, email)
        if user is None:
            raise InvalidCredentialsError()

        access_token, refresh_token = self._issue_pair(principal.username, user)

        # Everything that can fail happens before the single write
        logged_in_at = utcnow()
        view = TenantUserOut.model_validate(user).model_copy(update={"last_login_at": logged_in_at})
        result = self._result(access_token, refresh_token, view)

        user.last_login_at = logged_in_at
        self._store.save(user)

        logger.info("Login successful for user: %s in tenant: %s", email, tenant_id)
        return result

    def refresh_token(self, refresh_token: str) -> LoginResult:
        logger.debug("Processing token refresh")

        if not self._tokens.is_structurally_valid(refresh_token):
            logger.warning("Invalid refresh token provided")
            raise InvalidTokenError("Invalid refresh token")

        username = self._tokens.extract_subject(refresh_token)
        parts = split_username(username)
        if parts is None:
            logger.warning("Invalid username format in refresh token: %s", username)
            raise InvalidTokenFormatError()
        tenant_id, email = parts

        user = self._store.find_by_tenant_and_email(tenant_id, email)
        if user is None or not user.is_active:
            logger.warning("User not found or inactive during token refresh: %s in tenant: %s", email, tenant_id)
            raise UserNotFoundOrInactiveError()

        access_token, new_refresh_token = self._issue_pair(username, user)

        logger.debug("Token refresh successful for user: %s in tenant: %s", email, tenant_id)
        return self._result(access_token, new_refresh_token, TenantUserOut.model_validate(user))

    def logout(self, refresh_token: str) -> None:
        logger.debug("Processing logout")
        if self._tokens.is_structurally_valid(refresh_token):
            logger.info("User logged out: %s", self._tokens.extract_subject(refresh_token))

    def _issue_pair(self, username: str, user: TenantUser) -> tuple[str, str]:
        access_token = self._tokens.issue_access_token(
            username, {"role": user.role, "tenantId": user.tenant_id}
        )
        refresh_token = self._tokens.issue_refresh_token(username)
        return access_token, refresh_token

    def _result(self, access_token: str, refresh_token: str, user: TenantUserOut) -> LoginResult:
        return LoginResult(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type=TOKEN_TYPE,
            expires_in=self._tokens.access_ttl_ms,
            user=user,
        )
