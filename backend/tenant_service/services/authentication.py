from tenant_service.core.errors import AuthenticationFailedError, PrincipalLookupError
from tenant_service.core.security import PasswordHasher
from tenant_service.services.identity_resolver import IdentityResolver, PrincipalView


class CredentialAuthenticator:
    """Username/password check: resolve the principal, then compare the password hash."""

    def __init__(self, resolver: IdentityResolver, hasher: PasswordHasher):
        self._resolver = resolver
        self._hasher = hasher

    def authenticate(self, username: str, password: str) -> PrincipalView:
        try:
            principal = self._resolver.resolve(username)
        except PrincipalLookupError as exc:
            raise AuthenticationFailedError() from exc
        if not self._hasher.verify(password, principal.password_hash):
            raise AuthenticationFailedError()
        return principal
