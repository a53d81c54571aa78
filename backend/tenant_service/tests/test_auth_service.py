import pytest

from tenant_service.core.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidTokenFormatError,
    UserNotFoundOrInactiveError,
)
from tenant_service.core.security import PasswordHasher
from tenant_service.models.tenant import utcnow
from tenant_service.services.auth_service import AuthService
from tenant_service.services.authentication import CredentialAuthenticator
from tenant_service.services.identity_resolver import IdentityResolver


@pytest.fixture
def auth(memory_store, token_service):
    authenticator = CredentialAuthenticator(IdentityResolver(memory_store), PasswordHasher(rounds=4))
    return AuthService(memory_store, token_service, authenticator)


def test_alice_logs_in_to_t1(auth, memory_store, token_service):
    memory_store.add("t1", "alice@example.com", "Secret123")

    result = auth.login("t1", "alice@example.com", "Secret123")

    assert result.token_type == "Bearer"
    assert result.user.email == "alice@example.com"
    assert result.user.tenant_id == "t1"
    assert result.expires_in == token_service.access_ttl_ms
    assert token_service.extract_subject(result.access_token) == "t1:alice@example.com"
    assert token_service.extract_claim(result.access_token, "role") == "MASTER"
    assert token_service.extract_claim(result.access_token, "tenantId") == "t1"
    assert token_service.extract_subject(result.refresh_token) == "t1:alice@example.com"

    with pytest.raises(InvalidCredentialsError):
        auth.login("t1", "alice@example.com", "wrong")


def test_login_result_hides_password_hash(auth, memory_store):
    memory_store.add("t1", "alice@example.com", "Secret123")
    result = auth.login("t1", "alice@example.com", "Secret123")
    assert "password_hash" not in result.model_dump()["user"]


def test_identity_is_isolated_per_tenant(auth, memory_store):
    memory_store.add("tenant-a", "bob@example.com", "PasswordA1")
    memory_store.add("tenant-b", "bob@example.com", "PasswordB1")

    result = auth.login("tenant-a", "bob@example.com", "PasswordA1")
    assert result.user.tenant_id == "tenant-a"

    with pytest.raises(InvalidCredentialsError):
        auth.login("tenant-b", "bob@example.com", "PasswordA1")


def test_inactive_user_cannot_login_or_refresh(auth, memory_store):
    user = memory_store.add("t1", "carol@example.com", "Secret123")
    refresh_token = auth.login("t1", "carol@example.com", "Secret123").refresh_token

    user.is_active = False

    with pytest.raises(InvalidCredentialsError):
        auth.login("t1", "carol@example.com", "Secret123")
    with pytest.raises(UserNotFoundOrInactiveError):
        auth.refresh_token(refresh_token)


def test_unknown_user_fails_like_wrong_password(auth, memory_store):
    memory_store.add("t1", "alice@example.com", "Secret123")

    with pytest.raises(InvalidCredentialsError) as unknown:
        auth.login("no-such-tenant", "nobody@example.com", "anything")
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        auth.login("t1", "alice@example.com", "anything")

    assert type(unknown.value) is type(wrong_password.value)
    assert unknown.value.message == wrong_password.value.message


def test_user_without_password_cannot_login(auth, memory_store):
    memory_store.add("t1", "nopass@example.com", None)
    with pytest.raises(InvalidCredentialsError):
        auth.login("t1", "nopass@example.com", "")


def test_login_records_last_login(auth, memory_store):
    user = memory_store.add("t1", "alice@example.com", "Secret123")
    started = utcnow()

    auth.login("t1", "alice@example.com", "Secret123")

    assert user.last_login_at is not None
    assert user.last_login_at >= started
    assert memory_store.saves == 1


def test_failed_login_leaves_last_login_untouched(auth, memory_store):
    user = memory_store.add("t1", "alice@example.com", "Secret123")

    with pytest.raises(InvalidCredentialsError):
        auth.login("t1", "alice@example.com", "wrong")

    assert user.last_login_at is None
    assert memory_store.saves == 0


def test_refresh_token_can_be_reused(auth, memory_store, token_service):
    memory_store.add("t1", "alice@example.com", "Secret123")
    refresh_token = auth.login("t1", "alice@example.com", "Secret123").refresh_token

    first = auth.refresh_token(refresh_token)
    second = auth.refresh_token(refresh_token)

    for result in (first, second):
        assert token_service.extract_subject(result.access_token) == "t1:alice@example.com"
        assert result.token_type == "Bearer"


def test_refresh_does_not_touch_last_login(auth, memory_store):
    user = memory_store.add("t1", "alice@example.com", "Secret123")
    refresh_token = auth.login("t1", "alice@example.com", "Secret123").refresh_token
    logged_in_at = user.last_login_at

    auth.refresh_token(refresh_token)

    assert user.last_login_at == logged_in_at
    assert memory_store.saves == 1


def test_refresh_rejects_garbage(auth):
    with pytest.raises(InvalidTokenError) as exc:
        auth.refresh_token("not-a-token")
    assert exc.value.message == "Invalid refresh token"


def test_refresh_rejects_subject_without_tenant(auth, token_service):
    token = token_service.issue_refresh_token("alice@example.com")
    with pytest.raises(InvalidTokenFormatError):
        auth.refresh_token(token)


def test_refresh_for_deleted_user(auth, memory_store):
    memory_store.add("t1", "alice@example.com", "Secret123")
    refresh_token = auth.login("t1", "alice@example.com", "Secret123").refresh_token
    memory_store.users.clear()

    with pytest.raises(UserNotFoundOrInactiveError):
        auth.refresh_token(refresh_token)


def test_logout_never_raises(auth, memory_store):
    memory_store.add("t1", "alice@example.com", "Secret123")
    refresh_token = auth.login("t1", "alice@example.com", "Secret123").refresh_token

    auth.logout(refresh_token)
    auth.logout("not-a-token")
    auth.logout("")


def test_login_with_special_use_domain_email(auth, memory_store):
    user = memory_store.add("t1", "bob@intranet.local", "Secret123")

    result = auth.login("t1", "bob@intranet.local", "Secret123")

    assert result.user.email == "bob@intranet.local"
    assert result.user.last_login_at == user.last_login_at
    assert memory_store.saves == 1
