from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tenant_service.core.errors import InvalidTokenError
from tenant_service.core.tokens import TokenService


SUBJECT = "3f2b8c1e-0000-4000-8000-000000000001:alice@example.com"


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    first = "A" if signature[0] != "A" else "B"
    return ".".join([header, payload, first + signature[1:]])


def test_subject_round_trip(token_service):
    token = token_service.issue_access_token(SUBJECT)
    assert token_service.extract_subject(token) == SUBJECT
    assert token_service.is_structurally_valid(token)
    assert not token_service.is_expired(token)


def test_refresh_expires_no_earlier_than_access(token_service):
    access = token_service.issue_access_token(SUBJECT)
    refresh = token_service.issue_refresh_token(SUBJECT)
    assert token_service.extract_expiration(refresh) >= token_service.extract_expiration(access)


def test_expiration_matches_configured_ttl(token_service):
    before = datetime.now(timezone.utc).replace(microsecond=0)
    token = token_service.issue_access_token(SUBJECT)
    expires_at = token_service.extract_expiration(token)
    assert before + timedelta(seconds=59) <= expires_at <= before + timedelta(seconds=62)


def test_extra_claims_are_carried_but_cannot_override_subject(token_service):
    token = token_service.issue_access_token(SUBJECT, {"role": "MASTER", "sub": "someone-else"})
    assert token_service.extract_subject(token) == SUBJECT
    assert token_service.extract_claim(token, "role") == "MASTER"
    assert token_service.extract_claim(token, "missing") is None


def test_tampered_signature_is_rejected(token_service):
    token = _tamper_signature(token_service.issue_access_token(SUBJECT))
    assert not token_service.is_structurally_valid(token)
    assert not token_service.validate_for(token, SUBJECT)
    with pytest.raises(InvalidTokenError):
        token_service.extract_subject(token)


def test_token_signed_with_other_secret_is_rejected(token_service):
    other = TokenService("another-secret-key-0123456789abcdefgh", 60_000, 120_000)
    token = other.issue_access_token(SUBJECT)
    assert token_service.try_decode(token) is None
    with pytest.raises(InvalidTokenError):
        token_service.extract_expiration(token)


def test_zero_ttl_token_is_expired():
    service = TokenService("unit-test-secret-key-0123456789abcdef", 0, 0)
    token = service.issue_access_token(SUBJECT)
    assert service.is_expired(token)
    assert not service.is_structurally_valid(token)
    assert not service.validate_for(token, SUBJECT)
    # expired tokens can still be read
    assert service.extract_subject(token) == SUBJECT


def test_past_exp_is_expired(token_service):
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = jwt.encode(
        {"sub": SUBJECT, "iat": past - timedelta(hours=1), "exp": past},
        "unit-test-secret-key-0123456789abcdef",
        algorithm="HS256",
    )
    assert token_service.is_expired(token)
    assert not token_service.is_structurally_valid(token)


def test_validate_for_checks_subject(token_service):
    token = token_service.issue_access_token(SUBJECT)
    assert token_service.validate_for(token, SUBJECT)
    assert not token_service.validate_for(token, "other-tenant:alice@example.com")


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c", None])
def test_malformed_tokens(token_service, garbage):
    assert not token_service.is_structurally_valid(garbage)
    assert not token_service.validate_for(garbage, SUBJECT)
    with pytest.raises(InvalidTokenError):
        token_service.is_expired(garbage)


def test_missing_subject_claim_is_rejected(token_service):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iat": now, "exp": now + timedelta(minutes=1)},
        "unit-test-secret-key-0123456789abcdef",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        token_service.extract_subject(token)


def test_refresh_ttl_shorter_than_access_is_refused():
    with pytest.raises(ValueError):
        TokenService("unit-test-secret-key-0123456789abcdef", 120_000, 60_000)
    with pytest.raises(ValueError):
        TokenService("", 60_000, 120_000)
