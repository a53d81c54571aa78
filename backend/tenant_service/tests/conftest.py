import os

# Settings are read at import time, so the environment must be in place first
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key-for-tenant-service-0123456789"

from typing import Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tenant_service.core.database import get_db  # noqa: E402
from tenant_service.core.roles import UserRole  # noqa: E402
from tenant_service.core.security import hash_password  # noqa: E402
from tenant_service.core.tokens import TokenService  # noqa: E402
from tenant_service.main import app  # noqa: E402
from tenant_service.models.tenant import Base, Tenant, TenantStatus, utcnow  # noqa: E402
from tenant_service.models.tenant_user import TenantUser  # noqa: E402


class InMemoryCredentialStore:
    """Dict-backed stand-in for the SQLAlchemy credential store."""

    def __init__(self):
        self.users: dict[tuple[str, str], TenantUser] = {}
        self.saves = 0

    def add(
        self,
        tenant_id: str,
        email: str,
        password: Optional[str],
        role: UserRole = UserRole.MASTER,
        is_active: bool = True,
    ) -> TenantUser:
        now = utcnow()
        user = TenantUser(
            id=f"{tenant_id}-{email}",
            tenant_id=tenant_id,
            email=email,
            password_hash=hash_password(password) if password else None,
            role=role.value,
            is_active=is_active,
            created_at=now,
            updated_at=now,
            last_login_at=None,
        )
        self.users[(tenant_id, email)] = user
        return user

    def find_by_tenant_and_email(self, tenant_id, email):
        return self.users.get((tenant_id, email))

    def save(self, user):
        self.saves += 1
        self.users[(user.tenant_id, user.email)] = user
        return user


@pytest.fixture
def memory_store():
    return InMemoryCredentialStore()


@pytest.fixture
def token_service():
    return TokenService(
        secret="unit-test-secret-key-0123456789abcdef",
        access_ttl_ms=60_000,
        refresh_ttl_ms=120_000,
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_tenant(db):
    def _make(name: str = "Acme Radio", subdomain: str = "acme-radio", status: TenantStatus = TenantStatus.ACTIVE):
        tenant = Tenant(name=name, subdomain=subdomain, status=status.value)
        db.add(tenant)
        db.commit()
        db.refresh(tenant)
        return tenant

    return _make


@pytest.fixture
def make_user(db):
    def _make(
        tenant: Tenant,
        email: str,
        password: Optional[str] = "Secret123",
        role: UserRole = UserRole.MASTER,
        is_active: bool = True,
    ):
        user = TenantUser(
            tenant_id=tenant.id,
            email=email,
            password_hash=hash_password(password) if password else None,
            role=role.value,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def login(client):
    def _login(tenant_id: str, email: str, password: str = "Secret123") -> dict:
        r = client.post("/api/v1/auth/login", json={
            "tenant_id": tenant_id,
            "email": email,
            "password": password,
        })
        assert r.status_code == 200, r.text
        return r.json()

    return _login


@pytest.fixture
def auth_headers(login):
    def _headers(tenant_id: str, email: str, password: str = "Secret123") -> dict:
        return {"Authorization": f"Bearer {login(tenant_id, email, password)['access_token']}"}

    return _headers
