from tenant_service.core.roles import UserRole
from tenant_service.models.tenant import TenantStatus
from tenant_service.models.tenant_user import TenantUser
from tenant_service.schemas import PreferencesOut, SubscriptionOut, TenantOut, TenantUserOut


def test_create_and_fetch_tenant(client):
    r = client.post("/api/v1/tenants", json={"name": "Acme Radio", "subdomain": "acme-radio"})
    assert r.status_code == 201
    tenant = r.json()
    assert tenant["status"] == "ACTIVE"

    r = client.get(f"/api/v1/tenants/{tenant['id']}")
    assert r.status_code == 200
    assert r.json()["subdomain"] == "acme-radio"

    r = client.get("/api/v1/tenants/subdomain/acme-radio")
    assert r.json()["id"] == tenant["id"]

    assert client.get(f"/api/v1/tenants/{tenant['id']}/exists").json() is True
    assert client.get("/api/v1/tenants/subdomain/acme-radio/exists").json() is True
    assert client.get("/api/v1/tenants/subdomain/nothing-here/exists").json() is False


def test_duplicate_subdomain_conflicts(client):
    client.post("/api/v1/tenants", json={"name": "Acme Radio", "subdomain": "acme-radio"})
    r = client.post("/api/v1/tenants", json={"name": "Other", "subdomain": "acme-radio"})
    assert r.status_code == 409
    assert "acme-radio" in r.json()["error"]


def test_invalid_tenants_are_rejected(client):
    for body in (
        {"name": "Demo", "subdomain": "demo"},
        {"name": "Bad", "subdomain": "-bad-"},
        {"name": "Bad", "subdomain": "Upper"},
        {"name": "X", "subdomain": "fine-one"},
        {"name": "Bad!name", "subdomain": "fine-two"},
    ):
        r = client.post("/api/v1/tenants", json=body)
        assert r.status_code == 400, body


def test_unknown_tenant_is_404(client):
    r = client.get("/api/v1/tenants/00000000-0000-4000-8000-000000000000")
    assert r.status_code == 404
    assert r.json()["error"].startswith("Tenant not found")


def test_list_search_and_count(client, make_tenant):
    make_tenant("Alpha Radio", "alpha-radio")
    make_tenant("Beta Radio", "beta-radio")
    make_tenant("Gamma Store", "gamma-store", status=TenantStatus.SUSPENDED)

    page = client.get("/api/v1/tenants", params={"page": 0, "size": 2}).json()
    assert page["total_elements"] == 3
    assert page["total_pages"] == 2
    assert len(page["content"]) == 2

    names = [t["name"] for t in client.get("/api/v1/tenants/search", params={"name": "radio"}).json()]
    assert names == ["Alpha Radio", "Beta Radio"]

    assert client.get("/api/v1/tenants/count/active").json() == 2
    suspended = client.get("/api/v1/tenants/status/SUSPENDED").json()
    assert [t["subdomain"] for t in suspended] == ["gamma-store"]
    paged = client.get("/api/v1/tenants/status/ACTIVE/page", params={"size": 1}).json()
    assert paged["total_elements"] == 2


def test_pagination_limits(client):
    assert client.get("/api/v1/tenants", params={"size": 101}).status_code == 400
    assert client.get("/api/v1/tenants", params={"page": -1}).status_code == 400
    assert client.get("/api/v1/tenants", params={"size": 0}).status_code == 400


def test_update_requires_master_of_tenant(client, make_tenant, make_user, auth_headers):
    tenant = make_tenant()
    other = make_tenant("Other Radio", "other-radio")
    make_user(tenant, "master@example.com")
    make_user(tenant, "producer@example.com", role=UserRole.PRODUCER)
    make_user(other, "master@example.com")

    url = f"/api/v1/tenants/{tenant.id}"
    body = {"name": "Acme Renamed", "status": "SUSPENDED"}

    assert client.put(url, json=body).status_code == 401
    assert client.put(url, json=body, headers=auth_headers(tenant.id, "producer@example.com")).status_code == 403
    assert client.put(url, json=body, headers=auth_headers(other.id, "master@example.com")).status_code == 403

    r = client.put(url, json=body, headers=auth_headers(tenant.id, "master@example.com"))
    assert r.status_code == 200
    assert r.json()["name"] == "Acme Renamed"
    assert r.json()["status"] == "SUSPENDED"


def test_update_to_taken_subdomain_conflicts(client, make_tenant, make_user, auth_headers):
    tenant = make_tenant()
    make_tenant("Other Radio", "other-radio")
    make_user(tenant, "master@example.com")

    r = client.put(
        f"/api/v1/tenants/{tenant.id}",
        json={"subdomain": "other-radio"},
        headers=auth_headers(tenant.id, "master@example.com"),
    )
    assert r.status_code == 409


def test_delete_tenant_removes_users(client, db, make_tenant, make_user, auth_headers):
    tenant = make_tenant()
    make_user(tenant, "master@example.com")
    make_user(tenant, "manager@example.com", role=UserRole.MANAGER)
    tenant_id = tenant.id
    headers = auth_headers(tenant_id, "master@example.com")

    r = client.delete(f"/api/v1/tenants/{tenant_id}", headers=headers)
    assert r.status_code == 204

    db.expire_all()
    assert db.query(TenantUser).filter(TenantUser.tenant_id == tenant_id).count() == 0
    assert client.get(f"/api/v1/tenants/{tenant_id}").status_code == 404


def test_malformed_tenant_id_is_400(client):
    r = client.get("/api/v1/tenants/not-a-uuid")
    assert r.status_code == 400
    assert "UUID" in r.json()["error"]


def test_out_models_read_orm_rows(make_tenant, make_user):
    for model in (TenantOut, TenantUserOut, PreferencesOut, SubscriptionOut):
        assert model.model_config["from_attributes"] is True

    tenant = make_tenant()
    user = make_user(tenant, "master@example.com")

    assert TenantOut.model_validate(tenant).subdomain == "acme-radio"
    assert TenantUserOut.model_validate(user).tenant_id == tenant.id
