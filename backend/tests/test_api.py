from conftest import auth_headers


def create_section(client, tenant, title="Welcome"):
    response = client.post(
        "/api/v1/cms/units",
        json={"type": "section", "payload": {"title": title}, "section_type": "hero"},
        headers=auth_headers(tenant),
    )
    assert response.status_code == 201
    return response.get_json()


def test_health_endpoint_reports_ok(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_openapi_document_is_served(client):
    response = client.get("/openapi/cms.yaml")
    assert response.status_code == 200
    assert b"/cms/units/{unit_id}/approve" in response.data


def test_full_approval_flow(client, tenant):
    unit = create_section(client, tenant)
    assert (unit["environment"], unit["status"]) == ("sandbox", "draft")
    assert unit["version"] == 1

    assert client.get("/api/v1/public/springfield/sections").get_json() == []

    submitted = client.post(f"/api/v1/cms/units/{unit['id']}/submit", headers=auth_headers(tenant))
    assert submitted.get_json()["status"] == "pending_approval"

    approvals = client.get("/api/v1/cms/approvals", headers=auth_headers(tenant)).get_json()
    assert [u["id"] for u in approvals] == [unit["id"]]

    approved = client.post(
        f"/api/v1/cms/units/{unit['id']}/approve",
        headers=auth_headers(tenant, role="admin", user_id="principal"),
    )
    assert approved.status_code == 200
    body = approved.get_json()
    assert (body["environment"], body["status"]) == ("live", "published")
    assert body["updated_by"] == "principal"

    public = client.get("/api/v1/public/springfield/sections").get_json()
    assert [u["id"] for u in public] == [unit["id"]]
    assert public[0]["payload"] == {"title": "Welcome"}
    assert "status" not in public[0]


def test_editors_cannot_approve(client, tenant):
    unit = create_section(client, tenant)
    client.post(f"/api/v1/cms/units/{unit['id']}/submit", headers=auth_headers(tenant))

    response = client.post(f"/api/v1/cms/units/{unit['id']}/approve", headers=auth_headers(tenant))

    assert response.status_code == 403


def test_illegal_transition_returns_current_state(client, tenant):
    unit = create_section(client, tenant)

    response = client.post(
        f"/api/v1/cms/units/{unit['id']}/approve",
        headers=auth_headers(tenant, role="owner"),
    )

    assert response.status_code == 409
    body = response.get_json()
    assert body["error"] == "IllegalTransition"
    assert body["current"] == {"environment": "sandbox", "status": "draft"}


def test_if_match_guards_edits(client, tenant):
    unit = create_section(client, tenant)
    headers = auth_headers(tenant)

    stale = client.patch(
        f"/api/v1/cms/units/{unit['id']}",
        json={"payload": {"subtitle": "Hi"}},
        headers=dict(headers, **{"If-Match": "7"}),
    )
    assert stale.status_code == 409
    assert stale.get_json()["error"] == "Conflict"

    fresh = client.patch(
        f"/api/v1/cms/units/{unit['id']}",
        json={"payload": {"subtitle": "Hi"}},
        headers=dict(headers, **{"If-Match": str(unit["version"])}),
    )
    assert fresh.status_code == 200
    assert fresh.get_json()["payload"] == {"title": "Welcome", "subtitle": "Hi"}
    assert fresh.get_json()["version"] == unit["version"] + 1


def test_validation_errors_carry_fields(client, tenant):
    response = client.post(
        "/api/v1/cms/units",
        json={"type": "notice", "payload": {"title": "Fees"}},
        headers=auth_headers(tenant),
    )

    assert response.status_code == 400
    assert "description" in response.get_json()["fields"]


def test_delete_is_idempotent_over_http(client, tenant):
    unit = create_section(client, tenant)
    url = f"/api/v1/cms/units/{unit['id']}"

    assert client.delete(url, headers=auth_headers(tenant)).status_code == 204
    assert client.delete(url, headers=auth_headers(tenant)).status_code == 204
    assert client.get(url, headers=auth_headers(tenant)).status_code == 404


def test_tenant_header_and_token_must_agree(client, tenant, other_tenant):
    unit = create_section(client, tenant)

    missing = client.get("/api/v1/cms/units", headers={"Authorization": auth_headers(tenant)["Authorization"]})
    assert missing.status_code == 400

    mismatched = dict(auth_headers(other_tenant), **{"X-Tenant-ID": tenant.id})
    assert client.get("/api/v1/cms/units", headers=mismatched).status_code == 403

    # Other school's editor cannot reach this unit through its own tenant
    response = client.post(f"/api/v1/cms/units/{unit['id']}/submit", headers=auth_headers(other_tenant))
    assert response.status_code == 404


def test_unauthenticated_cms_requests_are_rejected(client, tenant):
    response = client.get("/api/v1/cms/units", headers={"X-Tenant-ID": tenant.id})
    assert response.status_code == 401


def test_list_units_by_environment(client, tenant):
    unit = create_section(client, tenant)

    sandbox = client.get("/api/v1/cms/units?environment=sandbox", headers=auth_headers(tenant)).get_json()
    live = client.get("/api/v1/cms/units?environment=live", headers=auth_headers(tenant)).get_json()

    assert [u["id"] for u in sandbox] == [unit["id"]]
    assert live == []


def test_public_endpoints_fail_soft_for_unknown_school(client):
    assert client.get("/api/v1/public/nowhere/sections").get_json() == []
    assert client.get("/api/v1/public/nowhere/notices").get_json() == []
    assert client.get("/api/v1/public/nowhere").status_code == 404


def test_public_inquiry_and_lead_listing(client, tenant):
    response = client.post(
        "/api/v1/public/springfield/inquiries",
        json={"first_name": "Lisa", "last_name": "Simpson", "email": "lisa@example.com"},
    )
    assert response.status_code == 201
    assert response.get_json()["success"] is True

    leads = client.get("/api/v1/cms/leads", headers=auth_headers(tenant)).get_json()
    assert [lead["email"] for lead in leads] == ["lisa@example.com"]

    updated = client.patch(
        f"/api/v1/cms/leads/{leads[0]['id']}",
        json={"status": "contacted"},
        headers=auth_headers(tenant),
    )
    assert updated.get_json()["status"] == "contacted"

    invalid = client.post("/api/v1/public/springfield/inquiries", json={"first_name": "Bart"})
    assert invalid.status_code == 400


def test_settings_update_requires_admin(client, tenant):
    denied = client.patch("/api/v1/cms/settings", json={"name": "X"}, headers=auth_headers(tenant))
    assert denied.status_code == 403

    response = client.patch(
        "/api/v1/cms/settings",
        json={"primary_color": "#000000"},
        headers=auth_headers(tenant, role="admin"),
    )
    assert response.status_code == 200
    assert response.get_json()["primary_color"] == "#000000"

    public = client.get("/api/v1/public/springfield").get_json()
    assert public["primary_color"] == "#000000"
    assert "id" not in public


def test_audit_trail_is_paginated(client, tenant):
    unit = create_section(client, tenant)
    client.post(f"/api/v1/cms/units/{unit['id']}/submit", headers=auth_headers(tenant))
    client.post(f"/api/v1/cms/units/{unit['id']}/reject", headers=auth_headers(tenant, role="admin"))

    first = client.get("/api/v1/cms/audit?limit=2", headers=auth_headers(tenant, role="admin")).get_json()
    assert len(first["items"]) == 2
    assert first["pagination"]["has_more"] is True
    assert first["items"][0]["action"] == "section.reject"

    rest = client.get(
        "/api/v1/cms/audit",
        query_string={"limit": 2, "cursor": first["pagination"]["next_cursor"]},
        headers=auth_headers(tenant, role="admin"),
    ).get_json()
    assert [item["action"] for item in rest["items"]] == ["section.create"]
    assert rest["pagination"]["has_more"] is False
