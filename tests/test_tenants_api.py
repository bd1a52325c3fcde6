from datetime import timedelta

from utils.helpers import get_lagos_today


def test_create_then_fetch_returns_fields_with_defaults(client, admin, admin_headers):
    created = client.post(
        "/api/tenants",
        json={"tenant_name": "Ngozi Eze", "rent_per_annum": 350000, "phone": "08031234567"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    tenant = created.json()
    assert tenant["sn"] == 1
    assert tenant["created_by"] == admin.id

    fetched = client.get(f"/api/tenants/{tenant['id']}", headers=admin_headers)
    assert fetched.status_code == 200
    body = fetched.json()
    assert body["tenant_name"] == "Ngozi Eze"
    assert body["rent_per_annum"] == 350000
    assert body["amount_paid"] == 0
    assert body["accommodation_type"] == ""
    assert body["property_address"] == ""
    assert body["quit_notice"] is False
    assert body["lease_end"] is None
    assert body["payment_status"] == "unpaid"
    assert body["payments"] == []
    assert body["maintenance"] == []


def test_sn_increments(make_tenant):
    first = make_tenant(tenant_name="A")
    second = make_tenant(tenant_name="B")
    assert second["sn"] == first["sn"] + 1


def test_sn_is_not_reused_after_deleting_newest(client, make_tenant, admin_headers):
    make_tenant(tenant_name="A")
    newest = make_tenant(tenant_name="B")
    assert client.delete(f"/api/tenants/{newest['id']}", headers=admin_headers).status_code == 200

    replacement = make_tenant(tenant_name="C")
    assert replacement["sn"] == newest["sn"] + 1


def test_sn_continues_across_import(client, make_tenant, admin_headers):
    first = make_tenant(tenant_name="A")
    client.delete(f"/api/tenants/{first['id']}", headers=admin_headers)

    response = client.post(
        "/api/tenants/import",
        files={"file": ("tenants.csv", b"Name,Rent\nBola,1000\n", "text/csv")},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert [t["sn"] for t in response.json()["tenants"]] == [2]


def test_tenant_name_required(client, staff_headers):
    response = client.post("/api/tenants", json={"tenant_name": "  "}, headers=staff_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "tenant_name required"}


def test_negative_rent_rejected(client, staff_headers):
    response = client.post(
        "/api/tenants", json={"tenant_name": "X", "rent_per_annum": -1}, headers=staff_headers
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_unknown_tenant_is_404(client, staff_headers):
    response = client.get("/api/tenants/does-not-exist", headers=staff_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_status_filters(client, make_tenant, admin_headers):
    make_tenant(tenant_name="Paid", rent_per_annum=100000, amount_paid=100000)
    make_tenant(tenant_name="Partial", rent_per_annum=100000, amount_paid=40000)
    make_tenant(tenant_name="Unpaid", rent_per_annum=100000, amount_paid=0)
    make_tenant(tenant_name="Leaving", rent_per_annum=100000, amount_paid=0, quit_notice=True)

    def names(status):
        response = client.get("/api/tenants", params={"status": status}, headers=admin_headers)
        assert response.status_code == 200
        return [t["tenant_name"] for t in response.json()]

    assert names("paid") == ["Paid"]
    assert names("partial") == ["Partial"]
    assert names("unpaid") == ["Unpaid", "Leaving"]
    assert names("quit") == ["Leaving"]
    # Unknown values are ignored
    assert len(names("bogus")) == 4


def test_expiring_filter_is_today_through_30_days(client, make_tenant, admin_headers):
    today = get_lagos_today()
    make_tenant(tenant_name="Today", lease_end=today.isoformat())
    make_tenant(tenant_name="Day30", lease_end=(today + timedelta(days=30)).isoformat())
    make_tenant(tenant_name="Day31", lease_end=(today + timedelta(days=31)).isoformat())
    make_tenant(tenant_name="Yesterday", lease_end=(today - timedelta(days=1)).isoformat())
    make_tenant(tenant_name="NoLease")

    response = client.get("/api/tenants", params={"status": "expiring"}, headers=admin_headers)
    assert [t["tenant_name"] for t in response.json()] == ["Today", "Day30"]


def test_search_matches_name_type_address_email(client, make_tenant, admin_headers):
    make_tenant(tenant_name="Chidi Okafor", accommodation_type="Self Contain")
    make_tenant(tenant_name="Bola", property_address="Block C, Lekki")
    make_tenant(tenant_name="Emeka", email="emeka@mail.ng")

    def search(term):
        response = client.get("/api/tenants", params={"search": term}, headers=admin_headers)
        return [t["tenant_name"] for t in response.json()]

    assert search("chidi") == ["Chidi Okafor"]
    assert search("self contain") == ["Chidi Okafor"]
    assert search("LEKKI") == ["Bola"]
    assert search("mail.ng") == ["Emeka"]


def test_full_update_replaces_balance_without_payment_rows(client, make_tenant, admin_headers):
    tenant = make_tenant(tenant_name="Old", rent_per_annum=100000)

    response = client.put(
        f"/api/tenants/{tenant['id']}",
        json={"tenant_name": "New", "rent_per_annum": 120000, "amount_paid": 60000, "notes": "edited"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["tenant_name"] == "New"
    assert body["amount_paid"] == 60000
    assert body["payment_status"] == "partial"

    payments = client.get("/api/payments", params={"tenant_id": tenant["id"]}, headers=admin_headers)
    assert payments.json() == []


def test_payment_patch_sets_rather_than_increments(client, make_tenant, staff_headers):
    tenant = make_tenant(rent_per_annum=100000, amount_paid=30000)

    response = client.patch(
        f"/api/tenants/{tenant['id']}/payment", json={"amount_paid": 50000}, headers=staff_headers
    )
    assert response.status_code == 200
    assert response.json()["amount_paid"] == 50000

    cleared = client.patch(f"/api/tenants/{tenant['id']}/payment", json={}, headers=staff_headers)
    assert cleared.json()["amount_paid"] == 0


def test_quit_notice_stamps_and_clears_date(client, make_tenant, admin_headers):
    tenant = make_tenant()

    on = client.patch(f"/api/tenants/{tenant['id']}/quit", json={"quit_notice": True}, headers=admin_headers)
    assert on.status_code == 200
    assert on.json()["quit_notice"] is True
    assert on.json()["quit_notice_date"] == get_lagos_today().isoformat()

    feed = client.get("/api/notifications", headers=admin_headers).json()
    assert [n["type"] for n in feed] == ["quit_notice"]

    off = client.patch(f"/api/tenants/{tenant['id']}/quit", json={"quit_notice": False}, headers=admin_headers)
    assert off.json()["quit_notice"] is False
    assert off.json()["quit_notice_date"] is None


def test_delete_requires_manager_and_cascades_payments(client, make_tenant, staff_headers, admin_headers):
    tenant = make_tenant()
    client.post("/api/payments", json={"tenant_id": tenant["id"], "amount": 1000}, headers=staff_headers)

    forbidden = client.delete(f"/api/tenants/{tenant['id']}", headers=staff_headers)
    assert forbidden.status_code == 403

    deleted = client.delete(f"/api/tenants/{tenant['id']}", headers=admin_headers)
    assert deleted.json() == {"success": True}

    assert client.get(f"/api/tenants/{tenant['id']}", headers=admin_headers).status_code == 404
    assert client.get("/api/payments", headers=admin_headers).json() == []


def test_portal_is_public_and_reduced(client, make_tenant, staff_headers):
    tenant = make_tenant(rent_per_annum=100000, notes="private note", email="t@mail.ng")
    client.post(
        "/api/payments",
        json={"tenant_id": tenant["id"], "amount": 25000, "payment_method": "pos"},
        headers=staff_headers,
    )

    response = client.get(f"/api/portal/{tenant['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["payment_status"] == "partial"
    assert body["amount_paid"] == 25000
    assert "notes" not in body
    assert "email" not in body
    assert len(body["payments"]) == 1
    assert set(body["payments"][0]) == {"amount", "payment_date", "payment_method", "receipt_number"}
    assert body["payments"][0]["payment_method"] == "pos"

    assert client.get("/api/portal/unknown").status_code == 404


def test_delete_unlinks_tickets_and_notifications(client, make_tenant, staff_headers, admin_headers):
    tenant = make_tenant(tenant_name="Ada")
    ticket = client.post(
        "/api/maintenance", json={"tenant_id": tenant["id"], "title": "Leaking roof"}, headers=staff_headers
    ).json()
    client.patch(f"/api/tenants/{tenant['id']}/quit", json={"quit_notice": True}, headers=admin_headers)

    feed = client.get("/api/notifications", headers=admin_headers).json()
    assert {n["type"] for n in feed} == {"maintenance", "quit_notice"}
    assert all(n["tenant_id"] == tenant["id"] for n in feed)

    assert client.delete(f"/api/tenants/{tenant['id']}", headers=admin_headers).json() == {"success": True}

    tickets = client.get("/api/maintenance", headers=staff_headers).json()
    assert [(t["id"], t["tenant_id"], t["tenant_name"]) for t in tickets] == [(ticket["id"], None, "Ada")]

    feed = client.get("/api/notifications", headers=admin_headers).json()
    assert len(feed) == 2
    assert all(n["tenant_id"] is None for n in feed)
