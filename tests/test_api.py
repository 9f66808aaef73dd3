"""HTTP surface: sessions, role gates and end-to-end flows."""

import pytest


class TestSessions:
    def test_login_returns_home_view(self, client):
        resp = client.post("/auth/login", json={"id": "admin", "password": "password"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["view"] == "DASHBOARD"
        assert body["user"] == {"id": "admin", "name": "Administrator", "role": "ADMIN"}

    def test_bad_credentials(self, client):
        resp = client.post("/auth/login", json={"id": "admin", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid ID or Password"

    @pytest.mark.parametrize("headers", [{}, {"X-Session-Id": "stale"}])
    def test_missing_or_unknown_session(self, client, headers):
        assert client.get("/cart", headers=headers).status_code == 401

    def test_logout_ends_session(self, client, admin_headers):
        assert client.post("/auth/logout", headers=admin_headers).json() == {"ok": True}
        assert client.get("/auth/me", headers=admin_headers).status_code == 401

    def test_register_requires_fields(self, client):
        resp = client.post("/auth/register", json={"name": "", "phone": "1", "password": "x"})
        assert resp.status_code == 400

    def test_register_rejects_taken_id(self, client, customer_headers):
        resp = client.post("/auth/register", json={"name": "Nima", "phone": "2222001234", "password": "x"})
        assert resp.status_code == 400


class TestRoleGates:
    @pytest.mark.parametrize("path", ["/kitchen", "/orders/online", "/inventory", "/bookings",
                                      "/customers", "/staff", "/dashboard"])
    def test_customers_cannot_open_staff_views(self, client, customer_headers, path):
        assert client.get(path, headers=customer_headers).status_code == 403

    @pytest.mark.parametrize("path", ["/staff/access", "/settings/backup"])
    def test_waiters_cannot_open_admin_views(self, client, waiter_headers, path):
        assert client.get(path, headers=waiter_headers).status_code == 403

    @pytest.mark.parametrize("method,path", [
        ("GET", "/dashboard"), ("GET", "/customers"), ("POST", "/customers/1/campaign"),
        ("GET", "/inventory"), ("DELETE", "/inventory/1"), ("POST", "/inventory/1/waste"),
        ("GET", "/staff"), ("GET", "/staff/schedule"), ("GET", "/staff/payroll"),
        ("POST", "/staff/insight"),
    ])
    def test_waiters_cannot_reach_back_office(self, client, waiter_headers, method, path):
        assert client.request(method, path, headers=waiter_headers).status_code == 403

    def test_waiter_keeps_floor_screens(self, client, waiter_headers):
        for path in ("/kitchen", "/orders/online", "/bookings"):
            assert client.get(path, headers=waiter_headers).status_code == 200

    def test_duplicate_access_id_rejected(self, client, admin_headers):
        resp = client.post("/staff/access", json={"id": "admin", "password": "pw", "name": "Hari"},
                           headers=admin_headers)
        assert resp.status_code == 400
        assert [u["role"] for u in client.get("/staff/access", headers=admin_headers).json()] == ["ADMIN"]

    def test_admin_cannot_be_removed(self, client, admin_headers):
        assert client.delete("/staff/access/admin", headers=admin_headers).status_code == 403


def test_waiter_till_to_kitchen(client, waiter_headers):
    client.post("/cart/items", json={"item_id": "1"}, headers=waiter_headers)
    cart = client.post("/cart/items", json={"item_id": "1"}, headers=waiter_headers).json()
    assert cart["count"] == 2 and cart["total"] == 500

    cart = client.patch("/cart/items/1", json={"delta": -5}, headers=waiter_headers).json()
    assert cart["items"][0]["qty"] == 1
    assert client.patch("/cart/items/6", json={"delta": 1}, headers=waiter_headers).status_code == 404

    resp = client.post("/cart/checkout", json={"table": "5"}, headers=waiter_headers)
    assert resp.status_code == 201
    order = resp.json()
    assert order["method"] == "Dine-in" and order["table"] == "5"
    assert client.get("/cart", headers=waiter_headers).json()["count"] == 0

    tickets = client.get("/kitchen", headers=waiter_headers).json()
    assert [t["order"]["id"] for t in tickets] == [order["id"]]
    assert tickets[0]["label"] == "Table 5"

    advanced = client.post(f"/orders/{order['id']}/advance", headers=waiter_headers).json()
    assert advanced["status"] == "preparing"


def test_customer_online_order(client, customer_headers, admin_headers):
    client.post("/cart/items", json={"item_id": "1"}, headers=customer_headers)
    client.post("/cart/items", json={"item_id": "7"}, headers=customer_headers)
    cart = client.patch("/cart/items/7", json={"delta": -1}, headers=customer_headers).json()
    assert [line["id"] for line in cart["items"]] == ["1"]
    client.post("/cart/items", json={"item_id": "7"}, headers=customer_headers)

    details = {"name": "Maya", "phone": "9841001234", "address": "Thamel, Kathmandu"}
    resp = client.post("/cart/checkout", json={"method": "Dine-in", "table": "3", "customer": details},
                       headers=customer_headers)
    assert resp.status_code == 201
    order = resp.json()
    assert order["method"] == "Online"
    assert order["table"] is None
    assert order["total"] == pytest.approx(1017)

    board = client.get("/orders/online", headers=admin_headers).json()
    assert [o["id"] for o in board["incoming"]["orders"]] == [order["id"]]


def test_empty_cart_checkout(client, waiter_headers):
    assert client.post("/cart/checkout", json={"table": "1"}, headers=waiter_headers).status_code == 400


def test_order_status_endpoint(client, waiter_headers):
    client.post("/cart/items", json={"item_id": "2"}, headers=waiter_headers)
    order_id = client.post("/cart/checkout", json={"table": "2"}, headers=waiter_headers).json()["id"]

    resp = client.post(f"/orders/{order_id}/status", json={"status": "cancelled"}, headers=waiter_headers)
    assert resp.json()["status"] == "cancelled"
    bad = client.post(f"/orders/{order_id}/status", json={"status": "eaten"}, headers=waiter_headers)
    assert bad.status_code == 422
    assert client.get("/orders/nope", headers=waiter_headers).status_code == 404


def test_inventory_waste_and_filter(client, admin_headers):
    resp = client.post("/inventory/4/waste", headers=admin_headers).json()
    assert resp["item"]["quantity"] == 1
    assert resp["waste_cost"] == 29500

    body = client.get("/inventory", params={"filter": "Critical"}, headers=admin_headers).json()
    assert [i["id"] for i in body["items"]] == ["4"]
    assert body["summary"]["waste_cost"] == 29500


def test_bookings_allocate(client, waiter_headers):
    bookings = client.post("/bookings/allocate", headers=waiter_headers).json()
    assert [b["table"] for b in bookings] == ["T10", "T4", "T12", "T13", "T14"]
    assert all(b["status"] != "pending" for b in bookings)

    found = client.get("/bookings", params={"search": "allergy"}, headers=waiter_headers).json()
    assert [b["customer_name"] for b in found] == ["Sarah Smith"]


def test_new_booking(client, waiter_headers):
    resp = client.post("/bookings", json={"customer_name": "Nima", "time": "21:00", "guests": 2},
                       headers=waiter_headers)
    assert resp.status_code == 201
    assert resp.json()["status"] == "pending"
    bad = client.post("/bookings", json={"customer_name": "Nima", "time": "21:00", "guests": 0},
                      headers=waiter_headers)
    assert bad.status_code == 400


def test_staff_views(client, admin_headers):
    staff = client.get("/staff", headers=admin_headers).json()
    assert staff["summary"] == {"on_shift": 2, "headcount": 5, "total_payroll": 173000, "total_hours": 177}

    rows = client.get("/staff/schedule", headers=admin_headers).json()
    assert (rows[0]["employee_name"], rows[0]["employee_role"]) == ("Ram Bahadur", "Chef")

    payroll = client.get("/staff/payroll", headers=admin_headers).json()
    assert payroll[1]["weekly_pay"] == 60000


def test_dashboard_overview(client, admin_headers):
    body = client.get("/dashboard", headers=admin_headers).json()
    assert body["revenue"] == 59000
    assert body["visitors"] == 289
    assert body["bookings_today"] == 5


def test_campaign_draft(client, admin_headers, model):
    resp = client.post("/customers/1/campaign", headers=admin_headers)
    assert resp.json() == {"text": "Restock red wine before Friday."}
    assert "Likes: Window seat, Red Wine" in model.calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert client.post("/customers/99/campaign", headers=admin_headers).status_code == 404


def test_menu_admin_and_backup(client, admin_headers):
    resp = client.post("/menu", json={"name": "Dal Bhat", "price": 300}, headers=admin_headers)
    assert resp.status_code == 201
    names = [m["name"] for m in client.get("/menu", params={"category": "Main"}, headers=admin_headers).json()]
    assert names[-1] == "Dal Bhat"

    backup = client.get("/settings/backup", headers=admin_headers).json()
    assert backup["credentials"][0]["password"] == "password"
    assert backup["menu"][-1]["name"] == "Dal Bhat"


def test_health(client):
    assert client.get("/healthz").json() == {"ok": True}
    assert client.get("/readyz").status_code == 200
