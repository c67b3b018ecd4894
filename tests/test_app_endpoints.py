from sqlalchemy.exc import OperationalError

from myshop.services.accounts import register_seller


def _login_seller(client, payload):
    return client.post(
        "/api/auth/login", json={"email": payload["email"], "password": payload["password"]}
    )


def test_seller_register_login_me_logout(client, seller_payload):
    r = client.post("/api/auth/register", json=seller_payload)
    assert r.status_code == 200
    seller_id = r.json()["sellerId"]
    assert "set-cookie" not in r.headers

    r = _login_seller(client, seller_payload)
    assert r.status_code == 200
    assert r.json()["seller"]["slug"] == "corner-shop"

    cookie = r.headers["set-cookie"]
    assert cookie.startswith("myshop_session=")
    attrs = {a.strip().lower() for a in cookie.split(";")[1:]}
    assert "httponly" in attrs
    assert "samesite=lax" in attrs
    assert "path=/" in attrs
    assert "max-age=2592000" in attrs
    assert "secure" not in attrs

    me = client.get("/api/auth/me").json()["session"]
    assert me == {
        "seller_id": seller_id,
        "email": "owner@corner.test",
        "seller_slug": "corner-shop",
        "store_name": "Corner Shop",
        "role": None,
    }

    r = client.post("/api/auth/logout")
    assert r.status_code == 200
    assert client.get("/api/auth/me").json() == {"session": None}


def test_seller_register_validation_and_conflict(client, seller_payload):
    r = client.post("/api/auth/register", json={**seller_payload, "password": "short"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Password must be at least 8 characters"

    assert client.post("/api/auth/register", json=seller_payload).status_code == 200
    r = client.post("/api/auth/register", json=seller_payload)
    assert r.status_code == 409


def test_seller_login_failures_look_the_same(client, seller_payload):
    client.post("/api/auth/register", json=seller_payload)
    assert client.post("/api/auth/login", json={"email": "", "password": ""}).status_code == 400

    wrong_pw = client.post(
        "/api/auth/login", json={"email": seller_payload["email"], "password": "nope-nope"}
    )
    unknown = client.post(
        "/api/auth/login", json={"email": "ghost@x.test", "password": "nope-nope"}
    )
    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json() == unknown.json() == {"detail": "Invalid email or password"}


def test_customer_register_sets_cookie_and_profile(client, customer_payload):
    r = client.post("/api/auth/customer/register", json={**customer_payload, "phone": " 555 "})
    assert r.status_code == 201
    assert r.json()["customer"]["email"] == "alex@buyer.test"
    assert r.headers["set-cookie"].startswith("myshop_customer=")

    me = client.get("/api/auth/customer/me").json()["session"]
    assert me["email"] == "alex@buyer.test"
    assert me["name"] == "Alex Buyer"

    profile = client.get("/api/auth/customer/profile")
    assert profile.status_code == 200
    assert profile.json()["phone"] == "555"

    client.post("/api/auth/customer/logout")
    assert client.get("/api/auth/customer/me").json() == {"session": None}
    assert client.get("/api/auth/customer/profile").status_code == 401


def test_customer_login(client, customer_payload):
    client.post("/api/auth/customer/register", json=customer_payload)
    client.cookies.clear()

    r = client.post(
        "/api/auth/customer/login", json={"email": "ALEX@buyer.test", "password": "wrong!"}
    )
    assert r.status_code == 401

    r = client.post(
        "/api/auth/customer/login",
        json={"email": "alex@buyer.test", "password": customer_payload["password"]},
    )
    assert r.status_code == 200
    assert client.get("/api/auth/customer/me").json()["session"]["name"] == "Alex Buyer"


def test_session_cookies_are_not_interchangeable(client, seller_payload, customer_payload):
    client.post("/api/auth/register", json=seller_payload)
    seller_token = _login_seller(client, seller_payload).cookies["myshop_session"]
    customer_token = client.post(
        "/api/auth/customer/register", json=customer_payload
    ).cookies["myshop_customer"]
    client.cookies.clear()

    r = client.get("/api/auth/customer/me", headers={"Cookie": f"myshop_customer={seller_token}"})
    assert r.json() == {"session": None}
    r = client.get("/api/auth/me", headers={"Cookie": f"myshop_session={customer_token}"})
    assert r.json() == {"session": None}

    r = client.get("/api/auth/me", headers={"Cookie": f"myshop_session={seller_token}"})
    assert r.json()["session"]["seller_slug"] == "corner-shop"


def test_tampered_cookie_is_anonymous(client, seller_payload):
    client.post("/api/auth/register", json=seller_payload)
    token = _login_seller(client, seller_payload).cookies["myshop_session"]
    client.cookies.clear()

    head, sig = token.split(".")
    forged = head[:-2] + ("A" if head[-2] != "A" else "B") + head[-1] + "." + sig
    r = client.get("/api/onboarding/progress", headers={"Cookie": f"myshop_session={forged}"})
    assert r.status_code == 401


def test_onboarding_progress_requires_seller(client, seller_payload):
    assert client.get("/api/onboarding/progress").status_code == 401
    assert client.post("/api/onboarding/progress", json={"step": 1}).status_code == 401

    client.post("/api/auth/register", json=seller_payload)
    _login_seller(client, seller_payload)

    assert client.get("/api/onboarding/progress").json() == {"success": True, "data": None}
    r = client.post("/api/onboarding/progress", json={"step": 2, "storeType": "fashion"})
    assert r.status_code == 200
    data = client.get("/api/onboarding/progress").json()["data"]
    assert data["step"] == 2
    assert data["storeType"] == "fashion"
    assert "updatedAt" in data

    assert client.delete("/api/onboarding/progress").json()["success"] is True
    assert client.get("/api/onboarding/progress").json()["data"] is None


def test_admin_listing_requires_admin_role(client, db, seller_payload):
    assert client.get("/api/admin/sellers").status_code == 401

    client.post("/api/auth/register", json=seller_payload)
    _login_seller(client, seller_payload)
    assert client.get("/api/admin/sellers").status_code == 403

    register_seller(
        db,
        store_name="HQ",
        slug="hq",
        owner_name="Root",
        email="root@hq.test",
        password="admin-pass-1",
        role="admin",
    )
    client.post("/api/auth/logout")
    client.post("/api/auth/login", json={"email": "root@hq.test", "password": "admin-pass-1"})
    r = client.get("/api/admin/sellers")
    assert r.status_code == 200
    assert [s["slug"] for s in r.json()] == ["corner-shop", "hq"]


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok", "database": "ok"}


def test_health_reports_database_outage(client, db, monkeypatch):
    def _down():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "ping", _down)
    r = client.get("/api/health")
    assert r.status_code == 503


def test_login_maps_exhausted_retries_to_503(client, seller_payload, monkeypatch):
    import myshop.routers.seller_auth as seller_auth

    def _boom(*_a, **_k):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(seller_auth, "authenticate_seller", _boom)
    r = _login_seller(client, seller_payload)
    assert r.status_code == 503
    assert r.json() == {"detail": "Database unavailable"}


def test_production_cookies_are_secure(settings, db, seller_payload):
    from fastapi.testclient import TestClient

    from myshop.app import create_app

    app = create_app(settings.model_copy(update={"environment": "production"}), db=db)
    with TestClient(app) as c:
        c.post("/api/auth/register", json=seller_payload)
        r = _login_seller(c, seller_payload)
    attrs = {a.strip().lower() for a in r.headers["set-cookie"].split(";")[1:]}
    assert "secure" in attrs


def test_admin_access_follows_database_role(client, db, seller_payload):
    from sqlalchemy import delete, update

    from myshop.models import Seller

    admin = register_seller(db, **{**seller_payload, "role": "admin"})
    _login_seller(client, seller_payload)
    assert client.get("/api/admin/sellers").status_code == 200

    db.run(lambda s: s.execute(update(Seller).where(Seller.id == admin.id).values(role=None)))
    # cookie still says admin
    assert client.get("/api/auth/me").json()["session"]["role"] == "admin"
    assert client.get("/api/admin/sellers").status_code == 403

    db.run(lambda s: s.execute(update(Seller).where(Seller.id == admin.id).values(role="admin")))
    assert client.get("/api/admin/sellers").status_code == 200

    db.run(lambda s: s.execute(delete(Seller).where(Seller.id == admin.id)))
    assert client.get("/api/admin/sellers").status_code == 403
