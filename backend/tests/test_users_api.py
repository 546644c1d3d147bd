from app.models.user import UserRole
from helpers import PASSWORD, auth_headers, shipment_payload


def _login(client, email, password=PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_login_returns_token_and_user(client, operator):
    resp = _login(client, operator.email.upper())

    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["email"] == operator.email
    assert body["user"]["fullName"] == "Oscar Operator"
    assert "passwordHash" not in body["user"]

    profile = client.get(
        "/api/auth/profile", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert profile.status_code == 200
    assert profile.json()["id"] == operator.id


def test_login_with_bad_credentials(client, operator):
    assert _login(client, operator.email, "wrong-password").status_code == 401
    assert _login(client, "nobody@couriertrack.com").status_code == 401


def test_inactive_account_cannot_log_in(client, admin, operator):
    resp = client.put(
        f"/api/users/{operator.id}", json={"isActive": False}, headers=auth_headers(admin)
    )
    assert resp.status_code == 200
    assert resp.json()["isActive"] is False

    resp = _login(client, operator.email)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Account is inactive"

    # Tokens issued before deactivation stop working too.
    assert client.get("/api/auth/profile", headers=auth_headers(operator)).status_code == 403


def test_profile_requires_token(client):
    assert client.get("/api/auth/profile").status_code == 401


def test_user_admin_is_admin_only(client, operator, viewer):
    for user in (operator, viewer):
        headers = auth_headers(user)
        assert client.get("/api/users", headers=headers).status_code == 403
        resp = client.post(
            "/api/users",
            json={"email": "new@couriertrack.com", "password": PASSWORD, "fullName": "New"},
            headers=headers,
        )
        assert resp.status_code == 403


def test_admin_creates_and_lists_users(client, admin):
    headers = auth_headers(admin)

    resp = client.post(
        "/api/users",
        json={
            "email": "New.Clerk@CourierTrack.com",
            "password": PASSWORD,
            "fullName": "New Clerk",
            "role": "viewer",
        },
        headers=headers,
    )

    assert resp.status_code == 201
    created = resp.json()
    assert created["email"] == "new.clerk@couriertrack.com"
    assert created["role"] == "viewer"
    assert created["isActive"] is True

    emails = [u["email"] for u in client.get("/api/users", headers=headers).json()]
    assert set(emails) == {admin.email, "new.clerk@couriertrack.com"}

    one = client.get(f"/api/users/{created['id']}", headers=headers)
    assert one.status_code == 200
    assert one.json()["fullName"] == "New Clerk"


def test_create_user_defaults_to_operator(client, admin):
    resp = client.post(
        "/api/users",
        json={"email": "op@couriertrack.com", "password": PASSWORD, "fullName": "Op"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 201
    assert resp.json()["role"] == UserRole.OPERATOR.value


def test_create_user_duplicate_email(client, admin, operator):
    resp = client.post(
        "/api/users",
        json={"email": operator.email, "password": PASSWORD, "fullName": "Twin"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already exists"


def test_create_user_validation(client, admin):
    headers = auth_headers(admin)
    short = {"email": "x@couriertrack.com", "password": "123", "fullName": "X"}
    assert client.post("/api/users", json=short, headers=headers).status_code == 422
    bad_role = {"email": "x@couriertrack.com", "password": PASSWORD, "fullName": "X", "role": "root"}
    assert client.post("/api/users", json=bad_role, headers=headers).status_code == 422


def test_update_user_email_conflict(client, admin, operator, viewer):
    resp = client.put(
        f"/api/users/{viewer.id}", json={"email": operator.email}, headers=auth_headers(admin)
    )
    assert resp.status_code == 400


def test_update_unknown_user(client, admin):
    resp = client.put("/api/users/999", json={"fullName": "Ghost"}, headers=auth_headers(admin))
    assert resp.status_code == 404


def test_admin_cannot_delete_self(client, admin):
    resp = client.delete(f"/api/users/{admin.id}", headers=auth_headers(admin))
    assert resp.status_code == 400


def test_delete_user_keeps_their_shipments(client, admin, operator):
    created = client.post(
        "/api/shipments", json=shipment_payload(), headers=auth_headers(operator)
    ).json()

    resp = client.delete(f"/api/users/{operator.id}", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert client.delete(f"/api/users/{operator.id}", headers=auth_headers(admin)).status_code == 404

    headers = auth_headers(admin)
    shipment = client.get(f"/api/shipments/{created['id']}", headers=headers).json()
    assert shipment["createdBy"] is None
    history = client.get(f"/api/shipments/{created['id']}/status-history", headers=headers).json()
    assert history[0]["createdByName"] is None


def test_password_change_then_login(client, admin, operator):
    resp = client.patch(
        f"/api/users/{operator.id}/password",
        json={"password": "n3w-password"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 200

    assert _login(client, operator.email).status_code == 401
    assert _login(client, operator.email, "n3w-password").status_code == 200


def test_password_change_unknown_user(client, admin):
    resp = client.patch(
        "/api/users/999/password", json={"password": "n3w-password"}, headers=auth_headers(admin)
    )
    assert resp.status_code == 404
