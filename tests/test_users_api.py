"""
Тесты API пользователей и входа в систему.
"""

from app.core.auth import AuthService
from app.db.models import ROLE_ADMIN, ROLE_CLIENT

BASE = "/api/v1/users"


def _registration(**overrides):
    payload = {
        "first_name": "Alex",
        "last_name": "Green",
        "email": "Alex.Green@Gmail.com",
        "password": "Str0ng!Pass",
    }
    payload.update(overrides)
    return payload


# ==================== РЕГИСТРАЦИЯ ====================


def test_register_user_normalizes_email_and_assigns_client_role(client):
    response = client.post(BASE, json=_registration())

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "alex.green@gmail.com"
    assert [role["authority"] for role in body["roles"]] == [ROLE_CLIENT]
    assert "password" not in body and "hashed_password" not in body
    assert response.headers["Location"].endswith(f"{BASE}/{body['id']}")


def test_register_duplicate_email(client, make_user):
    make_user("alex.green@gmail.com")

    response = client.post(BASE, json=_registration(email="ALEX.GREEN@gmail.com"))

    assert response.status_code == 409
    assert response.json()[0]["error"] == "DUPLICATE_ENTRY"


def test_register_rejects_weak_password(client):
    response = client.post(BASE, json=_registration(password="password"))

    assert response.status_code == 400
    assert response.json()[0]["field"] == "password"


def test_register_rejects_blank_names(client):
    response = client.post(BASE, json=_registration(first_name=" ", last_name=""))

    assert response.status_code == 400
    assert sorted(entry["field"] for entry in response.json()) == ["first_name", "last_name"]


# ==================== ЧТЕНИЕ ====================


def test_me_returns_authenticated_profile(client, client_user, client_headers):
    response = client.get(f"{BASE}/me", headers=client_headers)

    assert response.status_code == 200
    assert response.json()["email"] == client_user.email


def test_me_requires_token(client):
    assert client.get(f"{BASE}/me").status_code == 401


def test_me_rejects_invalid_token(client):
    response = client.get(f"{BASE}/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_list_users_admin_only(client, admin_headers, client_headers, make_user):
    make_user("bob@gmail.com")

    assert client.get(BASE, headers=client_headers).status_code == 403

    response = client.get(BASE, headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "3"
    assert len(response.json()) == 3


def test_get_user_by_id(client, admin_headers, client_user):
    response = client.get(f"{BASE}/{client_user.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["email"] == "maria@gmail.com"


def test_get_missing_user(client, admin_headers):
    response = client.get(f"{BASE}/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()[0]["details"] == "User not found: 999"


# ==================== ОБНОВЛЕНИЕ ====================


def test_owner_updates_profile(client, client_user, client_headers):
    response = client.put(
        f"{BASE}/{client_user.id}",
        json={"first_name": "Maria", "email": "Maria.New@Gmail.com"},
        headers=client_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Maria"
    assert body["last_name"] == "User"
    assert body["email"] == "maria.new@gmail.com"


def test_update_other_user_is_forbidden(client, client_headers, make_user):
    other = make_user("bob@gmail.com")

    response = client.put(
        f"{BASE}/{other.id}", json={"email": "bob.new@gmail.com"}, headers=client_headers
    )

    assert response.status_code == 403
    assert response.json()[0]["error"] == "ACCESS_DENIED"


def test_update_with_same_email_is_rejected(client, client_user, client_headers):
    response = client.put(
        f"{BASE}/{client_user.id}", json={"email": "MARIA@gmail.com"}, headers=client_headers
    )

    assert response.status_code == 409


def test_update_with_email_of_other_user_is_rejected(client, client_user, client_headers, make_user):
    make_user("bob@gmail.com")

    response = client.put(
        f"{BASE}/{client_user.id}", json={"email": "Bob@gmail.com"}, headers=client_headers
    )

    assert response.status_code == 409


def test_update_with_blank_name_is_rejected(client, client_user, client_headers):
    response = client.put(
        f"{BASE}/{client_user.id}",
        json={"first_name": "   ", "email": "maria.new@gmail.com"},
        headers=client_headers,
    )

    assert response.status_code == 400
    assert response.json()[0]["field"] == "first_name"


def test_update_missing_user(client, client_headers):
    response = client.put(
        f"{BASE}/999", json={"email": "x.new@gmail.com"}, headers=client_headers
    )

    assert response.status_code == 404


# ==================== ВХОД ====================


def test_login_returns_token_with_identity_claims(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": " ADMIN@dscatalog.com", "password": "Str0ng!Pass"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    payload = AuthService.verify_token(body["access_token"])
    assert payload["sub"] == str(admin_user.id)
    assert payload["username"] == "admin@dscatalog.com"
    assert ROLE_ADMIN in payload["authorities"]

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    assert client.get(f"{BASE}/me", headers=headers).json()["id"] == admin_user.id


def test_login_with_wrong_password(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "admin@dscatalog.com", "password": "Wr0ng!Pass"},
    )

    assert response.status_code == 401
    assert response.json()[0]["error"] == "UNAUTHORIZED"
