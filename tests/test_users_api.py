import asyncio

from auth.jwt_handler import verify_token


def test_login_returns_token(client, user_store, settings):
    asyncio.run(user_store.create("asha", "s3cret", "admin"))

    response = client.post("/api/login", json={"username": "asha", "password": "s3cret"})

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "admin"
    assert body["username"] == "asha"
    payload = verify_token(body["token"], settings)
    assert payload["username"] == "asha"
    assert payload["role"] == "admin"


def test_login_token_opens_protected_routes(client, user_store):
    asyncio.run(user_store.create("mira", "pass1234", "manager"))
    token = client.post("/api/login", json={"username": "mira", "password": "pass1234"}).json()["token"]

    response = client.get("/api/bookings", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == []


def test_login_requires_both_fields(client):
    response = client.post("/api/login", json={"username": "asha"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Username and password required"}


def test_login_rejects_bad_credentials(client, user_store):
    asyncio.run(user_store.create("asha", "s3cret", "admin"))

    for credentials in ({"username": "asha", "password": "nope"}, {"username": "ghost", "password": "s3cret"}):
        response = client.post("/api/login", json=credentials)
        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}
