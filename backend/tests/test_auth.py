from conftest import register


class TestAuth:
    def test_register_returns_token(self, client):
        resp = client.post(
            "/api/v1/auth/register",
            json={"email": "carol@example.com", "password": "secret123", "username": "carol"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]

    def test_register_duplicate_email(self, client):
        register(client, "carol@example.com")
        resp = client.post("/api/v1/auth/register", json={"email": "carol@example.com", "password": "secret123"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Email already registered"

    def test_register_short_password(self, client):
        resp = client.post("/api/v1/auth/register", json={"email": "carol@example.com", "password": "123"})
        assert resp.status_code == 422

    def test_login(self, client):
        register(client, "carol@example.com", password="secret123")
        resp = client.post("/api/v1/auth/login", json={"email": "carol@example.com", "password": "secret123"})
        assert resp.status_code == 200
        assert resp.json()["access_token"]

    def test_login_bad_password(self, client):
        register(client, "carol@example.com", password="secret123")
        resp = client.post("/api/v1/auth/login", json={"email": "carol@example.com", "password": "wrong-one"})
        assert resp.status_code == 401

    def test_me(self, client, auth_headers):
        resp = client.get("/api/v1/auth/me", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["email"] == "alice@example.com"

    def test_invalid_token(self, client):
        resp = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 401

    def test_missing_token(self, client):
        resp = client.get("/api/v1/transactions")
        assert resp.status_code in (401, 403)


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_root(self, client):
        assert client.get("/").status_code == 200
