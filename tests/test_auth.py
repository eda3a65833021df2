"""
Tests for /auth endpoints (login, self-registration) and how bad bearer tokens are handled.
"""

from datetime import timedelta

from app.core.security import create_token, decode_token


class TestToken:
    """Tests for POST /auth/token"""

    def test_token_for_valid_credentials(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        claims = decode_token(response.json()["token"])
        assert claims["username"] == "u1"
        assert claims["isAdmin"] is True

    def test_wrong_password(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {
            "error": {"message": "Invalid username/password", "status": 401}
        }

    def test_unknown_user(self, client, seed):
        response = client.post("/auth/token", json={"username": "ghost", "password": "password1"})

        assert response.status_code == 401

    def test_missing_password(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1"})

        assert response.status_code == 400
        assert response.json()["error"]["status"] == 400
        assert isinstance(response.json()["error"]["message"], list)


class TestRegister:
    """Tests for POST /auth/register"""

    def test_register_returns_token(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "new",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "new@email.com",
        })

        assert response.status_code == 201
        claims = decode_token(response.json()["token"])
        assert claims["username"] == "new"
        assert claims["isAdmin"] is False

    def test_register_cannot_make_admin(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "new",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "new@email.com",
            "isAdmin": True,
        })

        assert response.status_code == 400

    def test_register_duplicate(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "u1",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "dup@email.com",
        })

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate username: u1"

    def test_register_bad_email(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "new",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "not-an-email",
        })

        assert response.status_code == 400

    def test_registered_user_can_log_in(self, client, seed):
        client.post("/auth/register", json={
            "username": "new",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "new@email.com",
        })

        response = client.post("/auth/token", json={"username": "new", "password": "password"})

        assert response.status_code == 200


class TestBadTokens:
    """A bad token is treated as no token: public routes still work, gated ones 401"""

    GARBAGE = {"Authorization": "Bearer not.a.jwt"}

    @staticmethod
    def expired_headers():
        token = create_token({"username": "u1", "isAdmin": True}, expires_delta=timedelta(seconds=-10))
        return {"Authorization": f"Bearer {token}"}

    def test_garbage_token_on_public_route(self, client, seed):
        response = client.get("/companies", headers=self.GARBAGE)

        assert response.status_code == 200
        assert len(response.json()["companies"]) == 3

    def test_expired_token_on_public_route(self, client, seed):
        response = client.get("/companies", headers=self.expired_headers())

        assert response.status_code == 200

    def test_garbage_token_on_admin_route(self, client, seed):
        response = client.post("/companies", json={
            "handle": "new",
            "name": "New",
            "description": "DescNew",
        }, headers=self.GARBAGE)

        assert response.status_code == 401
        assert response.json()["error"]["status"] == 401

    def test_expired_admin_token_on_admin_route(self, client, seed):
        response = client.post("/companies", json={
            "handle": "new",
            "name": "New",
            "description": "DescNew",
        }, headers=self.expired_headers())

        assert response.status_code == 401
