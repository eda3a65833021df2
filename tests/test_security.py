"""
Tests for password hashing and token creation.
"""

from jose import jwt

from app.core.config import get_settings
from app.core.security import (
    claims_from_token,
    create_token,
    decode_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_verifies(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert hashed.startswith("$2")
        assert verify_password("password1", hashed)
        assert not verify_password("password2", hashed)

    def test_uses_configured_work_factor(self):
        hashed = get_password_hash("password1")

        assert hashed.split("$")[2] == f"{get_settings().BCRYPT_WORK_FACTOR:02d}"


class TestTokens:

    def test_round_trip_claims(self):
        token = create_token({"username": "u1", "isAdmin": True, "email": "ignored@x.com"})

        claims = decode_token(token)

        assert claims["username"] == "u1"
        assert claims["isAdmin"] is True
        assert "email" not in claims
        assert claims["exp"] > claims["iat"]

    def test_is_admin_defaults_to_false(self):
        assert decode_token(create_token({"username": "u2"}))["isAdmin"] is False

    def test_claims_from_token_handles_bad_input(self):
        forged = jwt.encode({"username": "u1", "isAdmin": True}, "not-the-secret", algorithm="HS256")

        assert claims_from_token(None) is None
        assert claims_from_token("") is None
        assert claims_from_token(forged) is None
