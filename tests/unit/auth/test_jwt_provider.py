"""Unit tests for JWTAuthProvider."""

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from tests.helpers import make_key

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


# ---------------------------------------------------------------------------
# Tests: create / validate
# ---------------------------------------------------------------------------


class TestRoundTrip:
    async def test_created_token_proves_key(self, provider: JWTAuthProvider):
        key = make_key("alice")

        result = await provider.validate_token(provider.create_token(key))

        assert result is not None
        assert result.key == key

    async def test_subject_is_hex_key(self, provider: JWTAuthProvider):
        key = make_key("alice")

        claims = jose_jwt.get_unverified_claims(provider.create_token(key))

        assert claims["sub"] == key.hex()


class TestValidateTokenRejects:
    """validate_token returns None rather than raising."""

    async def test_wrong_secret(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": make_key("a").hex()}, secret="other")

        assert await provider.validate_token(token) is None

    async def test_garbage(self, provider: JWTAuthProvider):
        assert await provider.validate_token("not.a.jwt") is None

    async def test_expired(self):
        expired = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        token = expired.create_token(make_key("alice"))

        fresh = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)
        assert await fresh.validate_token(token) is None

    async def test_missing_sub(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_empty_sub(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    @pytest.mark.parametrize("sub", ["alice", "ab" * 31, "zz" * 32])
    async def test_malformed_sub(self, provider: JWTAuthProvider, sub: str):
        token = _make_hs256_token({"sub": sub, "exp": 9999999999})

        assert await provider.validate_token(token) is None


def test_stores_configuration():
    provider = JWTAuthProvider(secret_key="my-secret", algorithm="HS256", expire_minutes=15)

    assert provider._algorithm == "HS256"
    assert provider._secret_key == "my-secret"
    assert provider._expire_minutes == 15
