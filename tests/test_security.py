"""
Unit tests for password hashing and the token service.
"""

from datetime import timedelta

import jwt
import pytest

from finance_tracker.core.config import Settings
from finance_tracker.core.errors import ServerConfigurationError
from finance_tracker.core.security import (
    TokenError,
    TokenIdentity,
    TokenService,
    get_password_hash,
    verify_password,
)

KEY = "unit-test-signing-key-with-enough-bytes"


class TestPasswords:

    def test_hash_is_salted_and_verifiable(self):
        first = get_password_hash("secret123")
        second = get_password_hash("secret123")
        assert first != second
        assert first != "secret123"
        assert verify_password("secret123", first)
        assert verify_password("secret123", second)

    def test_wrong_password(self):
        assert not verify_password("secret124", get_password_hash("secret123"))

    def test_cost_factor(self):
        assert get_password_hash("secret123").startswith("$2b$10$")


class TestTokenService:

    def test_issue_then_verify(self):
        service = TokenService(KEY)
        identity = service.verify(service.issue(7, "alice@example.com"))
        assert identity == TokenIdentity(user_id=7, email="alice@example.com")

    def test_claims(self):
        service = TokenService(KEY, lifetime=timedelta(days=7))
        claims = jwt.decode(service.issue(7, "alice@example.com"), KEY, algorithms=["HS256"])
        assert claims["sub"] == "7"
        assert claims["userId"] == 7
        assert claims["email"] == "alice@example.com"
        assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

    def test_expired_token(self):
        service = TokenService(KEY, lifetime=timedelta(seconds=-10))
        assert service.verify(service.issue(7, "alice@example.com")) is TokenError.INVALID

    def test_tampered_token(self):
        service = TokenService(KEY)
        token = service.issue(7, "alice@example.com")
        assert TokenService("another-key-of-sufficient-length!!").verify(token) is TokenError.INVALID

    def test_token_without_expiry_is_rejected(self):
        token = jwt.encode({"userId": 7, "iat": 0}, KEY, algorithm="HS256")
        assert TokenService(KEY).verify(token) is TokenError.INVALID

    @pytest.mark.parametrize("secret", [None, "", "   "])
    def test_unconfigured_service(self, secret):
        service = TokenService(secret)
        assert not service.is_configured
        with pytest.raises(ServerConfigurationError):
            service.issue(7, "alice@example.com")
        token = TokenService(KEY).issue(7, "alice@example.com")
        assert service.verify(token) is TokenError.INVALID

    def test_from_settings(self):
        settings = Settings(SECRET_KEY=KEY, ACCESS_TOKEN_EXPIRE_MINUTES=60)
        service = TokenService.from_settings(settings)
        assert service.is_configured
        assert service.lifetime == timedelta(hours=1)
