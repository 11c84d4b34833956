from datetime import datetime, timedelta, timezone

import jwt
import pytest
from uuid_utils.compat import uuid7

from devfolio.config import get_settings
from devfolio.core.security import (
    InvalidTokenSignature,
    MalformedToken,
    TokenError,
    TokenExpired,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

settings = get_settings()


def _sign(payload: dict, key: str | None = None) -> str:
    return jwt.encode(
        payload,
        key or settings.secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def _future() -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=1)


class TestAccessToken:
    def test_issued_token_resolves_to_same_user(self):
        user_id = uuid7()
        assert decode_access_token(create_access_token(user_id)) == user_id

    def test_payload_carries_sub_iat_exp(self):
        user_id = uuid7()
        token = create_access_token(user_id, expires_delta=timedelta(minutes=5))
        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["sub"] == str(user_id)
        assert payload["exp"] - payload["iat"] == 300

    def test_expired_token(self):
        token = create_access_token(uuid7(), expires_delta=timedelta(seconds=-10))
        with pytest.raises(TokenExpired):
            decode_access_token(token)

    def test_token_signed_with_other_key(self):
        token = _sign(
            {"sub": str(uuid7()), "exp": _future()},
            key="another-secret-key-0123456789abcdefghijkl",
        )
        with pytest.raises(InvalidTokenSignature):
            decode_access_token(token)

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_garbage_token(self, token):
        with pytest.raises(MalformedToken):
            decode_access_token(token)

    def test_subject_is_not_a_uuid(self):
        token = _sign({"sub": "42", "exp": _future()})
        with pytest.raises(MalformedToken):
            decode_access_token(token)

    def test_missing_expiry(self):
        token = _sign({"sub": str(uuid7())})
        with pytest.raises(MalformedToken):
            decode_access_token(token)

    def test_all_failures_share_a_base(self):
        assert issubclass(TokenExpired, TokenError)
        assert issubclass(InvalidTokenSignature, TokenError)
        assert issubclass(MalformedToken, TokenError)


class TestPasswordHash:
    def test_hash_is_salted_and_verifiable(self):
        first = hash_password("secret123")
        second = hash_password("secret123")
        assert first != second
        assert "secret123" not in first
        assert verify_password("secret123", first)
        assert verify_password("secret123", second)

    def test_wrong_password(self):
        assert not verify_password("wrong", hash_password("secret123"))
