import pytest
from datetime import timedelta
from jose import jwt

from app.config import settings
from app.core.auth import create_access_token, owner_id_from_token, verify_token

class TestTokens:

    def test_round_trip_owner_id(self):
        token = create_access_token({"sub": "user_2abcXYZ"})

        assert owner_id_from_token(token) == "user_2abcXYZ"

    def test_missing_token(self):
        assert owner_id_from_token(None) is None
        assert owner_id_from_token("") is None

    def test_garbage_token(self):
        assert owner_id_from_token("definitely.not.ajwt") is None

    def test_expired_token(self):
        token = create_access_token({"sub": "user_1"}, expires_delta=timedelta(seconds=-5))

        assert verify_token(token) is None

    def test_wrong_token_type(self):
        token = jwt.encode(
            {"sub": "user_1", "type": "refresh"},
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        assert owner_id_from_token(token) is None

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "user_1", "type": "access"},
            "another-secret-key-that-is-long-enough",
            algorithm=settings.JWT_ALGORITHM,
        )

        assert owner_id_from_token(token) is None

    @pytest.mark.parametrize("subject", [None, "", 12345])
    def test_unusable_subject(self, subject):
        claims: dict[str, object] = {"type": "access"}
        if subject is not None:
            claims["sub"] = subject
        token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

        assert owner_id_from_token(token) is None
