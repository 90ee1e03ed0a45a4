import hashlib
from datetime import timedelta

from src.api.utils.jwt import create_dev_session_token, verify_dev_session_token
from src.app.services.tokens import generate_token, hash_token
from src.app.services.usernames import username_base


def test_tokens_are_unique_and_url_safe():
    tokens = {generate_token() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert len(token) >= 43
        assert all(c.isalnum() or c in "-_" for c in token)


def test_hash_is_sha256_hex():
    assert hash_token("abc") == hashlib.sha256(b"abc").hexdigest()
    assert len(hash_token(generate_token())) == 64


def test_dev_session_token_round_trip():
    token = create_dev_session_token({"user_id": "u-1"}, "secret", timedelta(minutes=5))

    payload = verify_dev_session_token(token, "secret")

    assert payload["user_id"] == "u-1"
    assert payload["is_dev"] is True
    assert isinstance(payload["exp"], int)
    assert verify_dev_session_token(token, "wrong") is None


def test_username_base():
    assert username_base("Jane.Doe+promo@example.com") == "janedoepromo"
    assert username_base("bob_smith-2@example.com") == "bob_smith-2"
    assert username_base("...@example.com") == "user"
