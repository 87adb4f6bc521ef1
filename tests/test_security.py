from jose import jwt

from recruitment.config import settings
from recruitment.core.security import (
    create_access_token,
    decode_access_token,
    generate_id,
    hash_password,
    verify_password,
)


def test_password_hash_and_verify_roundtrip():
    plain = "StrongPass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed) is True
    assert verify_password("wrong", hashed) is False


def test_long_passwords_are_not_truncated():
    base = "x" * 80
    hashed = hash_password(base + "a")
    assert verify_password(base + "a", hashed) is True
    assert verify_password(base + "b", hashed) is False


def test_verify_against_malformed_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_access_token_carries_subject_and_role():
    token = create_access_token("user-123", role="HR")
    assert decode_access_token(token) == "user-123"
    claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    assert claims["role"] == "HR"


def test_decode_invalid_token_and_generators():
    assert decode_access_token("not-a-jwt") is None
    assert len(generate_id()) > 10
    assert generate_id() != generate_id()
