"""Password Hasher — bcrypt round-trip and tolerant verification.

Tests cover:
    - hash produces a salted "$2" string that verifies
    - wrong plaintext fails
    - empty, None, plaintext-looking and truncated hashes return False (no raise)
"""

import pytest

from stockroom.infrastructure.password_hasher import PasswordHasher, is_hash_format


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_then_verify_round_trip(hasher):
    digest = hasher.hash("123")
    assert hasher.verify("123", digest) is True


def test_hash_is_salted(hasher):
    assert hasher.hash("123") != hasher.hash("123")


def test_hash_has_bcrypt_prefix(hasher):
    digest = hasher.hash("secret")
    assert digest.startswith("$2")
    assert is_hash_format(digest)


def test_wrong_password_fails(hasher):
    digest = hasher.hash("123")
    assert hasher.verify("1234", digest) is False
    assert hasher.verify("", digest) is False


def test_unicode_password_round_trip(hasher):
    digest = hasher.hash("senha-ção-🔐")
    assert hasher.verify("senha-ção-🔐", digest) is True
    assert hasher.verify("senha-cao-🔐", digest) is False


@pytest.mark.parametrize("stored", [None, "", "   ", "123", "plaintext-password"])
def test_non_hash_stored_value_returns_false(hasher, stored):
    assert hasher.verify("123", stored) is False


def test_malformed_bcrypt_hash_returns_false(hasher):
    assert hasher.verify("123", "$2b$04$tooshort") is False


def test_dummy_hash_is_stable_and_valid(hasher):
    assert is_hash_format(hasher.dummy_hash)
    assert hasher.dummy_hash is hasher.dummy_hash
    assert hasher.verify("anything", hasher.dummy_hash) is False


@pytest.mark.parametrize("value,expected", [
    ("$2b$10$abc", True), ("$2a$10$abc", True),
    ("", False), (None, False), ("md5$abc", False),
])
def test_is_hash_format(value, expected):
    assert is_hash_format(value) is expected
