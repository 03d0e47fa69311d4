"""Password Hasher — bcrypt hashing and tolerant verification.

Invariants:
    - hash() is the only producer of PasswordHash values
    - verify() NEVER raises: empty, non-"$2" or malformed hashes return False
    - Plaintext is truncated to bcrypt's 72-byte limit identically in hash and verify
    - Plaintext is never logged

Design Decisions:
    - bcrypt library directly (no passlib wrapper): passlib is unmaintained and
      trips over current bcrypt releases
    - Cost factor from settings: ~tens of ms in production, minimum (4) in tests
"""

import logging
import secrets
from functools import cached_property

import bcrypt

from stockroom.core.domain_types import PasswordHash

logger = logging.getLogger(__name__)

HASH_PREFIX = "$2"
BCRYPT_MAX_BYTES = 72


def is_hash_format(value: object) -> bool:
    """True if value looks like a stored bcrypt hash."""
    return (
        isinstance(value, str)
        and bool(value.strip())
        and value.startswith(HASH_PREFIX)
    )


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """One-way, salted, deliberately slow password digests."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    @cached_property
    def dummy_hash(self) -> PasswordHash:
        """Hash of a random secret, verified against when a login is unknown."""
        return self.hash(secrets.token_urlsafe(16))

    def hash(self, plaintext: str) -> PasswordHash:
        digest = bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self.rounds))
        return PasswordHash(digest.decode("ascii"))

    def verify(self, plaintext: str, stored_hash: str | None) -> bool:
        if not is_hash_format(stored_hash):
            logger.warning("Stored password is not a bcrypt hash; refusing verification")
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), stored_hash.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as e:
            logger.warning(f"Malformed stored password hash: {type(e).__name__}")
            return False
