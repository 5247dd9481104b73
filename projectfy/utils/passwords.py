"""
Password hashing.

Passwords are never stored in plaintext: they go through scrypt (from the
cryptography package) with a random per-user salt. Stored format:

    scrypt$<n>$<r>$<p>$<salt b64>$<hash b64>

Records written by older app builds hold the raw password. Those still
verify, and needs_rehash() tells the caller to upgrade them on login.
"""

import base64
import hmac
import logging
import os
from typing import Optional

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from config import settings

logger = logging.getLogger(__name__)

SCHEME = "scrypt"
SALT_BYTES = 16
KEY_LENGTH = 32


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.b64decode(text.encode("ascii"))


class PasswordHasher:
    """Hash and verify user passwords."""

    def __init__(self, n: Optional[int] = None, r: int = 8, p: int = 1):
        self.n = n or settings.password_hash_n
        self.r = r
        self.p = p

    def _kdf(self, salt: bytes, n: int, r: int, p: int) -> Scrypt:
        return Scrypt(salt=salt, length=KEY_LENGTH, n=n, r=r, p=p)

    def hash(self, password: str) -> str:
        salt = os.urandom(SALT_BYTES)
        key = self._kdf(salt, self.n, self.r, self.p).derive(password.encode("utf-8"))
        return f"{SCHEME}${self.n}${self.r}${self.p}${_b64encode(salt)}${_b64encode(key)}"

    def verify(self, password: str, stored: Optional[str]) -> bool:
        """Check a password against a stored hash (or legacy plaintext)."""
        if not stored:
            return False

        if not self.is_hashed(stored):
            logger.warning("Verifying a legacy plaintext password")
            return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))

        try:
            _, n, r, p, salt, expected = stored.split("$")
            kdf = self._kdf(_b64decode(salt), int(n), int(r), int(p))
            kdf.verify(password.encode("utf-8"), _b64decode(expected))
            return True
        except InvalidKey:
            return False
        except ValueError as e:
            logger.error(f"Malformed password hash: {e}")
            return False

    @staticmethod
    def is_hashed(stored: str) -> bool:
        return stored.startswith(f"{SCHEME}$")

    def needs_rehash(self, stored: Optional[str]) -> bool:
        if not stored or not self.is_hashed(stored):
            return True
        parts = stored.split("$")
        return len(parts) != 6 or parts[1:4] != [str(self.n), str(self.r), str(self.p)]
