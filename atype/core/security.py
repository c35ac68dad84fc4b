"""Security helpers (hashing and verification)."""

from __future__ import annotations

import secrets

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
_PREFIX = "argon2$"


def hash_password(password: str) -> str:
    """Create a modern Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def _legacy_hash(password: str) -> str:
    """31-multiplier string hash used by accounts created before Argon2.

    Works on UTF-16 code units with signed 32-bit wrap-around, so old
    ``passHash`` values keep matching.
    """
    data = password.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return str(h)


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if stored.startswith(_PREFIX):
        hashed = stored[len(_PREFIX) :]
        try:
            return _ph.verify(hashed, password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False
    legacy = _legacy_hash(password)
    return secrets.compare_digest(legacy, stored)
