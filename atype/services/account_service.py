"""
Account related use cases: registration, login and avatar update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
import logging

from atype.core.security import hash_password, verify_password
from atype.core.utils import now_iso
from atype.repositories.json_storage import JsonDocumentStore, get_store
from atype.services.errors import AuthError, ConflictError, UnknownReferenceError, ValidationError

logger = logging.getLogger(__name__)


def find_user(doc: dict, login: Any) -> Optional[dict]:
    """Return the user record with exactly this login, if any."""
    for user in doc["users"]:
        if isinstance(user, dict) and user.get("login") == login:
            return user
    return None


def require_user(doc: dict, login: Any, message: str = "unknown user") -> dict:
    user = find_user(doc, login)
    if user is None:
        raise UnknownReferenceError(message)
    return user


def new_user_record(login: str, pass_hash: str) -> dict:
    return {
        "login": login,
        "passHash": pass_hash,
        "createdAt": now_iso(),
        "lastLoginAt": None,
        "lastPostAt": None,
        "friends": [],
        "avatar": "",
        "role": "user",
        "mutedUntil": None,
    }


@dataclass
class AccountService:
    """Handles registration, login and profile (avatar) updates.

    Argon2 hashing and verification run outside store transactions so other
    requests are not queued behind them.
    """

    store: Optional[JsonDocumentStore] = field(default=None)

    def __post_init__(self):
        if self.store is None:
            self.store = get_store()

    def register(self, login: Any, password: Any) -> None:
        if not login or not password:
            raise ValidationError("login and password required")
        if find_user(self.store.read(), login):
            raise ConflictError("user exists")
        pass_hash = hash_password(password)
        with self.store.transaction() as doc:
            # re-checked: another registration may have landed while hashing
            if find_user(doc, login):
                raise ConflictError("user exists")
            doc["users"].append(new_user_record(login, pass_hash))
        logger.info("Registered user %r", login)

    def login(self, login: Any, password: Any) -> str:
        if not login or not password:
            raise ValidationError("login and password required")
        snapshot = find_user(self.store.read(), login)
        stored_hash = snapshot.get("passHash") if snapshot else None
        if not snapshot or not verify_password(password, stored_hash):
            logger.warning("Failed login for %r", login)
            raise AuthError("invalid credentials")
        with self.store.transaction() as doc:
            user = find_user(doc, login)
            if not user or user.get("passHash") != stored_hash:
                raise AuthError("invalid credentials")
            user["lastLoginAt"] = now_iso()
        return login

    def update_avatar(self, login: Any, avatar: Any) -> str:
        if not login:
            raise ValidationError("login required")
        with self.store.transaction() as doc:
            user = require_user(doc, login)
            user["avatar"] = avatar.strip() if isinstance(avatar, str) else ""
            return user["avatar"]
