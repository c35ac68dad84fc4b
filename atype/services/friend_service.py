"""Friends graph; every link is stored on both users."""

from __future__ import annotations

from typing import Any, List, Optional

from atype.repositories.json_storage import JsonDocumentStore, get_store
from atype.services.account_service import require_user
from atype.services.errors import ValidationError


class FriendService:
    def __init__(self, store: Optional[JsonDocumentStore] = None) -> None:
        self.store = store or get_store()

    def add(self, user: Any, friend: Any) -> List[str]:
        """Link both users (idempotent) and return the requester's friend list."""
        if not user or not friend:
            raise ValidationError("user and friend required")
        if user == friend:
            raise ValidationError("cannot add yourself")
        with self.store.transaction() as doc:
            me = require_user(doc, user)
            other = require_user(doc, friend, "unknown friend")
            if friend not in me["friends"]:
                me["friends"].append(friend)
            if user not in other["friends"]:
                other["friends"].append(user)
            return list(me["friends"])

    def list_friends(self, user: Any) -> List[str]:
        if not user:
            raise ValidationError("user required")
        doc = self.store.read()
        return list(require_user(doc, user)["friends"])
