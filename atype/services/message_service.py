"""
Direct messages between two users and the dialog list derived from them.
"""

from __future__ import annotations

from typing import Any, List, Optional
import logging

from atype.core.utils import new_id, now_iso, time_key
from atype.repositories.json_storage import JsonDocumentStore, get_store
from atype.services.account_service import require_user
from atype.services.errors import ValidationError

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, store: Optional[JsonDocumentStore] = None) -> None:
        self.store = store or get_store()

    def _messages(self) -> List[dict]:
        return [m for m in self.store.read()["messages"] if isinstance(m, dict)]

    def dialogs(self, user: Any) -> List[str]:
        """Distinct counterparties of ``user``, in order of first appearance."""
        if not user:
            raise ValidationError("user required")
        seen: List[str] = []
        for msg in self._messages():
            if msg.get("from") == user:
                other = msg.get("to")
            elif msg.get("to") == user:
                other = msg.get("from")
            else:
                continue
            if other not in seen:
                seen.append(other)
        return seen

    def history(self, user: Any, with_user: Any) -> List[dict]:
        if not user or not with_user:
            raise ValidationError("user and with required")
        pair = [(user, with_user), (with_user, user)]
        messages = [m for m in self._messages() if (m.get("from"), m.get("to")) in pair]
        return sorted(messages, key=lambda m: time_key(m.get("time")))

    def send(self, sender: Any, recipient: Any, text: Any) -> dict:
        if not sender or not recipient or not text:
            raise ValidationError("from, to and text required")
        with self.store.transaction() as doc:
            require_user(doc, sender, "unknown sender")
            require_user(doc, recipient, "unknown recipient")
            message = {"id": new_id(), "from": sender, "to": recipient, "text": text, "time": now_iso()}
            doc["messages"].append(message)
        logger.info("Message %s sent from %r to %r", message["id"], sender, recipient)
        return message
