"""Comments on posts. Neither the post nor the author is checked for existence."""

from __future__ import annotations

from typing import Any, List, Optional
import logging

from atype.core.utils import new_id, now_iso
from atype.repositories.json_storage import JsonDocumentStore, get_store
from atype.services.errors import ValidationError

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, store: Optional[JsonDocumentStore] = None) -> None:
        self.store = store or get_store()

    def add(self, post_id: Any, author_login: Any, text: Any) -> dict:
        if not post_id or not author_login or not text:
            raise ValidationError("Missing fields")
        comment = {"id": new_id(), "postId": post_id, "authorLogin": author_login, "text": text, "time": now_iso()}
        with self.store.transaction() as doc:
            doc["comments"].append(comment)
        logger.info("Comment %s added to post %s", comment["id"], post_id)
        return comment

    def list_for_post(self, post_id: str) -> List[dict]:
        # ids may be stored as numbers while the path always carries a string
        wanted = str(post_id)
        return [
            c for c in self.store.read()["comments"] if isinstance(c, dict) and str(c.get("postId")) == wanted
        ]
