"""Posts and the global feed."""

from __future__ import annotations

from typing import Any, List, Optional
import logging

from atype.core.utils import new_id, now_iso, time_key
from atype.repositories.json_storage import JsonDocumentStore, get_store
from atype.services.account_service import require_user
from atype.services.errors import ValidationError

logger = logging.getLogger(__name__)


def _creation_key(post: dict) -> tuple:
    # ids are increasing integers, so they break ties between equal times
    post_id = post.get("id")
    return (time_key(post.get("time")), post_id if isinstance(post_id, (int, float)) else 0)


class PostService:
    """Create and list posts."""

    def __init__(self, store: Optional[JsonDocumentStore] = None) -> None:
        self.store = store or get_store()

    def _posts(self) -> List[dict]:
        return [p for p in self.store.read()["posts"] if isinstance(p, dict)]

    def create(self, author: Any, text: Any) -> dict:
        if not author or not text:
            raise ValidationError("author and text required")
        with self.store.transaction() as doc:
            require_user(doc, author, "unknown author")
            post = {"id": new_id(), "author": author, "text": text, "time": now_iso()}
            doc["posts"].append(post)
        logger.info("Post %s created by %r", post["id"], author)
        return post

    def list_posts(self, author: Optional[str] = None) -> List[dict]:
        posts = self._posts()
        if author:
            return [p for p in posts if p.get("author") == author]
        return posts

    def feed(self) -> List[dict]:
        """All posts, newest first."""
        return sorted(self._posts(), key=_creation_key, reverse=True)
