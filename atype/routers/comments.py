from __future__ import annotations

from fastapi import APIRouter, Request

from atype.schemas import CommentAdd
from atype.services.comment_service import CommentService

router = APIRouter(prefix="/api/comments", tags=["comments"])


def _get_comment_service(request: Request) -> CommentService:
    svc = getattr(getattr(request.app, "state", None), "comment_service", None)
    if not svc:
        raise RuntimeError("CommentService not configured")
    return svc


@router.post("/add")
def add_comment(body: CommentAdd, request: Request):
    return _get_comment_service(request).add(body.postId, body.authorLogin, body.text)


@router.get("/{post_id}")
def list_comments(post_id: str, request: Request):
    return _get_comment_service(request).list_for_post(post_id)
