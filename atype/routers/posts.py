from __future__ import annotations

from fastapi import APIRouter, Request

from atype.schemas import PostCreate
from atype.services.post_service import PostService

router = APIRouter(prefix="/api", tags=["posts"])


def _get_post_service(request: Request) -> PostService:
    svc = getattr(getattr(request.app, "state", None), "post_service", None)
    if not svc:
        raise RuntimeError("PostService not configured")
    return svc


@router.get("/posts")
def list_posts(request: Request, author: str = ""):
    return _get_post_service(request).list_posts(author or None)


@router.post("/posts")
def create_post(body: PostCreate, request: Request):
    post = _get_post_service(request).create(body.author, body.text)
    return {"ok": True, "post": post}


@router.get("/feed")
def feed(request: Request):
    return _get_post_service(request).feed()
