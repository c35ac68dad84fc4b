from __future__ import annotations

from fastapi import APIRouter, Request

from atype.schemas import FriendAdd
from atype.services.friend_service import FriendService

router = APIRouter(prefix="/api/friends", tags=["friends"])


def _get_friend_service(request: Request) -> FriendService:
    svc = getattr(getattr(request.app, "state", None), "friend_service", None)
    if not svc:
        raise RuntimeError("FriendService not configured")
    return svc


@router.get("")
def list_friends(request: Request, user: str = ""):
    return _get_friend_service(request).list_friends(user)


@router.post("/add")
def add_friend(body: FriendAdd, request: Request):
    friends = _get_friend_service(request).add(body.user, body.friend)
    return {"ok": True, "friends": friends}
