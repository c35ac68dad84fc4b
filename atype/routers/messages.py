from __future__ import annotations

from fastapi import APIRouter, Query, Request

from atype.schemas import MessageSend
from atype.services.message_service import MessageService

router = APIRouter(prefix="/api", tags=["messages"])


def _get_message_service(request: Request) -> MessageService:
    svc = getattr(getattr(request.app, "state", None), "message_service", None)
    if not svc:
        raise RuntimeError("MessageService not configured")
    return svc


@router.get("/dialogs")
def dialogs(request: Request, user: str = ""):
    return _get_message_service(request).dialogs(user)


@router.get("/messages")
def history(request: Request, user: str = "", with_user: str = Query("", alias="with")):
    return _get_message_service(request).history(user, with_user)


@router.post("/messages")
def send_message(body: MessageSend, request: Request):
    message = _get_message_service(request).send(body.sender, body.to, body.text)
    return {"ok": True, "message": message}
