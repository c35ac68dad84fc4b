from __future__ import annotations

from fastapi import APIRouter, Request

from atype.schemas import AvatarUpdate, Credentials
from atype.services.account_service import AccountService

router = APIRouter(prefix="/api", tags=["accounts"])


def _get_account_service(request: Request) -> AccountService:
    svc = getattr(getattr(request.app, "state", None), "account_service", None)
    if not svc:
        raise RuntimeError("AccountService not configured")
    return svc


@router.post("/register")
def register(body: Credentials, request: Request):
    _get_account_service(request).register(body.login, body.password)
    return {"ok": True}


@router.post("/login")
def login(body: Credentials, request: Request):
    who = _get_account_service(request).login(body.login, body.password)
    return {"ok": True, "login": who}


@router.post("/avatar")
def update_avatar(body: AvatarUpdate, request: Request):
    _get_account_service(request).update_avatar(body.login, body.avatar)
    return {"ok": True}
