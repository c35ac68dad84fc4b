from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from atype.core.config import Settings, get_settings
from atype.core.logging import configure_logging
from atype.repositories.json_storage import get_store
from atype.routers import accounts as accounts_router
from atype.routers import comments as comments_router
from atype.routers import friends as friends_router
from atype.routers import messages as messages_router
from atype.routers import posts as posts_router
from atype.services.account_service import AccountService
from atype.services.comment_service import CommentService
from atype.services.errors import AtypeError
from atype.services.friend_service import FriendService
from atype.services.message_service import MessageService
from atype.services.post_service import PostService

logger = logging.getLogger(__name__)


def _atype_error_handler(request: Request, exc: AtypeError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid request")
    return JSONResponse({"error": f"{field}: {message}" if field else message}, status_code=400)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; usable as a uvicorn/gunicorn factory."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="atype backend")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AtypeError, _atype_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    store = get_store(settings)
    app.state.store = store
    app.state.account_service = AccountService(store)
    app.state.post_service = PostService(store)
    app.state.friend_service = FriendService(store)
    app.state.message_service = MessageService(store)
    app.state.comment_service = CommentService(store)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "atype backend ok"

    app.include_router(accounts_router.router)
    app.include_router(posts_router.router)
    app.include_router(friends_router.router)
    app.include_router(messages_router.router)
    app.include_router(comments_router.router)

    logger.info("atype app ready, data file %s", store.path)
    return app
