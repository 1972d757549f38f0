import hmac
import logging
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ..profile_service.schemas import ProfileRow
from ..shared.config import auth_hook_secret
from ..shared.database import db_dependency
from ..shared.triggers import handle_deleted_user, handle_new_user
from . import middleware
from .schemas import (
    LoginIn,
    PrincipalOut,
    RegisterIn,
    UserCreatedHookIn,
    UserDeletedHookIn,
    VerifyIn,
)

logger = logging.getLogger("api-gateway")


def _require_hook_secret(secret: str | None) -> None:
    expected = auth_hook_secret()
    if not expected:
        raise HTTPException(status_code=403, detail="Auth hooks are disabled")
    if not secret or not hmac.compare_digest(secret, expected):
        raise HTTPException(status_code=403, detail="Invalid hook secret")


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.post("/register", operation_id="auth_register")
    async def register(payload: RegisterIn, db: Session = Depends(get_db)):
        code, data = await middleware.call_auth_service("/auth/register", payload.model_dump())
        if code in (200, 201):
            user = middleware.extract_user(data)
            try:
                uid = uuid.UUID(user["sub"]) if user else None
            except ValueError:
                uid = None
            if uid is None:
                # GET /profile/me will bootstrap the row later
                logger.warning("Auth service accepted signup without a usable user id")
            else:
                await run_in_threadpool(handle_new_user, db, uid, {"full_name": payload.full_name})
        return JSONResponse(status_code=code, content=data)

    @router.post("/login", operation_id="auth_login")
    async def login(payload: LoginIn):
        code, data = await middleware.call_auth_service("/auth/login", payload.model_dump())
        return JSONResponse(status_code=code, content=data)

    @router.post("/verify", operation_id="auth_verify")
    async def verify(payload: VerifyIn):
        code, data = await middleware.call_auth_service("/auth/verify", payload.model_dump(), timeout=5.0)
        return JSONResponse(status_code=code, content=data)

    @router.get("/me", response_model=PrincipalOut, operation_id="auth_me")
    def me(request: Request):
        return request.state.user

    @router.post("/hooks/user-created", response_model=ProfileRow, operation_id="auth_hook_user_created")
    def user_created(
        payload: UserCreatedHookIn,
        db: Session = Depends(get_db),
        x_auth_hook_secret: str | None = Header(default=None),
    ):
        _require_hook_secret(x_auth_hook_secret)
        return handle_new_user(db, payload.id, payload.raw_user_meta_data)

    @router.post("/hooks/user-deleted", response_model=dict, operation_id="auth_hook_user_deleted")
    def user_deleted(
        payload: UserDeletedHookIn,
        db: Session = Depends(get_db),
        x_auth_hook_secret: str | None = Header(default=None),
    ):
        _require_hook_secret(x_auth_hook_secret)
        return {"deleted": handle_deleted_user(db, payload.id)}

    return router
