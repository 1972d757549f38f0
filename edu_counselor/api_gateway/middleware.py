import logging
from typing import Any

import httpx
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from ..shared.config import AUTH_SERVICE_URL, LOGIN_URL

logger = logging.getLogger("api-gateway")

# Public paths that don't require auth
PUBLIC_PATHS = {
    "/",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
}

# IMPORTANT: DO NOT include "/auth/" here, /auth/me needs a principal.
PUBLIC_PREFIXES = (
    "/auth/register",
    "/auth/login",
    "/auth/verify",
    "/auth/hooks/",
)


def _is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS:
        return True
    return any(path.startswith(p) for p in PUBLIC_PREFIXES)


def _unauthorized(detail: str, status_code: int = status.HTTP_401_UNAUTHORIZED) -> JSONResponse:
    # login_url lets the UI send the user back to its sign-in screen
    return JSONResponse(status_code=status_code, content={"detail": detail, "login_url": LOGIN_URL})


async def call_auth_service(path: str, json_body: dict[str, Any], timeout: float = 10.0) -> tuple[int, Any]:
    """POST to the auth service and return (status_code, decoded body)."""
    url = f"{AUTH_SERVICE_URL}{path}"
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.post(url, json=json_body)
    except httpx.TimeoutException:
        logger.error("Timeout calling auth: %s", url)
        raise HTTPException(status_code=504, detail="Authentication service timeout")
    except httpx.RequestError as e:
        logger.error("Error calling auth: %s (%s)", url, e)
        raise HTTPException(status_code=503, detail="Authentication service unavailable")

    try:
        data: Any = r.json()
    except ValueError:
        data = r.text
    return r.status_code, data


def extract_user(data: Any) -> dict[str, Any] | None:
    """Accepts {"user": {...}} or a bare user object; ``sub`` falls back to ``id``."""
    payload = data
    if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
        payload = payload["user"]
    if not isinstance(payload, dict):
        return None
    sub = payload.get("sub") or payload.get("id")
    if not sub:
        return None
    return {**payload, "sub": str(sub)}


async def _verify_token(token: str) -> dict[str, Any]:
    """
    Verify token via auth-service and normalize returned payload.
    REQUIRED: sub, email
    """
    code, data = await call_auth_service("/auth/verify", {"token": token}, timeout=5.0)

    if code != 200:
        detail = "Invalid or expired token"
        if isinstance(data, dict):
            detail = data.get("detail") or data.get("message") or detail
        elif isinstance(data, str) and data.strip():
            detail = data
        raise HTTPException(status_code=401, detail=detail)

    user = extract_user(data)
    if user is None:
        raise HTTPException(status_code=401, detail="Token missing sub")
    email = user.get("email")
    if not email:
        raise HTTPException(status_code=401, detail="Token missing email")

    return {"sub": user["sub"], "email": str(email)}


async def auth_middleware(request: Request, call_next):
    # Let CORS preflight pass through (no auth here)
    if request.method == "OPTIONS":
        return await call_next(request)

    if _is_public_path(request.url.path):
        return await call_next(request)

    auth_header = request.headers.get("Authorization", "")
    if not auth_header.lower().startswith("bearer "):
        return _unauthorized("Missing or invalid authorization header")

    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        return _unauthorized("Missing or invalid authorization header")

    try:
        user = await _verify_token(token)
    except HTTPException as e:
        if e.status_code == 401:
            return _unauthorized(e.detail)
        return JSONResponse(status_code=e.status_code, content={"detail": e.detail})

    request.state.user = user
    return await call_next(request)
