# api_gateway/main.py
from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..career_service.routes import build_router as career_router
from ..chat_service.routes import build_router as chat_router
from ..college_service.routes import build_router as college_router
from ..profile_service.routes import build_router as profile_router
from ..quest_service.routes import build_router as quest_router
from ..saved_item_service.routes import build_router as saved_item_router
from ..scholarship_service.routes import build_router as scholarship_router
from ..shared.config import CORS_ORIGINS
from ..shared.database import init_db, make_engine, make_session_factory
from ..shared.errors import CounselorError
from .middleware import auth_middleware
from .routes import build_router as auth_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("api-gateway")

VERSION = "1.0.0"

SURFACES = {
    "auth": "/auth",
    "profile": "/profile",
    "chat": "/chat",
    "colleges": "/colleges",
    "scholarships": "/scholarships",
    "careers": "/careers",
    "quests": "/quests",
    "saved": "/saved",
}


def create_app(SessionLocal=None) -> FastAPI:
    if SessionLocal is None:
        engine = make_engine()
        init_db(engine)
        SessionLocal = make_session_factory(engine)

    app = FastAPI(title="Education Counselor API", version=VERSION)

    allow_credentials = True
    if CORS_ORIGINS == ["*"]:
        # Browsers reject "*" with credentials
        allow_credentials = False

    app.middleware("http")(auth_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CounselorError)
    async def counselor_error_handler(request: Request, exc: CounselorError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.error_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "error": exc.error_code})

    @app.get("/health", operation_id="health_check", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "service": "edu-counselor"}

    @app.get("/", operation_id="root", tags=["Root"])
    async def root():
        return {
            "service": "Education Counselor API",
            "version": VERSION,
            "surfaces": SURFACES,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    app.include_router(auth_router(SessionLocal), prefix=SURFACES["auth"], tags=["Authentication"])
    app.include_router(profile_router(SessionLocal), prefix=SURFACES["profile"], tags=["Profile"])
    app.include_router(chat_router(SessionLocal), prefix=SURFACES["chat"], tags=["Chat"])
    app.include_router(college_router(SessionLocal), prefix=SURFACES["colleges"], tags=["Colleges"])
    app.include_router(scholarship_router(SessionLocal), prefix=SURFACES["scholarships"], tags=["Scholarships"])
    app.include_router(career_router(SessionLocal), prefix=SURFACES["careers"], tags=["Career Paths"])
    app.include_router(quest_router(SessionLocal), prefix=SURFACES["quests"], tags=["Quests"])
    app.include_router(saved_item_router(SessionLocal), prefix=SURFACES["saved"], tags=["Saved Items"])

    return app


def main() -> None:
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(create_app(), host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
