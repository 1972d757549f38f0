import uuid

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from .crud import get_career_path, list_career_paths
from .schemas import CareerPathRow


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/", response_model=list[CareerPathRow])
    def get_all(
        request: Request,
        q: str | None = Query(default=None, description="Search in title and description"),
        db: Session = Depends(get_db),
    ):
        return list_career_paths(db, current_user_id(request), q=q)

    @router.get("/{career_id}", response_model=CareerPathRow)
    def get_one(career_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        return get_career_path(db, current_user_id(request), career_id)

    return router
