import uuid

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from .crud import get_college, list_colleges
from .schemas import CollegeRow


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/", response_model=list[CollegeRow])
    def get_all(
        request: Request,
        type: str | None = Query(default=None, description="engineering, medical, arts, ..."),
        state: str | None = Query(default=None),
        db: Session = Depends(get_db),
    ):
        return list_colleges(db, current_user_id(request), type=type, state=state)

    @router.get("/{college_id}", response_model=CollegeRow)
    def get_one(college_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        return get_college(db, current_user_id(request), college_id)

    return router
