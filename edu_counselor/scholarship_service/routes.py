import uuid

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from .crud import get_scholarship, list_scholarships
from .schemas import ScholarshipRow


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/", response_model=list[ScholarshipRow])
    def get_all(
        request: Request,
        category: str | None = Query(default=None, description="merit, need-based, minority, ..."),
        upcoming_only: bool = Query(default=False, description="Hide scholarships whose deadline has passed"),
        db: Session = Depends(get_db),
    ):
        return list_scholarships(db, current_user_id(request), category=category, upcoming_only=upcoming_only)

    @router.get("/{scholarship_id}", response_model=ScholarshipRow)
    def get_one(scholarship_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        return get_scholarship(db, current_user_id(request), scholarship_id)

    return router
