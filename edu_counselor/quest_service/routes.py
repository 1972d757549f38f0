from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from .crud import create_progress, get_progress, list_progress, summarize, update_progress
from .schemas import ProgressInsert, ProgressRow, ProgressUpdate, QuestSummary


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/", response_model=list[ProgressRow])
    def get_all(request: Request, db: Session = Depends(get_db)):
        return list_progress(db, current_user_id(request))

    @router.get("/summary", response_model=QuestSummary)
    def summary(request: Request, db: Session = Depends(get_db)):
        return summarize(list_progress(db, current_user_id(request)))

    @router.get("/{quest_type}", response_model=ProgressRow)
    def get_one(quest_type: str, request: Request, db: Session = Depends(get_db)):
        return get_progress(db, current_user_id(request), quest_type)

    @router.post("/", response_model=ProgressRow, status_code=status.HTTP_201_CREATED)
    def start(payload: ProgressInsert, request: Request, db: Session = Depends(get_db)):
        return create_progress(db, current_user_id(request), payload.model_dump())

    @router.patch("/{quest_type}", response_model=ProgressRow)
    def update(quest_type: str, payload: ProgressUpdate, request: Request, db: Session = Depends(get_db)):
        return update_progress(db, current_user_id(request), quest_type, payload.model_dump(exclude_unset=True))

    return router
