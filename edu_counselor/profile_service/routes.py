from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from .crud import create_profile, get_or_bootstrap_me, update_profile
from .schemas import ProfileInsert, ProfileRow, ProfileUpdate


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/me", response_model=ProfileRow)
    def me(request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        return get_or_bootstrap_me(db, uid)

    @router.post("/me", response_model=ProfileRow, status_code=status.HTTP_201_CREATED)
    def insert_me(payload: ProfileInsert, request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        return create_profile(db, uid, payload.model_dump())

    @router.patch("/me", response_model=ProfileRow)
    def update_me(payload: ProfileUpdate, request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        return update_profile(db, uid, uid, payload.model_dump(exclude_unset=True))

    return router
