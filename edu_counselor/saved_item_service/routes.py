import uuid

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from .crud import delete_saved, list_saved, save_item
from .schemas import ItemType, SavedItemInsert, SavedItemRow


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/", response_model=list[SavedItemRow])
    def get_all(request: Request, item_type: ItemType | None = Query(default=None), db: Session = Depends(get_db)):
        return list_saved(db, current_user_id(request), item_type)

    @router.post("/", response_model=SavedItemRow, status_code=status.HTTP_201_CREATED)
    def save(payload: SavedItemInsert, request: Request, db: Session = Depends(get_db)):
        return save_item(db, current_user_id(request), payload.model_dump())

    @router.delete("/{saved_id}", response_model=dict)
    def remove(saved_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        delete_saved(db, current_user_id(request), saved_id)
        return {"deleted": True}

    return router
