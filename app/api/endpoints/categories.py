from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import PolicyEnforcedRoute
from app.crud import category as category_crud
from app.schemas.category import CategoryResponse

router = APIRouter(prefix="/categories", tags=["Categories"], route_class=PolicyEnforcedRoute)


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    """List all job categories. Public endpoint; admins create them under /admin/categories."""
    return category_crud.get_all(db)
