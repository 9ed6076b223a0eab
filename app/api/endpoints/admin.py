"""
Admin API endpoints for account and category management.

Every path under /admin requires the ADMIN role; the route policy rejects
other callers before these handlers run.
"""

import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import PolicyEnforcedRoute
from app.core.exceptions import ConflictError
from app.crud import category as category_crud
from app.crud import user as user_crud
from app.schemas.category import CategoryCreateRequest, CategoryResponse
from app.schemas.common import Page
from app.schemas.user import AdminUserUpdateRequest, UserResponse
from app.services import user_service

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=PolicyEnforcedRoute)
logger = logging.getLogger(__name__)


@router.get("/users", response_model=Page[UserResponse])
def list_all_users(
    page: int = Query(0, ge=0, le=settings.MAX_PAGE_NUMBER),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db)
):
    """List all accounts in the system."""
    users, total = user_crud.get_page(db, page=page, size=size)
    return Page[UserResponse].build(
        content=[UserResponse.model_validate(u) for u in users],
        page=page,
        size=size,
        total_elements=total
    )


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    request: AdminUserUpdateRequest,
    db: Session = Depends(get_db)
):
    """Update any account, including its role."""
    user = user_service.get_user(db, user_id)
    return user_service.update_user(db, user, request)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """
    Delete an account and all associated data (job postings, applications).

    This is a CASCADE delete operation.
    """
    user_service.delete_user(db, user_id)
    logger.info(f"Admin deleted user {user_id}")
    return None


@router.post("/categories", status_code=status.HTTP_201_CREATED, response_model=CategoryResponse)
def create_category(request: CategoryCreateRequest, db: Session = Depends(get_db)):
    if category_crud.get_by_name(db, request.name) is not None:
        raise ConflictError(f"Category '{request.name}' already exists")
    category = category_crud.create(db, name=request.name, description=request.description)
    logger.info(f"Admin created category {category.id}: {category.name}")
    return category
