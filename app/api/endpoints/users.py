"""
Self-service account endpoints.

- GET/PUT /users/me: any authenticated caller
- GET/PUT /users/{id}: the account owner, or an ADMIN (enforced by the route policy)
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import PolicyEnforcedRoute, get_current_user
from app.models.user import User
from app.schemas.user import UserResponse, UserUpdateRequest
from app.services import user_service

router = APIRouter(prefix="/users", tags=["Users"], route_class=PolicyEnforcedRoute)
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    """Get the authenticated caller's profile."""
    return current_user


@router.put("/me", response_model=UserResponse)
def update_current_user_profile(
    request: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update the caller's username, email or password.

    Changing the email invalidates existing tokens, because tokens carry
    the email as their subject; log in again afterwards.
    """
    return user_service.update_user(db, current_user, request)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    request: UserUpdateRequest,
    db: Session = Depends(get_db)
):
    user = user_service.get_user(db, user_id)
    return user_service.update_user(db, user, request)
