"""
Authentication endpoints for user registration and login.

Implements JWT-based stateless authentication:
- POST /register: Create new USER or EMPLOYER account
- POST /login: Authenticate and receive a bearer token
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import PolicyEnforcedRoute
from app.core.security import create_access_token
from app.models.user import User
from app.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest, UserResponse
from app.services import user_service

router = APIRouter(prefix="/auth", tags=["Authentication"], route_class=PolicyEnforcedRoute)
logger = logging.getLogger(__name__)


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(subject=user.email),
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new account.

    Only USER and EMPLOYER roles can be chosen here; ADMIN accounts are
    provisioned by an operator. Returns a bearer token for immediate use.
    """
    user = user_service.register(db, request)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate with email and password and return a bearer token.
    """
    user = user_service.authenticate(db, request.email, request.password)
    return _token_response(user)
