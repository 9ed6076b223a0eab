"""
Account registration, login and profile updates.
"""

import logging
from typing import Optional, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from app.core.security import get_password_hash, verify_password
from app.crud import user as user_crud
from app.models.user import User, UserRole
from app.schemas.user import AdminUserUpdateRequest, UserRegisterRequest, UserUpdateRequest

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "Email already registered"


def register(db: Session, request: UserRegisterRequest) -> User:
    """
    Create a new USER or EMPLOYER account.

    Raises:
        ConflictError: Email already registered
    """
    if user_crud.get_by_email(db, request.email) is not None:
        raise ConflictError(EMAIL_TAKEN_MESSAGE)

    try:
        user = user_crud.create(
            db,
            email=request.email,
            username=request.username,
            hashed_password=get_password_hash(request.password),
            role=request.role
        )
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent registration for {request.email}")
        raise ConflictError(EMAIL_TAKEN_MESSAGE)
    logger.info(f"New user registered: {user.email} (role: {user.role.value})")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Check login credentials.

    Raises:
        AuthenticationError: Unknown email or wrong password
    """
    user = user_crud.get_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info(f"Failed login attempt for {email}")
        raise AuthenticationError("Incorrect email or password")

    logger.info(f"User logged in: {user.email}")
    return user


def get_user(db: Session, user_id: int) -> User:
    user = user_crud.get_by_id(db, user_id)
    if user is None:
        raise NotFoundError(f"User not found with id: {user_id}")
    return user


def update_user(
    db: Session,
    user: User,
    request: Union[UserUpdateRequest, AdminUserUpdateRequest]
) -> User:
    """
    Apply a partial update. Passwords are re-hashed; role changes are only
    honoured for AdminUserUpdateRequest.

    Raises:
        ConflictError: The new email belongs to another account
    """
    if request.email is not None and request.email != user.email:
        if user_crud.email_taken(db, request.email, exclude_user_id=user.id):
            raise ConflictError(EMAIL_TAKEN_MESSAGE)
        user.email = request.email

    if request.username is not None:
        user.username = request.username

    if request.password:
        user.hashed_password = get_password_hash(request.password)

    new_role = getattr(request, "role", None)
    if new_role is not None and new_role != user.role:
        logger.info(f"Role of user {user.id} changed from {user.role.value} to {new_role.value}")
        user.role = new_role

    user_id = user.id
    try:
        user = user_crud.save(db, user)
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent email change for user {user_id}")
        raise ConflictError(EMAIL_TAKEN_MESSAGE)
    logger.info(f"Updated user {user.id}")
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    user_crud.delete(db, user)
    logger.info(f"Deleted user {user_id}")


def ensure_admin(db: Session, email: str, password: str, username: Optional[str] = None) -> User:
    """
    Create an ADMIN account, or promote an existing account with this email.

    The password of an existing account is left unchanged.
    """
    user = user_crud.get_by_email(db, email)
    if user is None:
        user = user_crud.create(
            db,
            email=email,
            username=username or email.split("@")[0],
            hashed_password=get_password_hash(password),
            role=UserRole.ADMIN
        )
        logger.info(f"Created admin account {email}")
        return user

    if user.role != UserRole.ADMIN:
        user.role = UserRole.ADMIN
        user = user_crud.save(db, user)
        logger.info(f"Promoted {email} to ADMIN")
    return user
