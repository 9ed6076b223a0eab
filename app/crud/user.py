"""
CRUD operations for User accounts.
"""

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from app.models.user import User, UserRole


def create(
    db: Session,
    email: str,
    username: str,
    hashed_password: str,
    role: UserRole = UserRole.USER
) -> User:
    """
    Create a new account.

    Args:
        db: Database session
        email: Unique login email
        username: Display name
        hashed_password: bcrypt hash (never the plain password)
        role: Account role

    Returns:
        Created User instance with id
    """
    user = User(
        email=email,
        username=username,
        hashed_password=hashed_password,
        role=role
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    return user


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def email_taken(db: Session, email: str, exclude_user_id: Optional[int] = None) -> bool:
    """Check whether another account already uses this email."""
    query = db.query(User.id).filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def get_page(db: Session, page: int = 0, size: int = 10) -> Tuple[List[User], int]:
    """
    Retrieve one page of accounts ordered by id.

    Returns:
        (users on the page, total number of accounts)
    """
    query = db.query(User)
    total = query.count()
    users = query.order_by(User.id).offset(page * size).limit(size).all()
    return users, total


def save(db: Session, user: User) -> User:
    """Persist changes made to an account."""
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def delete(db: Session, user: User) -> None:
    """Delete an account (cascades to its job posts and applications)."""
    db.delete(user)
    db.commit()
