"""
User model for authentication and role-based access control.

Each User is an identity with a unique email (the login key and the bearer
token subject) and exactly one role.
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class UserRole(str, enum.Enum):
    """
    Account roles. Roles are compared by exact match; none implies another.

    - ADMIN: manages accounts and categories
    - EMPLOYER: publishes and maintains job postings
    - USER: job seeker who applies to postings
    """
    ADMIN = "ADMIN"
    EMPLOYER = "EMPLOYER"
    USER = "USER"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Authentication credentials
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    username = Column(String, nullable=False)
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    job_posts = relationship("JobPost", back_populates="employer", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job_seeker", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"
