"""
Database models package.
"""

from app.models.user import User, UserRole
from app.models.category import Category
from app.models.job_post import JobPost
from app.models.application import Application, ApplicationStatus

__all__ = ["User", "UserRole", "Category", "JobPost", "Application", "ApplicationStatus"]
