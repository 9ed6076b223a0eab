"""
CRUD operations for job categories.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.category import Category


def create(db: Session, name: str, description: Optional[str] = None) -> Category:
    category = Category(name=name, description=description)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def get_by_id(db: Session, category_id: int) -> Optional[Category]:
    return db.query(Category).filter(Category.id == category_id).first()


def get_by_name(db: Session, name: str) -> Optional[Category]:
    return db.query(Category).filter(Category.name == name).first()


def get_all(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name).all()
