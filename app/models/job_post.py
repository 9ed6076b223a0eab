from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class JobPost(Base):
    """
    A job posting published by an employer.

    Only the owning employer (employer_id) may update or delete it.
    """
    __tablename__ = "job_posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=True)
    skills = Column(String, nullable=True)
    salary = Column(Float, nullable=True)

    # Ownership
    employer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    employer = relationship("User", back_populates="job_posts")
    category = relationship("Category", back_populates="job_posts")
    applications = relationship("Application", back_populates="job_post", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<JobPost(id={self.id}, title='{self.title}', employer_id={self.employer_id})>"
