"""
Application database model.

Links a job seeker to a job posting. A job seeker can apply to a given
posting at most once; the unique constraint backs the check done by the
submission handler.
"""

import enum
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """
    Application review lifecycle:

    PENDING -> REVIEWED -> ACCEPTED | REJECTED
    """
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_seeker_id", "job_post_id", name="uq_application_job_seeker_job_post"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_seeker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_post_id = Column(Integer, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String, default=ApplicationStatus.PENDING.value, nullable=False)
    cover_letter = Column(Text, nullable=True)

    applied_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    job_seeker = relationship("User", back_populates="applications")
    job_post = relationship("JobPost", back_populates="applications")

    def __repr__(self):
        return f"<Application(id={self.id}, job_seeker_id={self.job_seeker_id}, job_post_id={self.job_post_id}, status='{self.status}')>"
