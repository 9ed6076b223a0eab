"""
Pydantic schemas for job Application requests/responses.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from app.models.application import ApplicationStatus


class ApplicationCreateRequest(BaseModel):
    """Body of POST /jobs/{id}/apply. Status defaults to PENDING when omitted."""
    status: Optional[ApplicationStatus] = None
    cover_letter: Optional[str] = Field(None, max_length=5000)


class ApplicationResponse(BaseModel):
    id: int
    job_post_id: int
    job_seeker_id: int
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    applied_at: Optional[datetime] = None

    class Config:
        from_attributes = True
