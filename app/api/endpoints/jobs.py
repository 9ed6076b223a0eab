import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.authentication import AuthenticatedIdentity
from app.core.config import settings
from app.core.database import get_db
from app.core.deps import PolicyEnforcedRoute, require_identity
from app.crud import job_post as job_post_crud
from app.schemas.application import ApplicationCreateRequest, ApplicationResponse
from app.schemas.common import Page
from app.schemas.job_post import JobPostRequest, JobPostResponse
from app.services import application_service, job_post_service

router = APIRouter(prefix="/jobs", tags=["Jobs"], route_class=PolicyEnforcedRoute)
logger = logging.getLogger(__name__)


@router.get("", response_model=Page[JobPostResponse])
def list_jobs(
    page: int = Query(0, ge=0, le=settings.MAX_PAGE_NUMBER),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db)
):
    """
    List job postings, newest first.

    Public endpoint. Pagination is zero-based: ?page=0&size=10
    """
    job_posts, total = job_post_crud.get_page(db, page=page, size=size)
    return Page[JobPostResponse].build(
        content=[JobPostResponse.from_model(job_post) for job_post in job_posts],
        page=page,
        size=size,
        total_elements=total
    )


@router.get("/{job_id}", response_model=JobPostResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job posting by ID. Public endpoint."""
    logger.info(f"Fetching job with id: {job_id}")
    return JobPostResponse.from_model(job_post_service.get_job_post(db, job_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobPostResponse)
def create_job(
    request: JobPostRequest,
    employer: AuthenticatedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """Publish a job posting owned by the calling employer."""
    job_post = job_post_service.create_job_post(db, request, employer)
    return JobPostResponse.from_model(job_post)


@router.put("/{job_id}", response_model=JobPostResponse)
def update_job(
    job_id: int,
    request: JobPostRequest,
    employer: AuthenticatedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """
    Replace a job posting.

    Only the employer who created the posting may update it; other employers
    get 403 even though they hold the EMPLOYER role.
    """
    job_post = job_post_service.update_job_post(db, job_id, request, employer)
    return JobPostResponse.from_model(job_post)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    employer: AuthenticatedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """Delete a job posting (owner only). Its applications are removed too."""
    job_post_service.delete_job_post(db, job_id, employer)
    return None


@router.post("/{job_id}/apply", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def apply_for_job(
    job_id: int,
    request: Optional[ApplicationCreateRequest] = None,
    job_seeker: AuthenticatedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """
    Apply to a job posting as the calling job seeker.

    Returns 404 if the job does not exist and 409 if the caller already
    applied to it. The body is optional; status defaults to PENDING.
    """
    return application_service.submit_application(
        db, job_id, job_seeker, request or ApplicationCreateRequest()
    )
