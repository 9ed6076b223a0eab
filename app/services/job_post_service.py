"""
Job posting lifecycle with per-resource ownership checks.

The route policy already guarantees the caller is an EMPLOYER for writes;
this layer additionally requires the caller to own the posting being
changed.
"""

import logging
from sqlalchemy.orm import Session

from app.core.authentication import AuthenticatedIdentity
from app.core.exceptions import AuthorizationError, NotFoundError
from app.crud import category as category_crud
from app.crud import job_post as job_post_crud
from app.models.job_post import JobPost
from app.schemas.job_post import JobPostRequest

logger = logging.getLogger(__name__)


def get_job_post(db: Session, job_post_id: int) -> JobPost:
    job_post = job_post_crud.get_by_id(db, job_post_id)
    if job_post is None:
        raise NotFoundError(f"Job not found with id: {job_post_id}")
    return job_post


def _check_category(db: Session, job_data: JobPostRequest) -> None:
    if job_data.category_id is not None and category_crud.get_by_id(db, job_data.category_id) is None:
        raise NotFoundError(f"Category not found with id: {job_data.category_id}")


def _get_owned_job_post(db: Session, job_post_id: int, employer: AuthenticatedIdentity) -> JobPost:
    job_post = get_job_post(db, job_post_id)
    if job_post.employer_id != employer.id:
        logger.warning(f"Employer {employer.email} tried to modify job {job_post_id} owned by user {job_post.employer_id}")
        raise AuthorizationError("You can only modify your own job postings")
    return job_post


def create_job_post(db: Session, job_data: JobPostRequest, employer: AuthenticatedIdentity) -> JobPost:
    _check_category(db, job_data)
    job_post = job_post_crud.create(db, job_data, employer_id=employer.id)
    logger.info(f"Created job {job_post.id}: {job_post.title} by employer {employer.email}")
    return job_post


def update_job_post(
    db: Session,
    job_post_id: int,
    job_data: JobPostRequest,
    employer: AuthenticatedIdentity
) -> JobPost:
    """
    Replace a job posting's editable fields.

    Raises:
        NotFoundError: Job posting (or referenced category) does not exist
        AuthorizationError: Caller does not own the job posting
    """
    job_post = _get_owned_job_post(db, job_post_id, employer)
    _check_category(db, job_data)
    job_post = job_post_crud.update(db, job_post, job_data)
    logger.info(f"Updated job {job_post.id} by employer {employer.email}")
    return job_post


def delete_job_post(db: Session, job_post_id: int, employer: AuthenticatedIdentity) -> None:
    """
    Delete a job posting.

    Raises:
        NotFoundError: Job posting does not exist
        AuthorizationError: Caller does not own the job posting
    """
    job_post = _get_owned_job_post(db, job_post_id, employer)
    job_post_crud.delete(db, job_post)
    logger.info(f"Deleted job {job_post_id} by employer {employer.email}")
