"""
Job application submission.

A job seeker may apply to a posting at most once. The existence check gives
a clean 409 in the normal case; the database unique constraint catches the
race where two identical submissions pass the check at the same time.
"""

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.authentication import AuthenticatedIdentity
from app.core.exceptions import ConflictError, NotFoundError
from app.crud import application as application_crud
from app.crud import job_post as job_post_crud
from app.models.application import Application, ApplicationStatus
from app.schemas.application import ApplicationCreateRequest

logger = logging.getLogger(__name__)

DUPLICATE_APPLICATION_MESSAGE = "You have already applied for this job"


def submit_application(
    db: Session,
    job_post_id: int,
    job_seeker: AuthenticatedIdentity,
    request: ApplicationCreateRequest
) -> Application:
    """
    Apply to a job posting on behalf of the caller.

    Steps:
    1. Resolve the job posting (404 if absent)
    2. Reject a second application for the same (job seeker, job post) pair (409)
    3. Default the status to PENDING
    4. Persist

    Raises:
        NotFoundError: Job posting does not exist
        ConflictError: The caller already applied to this posting
    """
    job_post = job_post_crud.get_by_id(db, job_post_id)
    if job_post is None:
        raise NotFoundError(f"Job not found with id: {job_post_id}")

    if application_crud.exists_by_job_seeker_and_job_post(db, job_seeker.id, job_post.id):
        logger.info(f"Duplicate application by {job_seeker.email} for job {job_post.id}")
        raise ConflictError(DUPLICATE_APPLICATION_MESSAGE)

    status = request.status or ApplicationStatus.PENDING

    try:
        application = application_crud.create(
            db,
            job_seeker_id=job_seeker.id,
            job_post_id=job_post.id,
            status=status,
            cover_letter=request.cover_letter
        )
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent duplicate application by {job_seeker.email} for job {job_post.id}")
        raise ConflictError(DUPLICATE_APPLICATION_MESSAGE)

    logger.info(f"Application {application.id} submitted by {job_seeker.email} for job {job_post.id}")
    return application
