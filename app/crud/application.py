"""
CRUD operations for job Applications.
"""

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from app.models.application import Application, ApplicationStatus


def exists_by_job_seeker_and_job_post(db: Session, job_seeker_id: int, job_post_id: int) -> bool:
    """Check whether the job seeker already applied to the job posting."""
    return db.query(Application.id).filter(
        Application.job_seeker_id == job_seeker_id,
        Application.job_post_id == job_post_id
    ).first() is not None


def create(
    db: Session,
    job_seeker_id: int,
    job_post_id: int,
    status: ApplicationStatus = ApplicationStatus.PENDING,
    cover_letter: Optional[str] = None
) -> Application:
    """
    Persist a new application.

    Raises:
        sqlalchemy.exc.IntegrityError: If the (job seeker, job post) pair already exists
    """
    application = Application(
        job_seeker_id=job_seeker_id,
        job_post_id=job_post_id,
        status=status.value,
        cover_letter=cover_letter
    )

    db.add(application)
    db.commit()
    db.refresh(application)

    return application


def get_page_for_job_seeker(
    db: Session,
    job_seeker_id: int,
    page: int = 0,
    size: int = 10
) -> Tuple[List[Application], int]:
    """
    Retrieve one page of a job seeker's applications, newest first.

    Returns:
        (applications on the page, total applications for the job seeker)
    """
    query = db.query(Application).filter(Application.job_seeker_id == job_seeker_id)
    total = query.count()
    applications = query.order_by(Application.id.desc()).offset(page * size).limit(size).all()
    return applications, total
