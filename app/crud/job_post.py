"""
CRUD operations for JobPost model.

Implements the Repository pattern to encapsulate all database operations
for job postings, providing a clean interface for the service layer.
Ownership rules live in app.services.job_post_service, not here.
"""

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload
from app.models.job_post import JobPost
from app.schemas.job_post import JobPostRequest


def create(db: Session, job_data: JobPostRequest, employer_id: int) -> JobPost:
    """
    Create a new job posting owned by the given employer.

    Args:
        db: Database session
        job_data: Validated job posting data
        employer_id: Owning employer's user id

    Returns:
        Created JobPost instance with id
    """
    job_post = JobPost(
        title=job_data.title,
        description=job_data.description,
        location=job_data.location,
        skills=job_data.skills,
        salary=job_data.salary,
        category_id=job_data.category_id,
        employer_id=employer_id
    )

    db.add(job_post)
    db.commit()
    db.refresh(job_post)

    return job_post


def get_by_id(db: Session, job_post_id: int) -> Optional[JobPost]:
    """
    Retrieve a job posting by its ID, with employer and category loaded.

    Returns:
        JobPost instance if found, None otherwise
    """
    return (
        db.query(JobPost)
        .options(joinedload(JobPost.employer), joinedload(JobPost.category))
        .filter(JobPost.id == job_post_id)
        .first()
    )


def get_page(db: Session, page: int = 0, size: int = 10) -> Tuple[List[JobPost], int]:
    """
    Retrieve one page of job postings, newest first.

    Args:
        db: Database session
        page: Zero-based page index
        size: Page size

    Returns:
        (job postings on the page, total number of postings)
    """
    total = db.query(JobPost).count()
    job_posts = (
        db.query(JobPost)
        .options(joinedload(JobPost.employer), joinedload(JobPost.category))
        .order_by(JobPost.id.desc())
        .offset(page * size)
        .limit(size)
        .all()
    )
    return job_posts, total


def update(db: Session, job_post: JobPost, job_data: JobPostRequest) -> JobPost:
    """
    Replace the editable fields of a job posting.

    Returns:
        Updated JobPost instance
    """
    job_post.title = job_data.title
    job_post.description = job_data.description
    job_post.location = job_data.location
    job_post.skills = job_data.skills
    job_post.salary = job_data.salary
    job_post.category_id = job_data.category_id

    db.commit()
    db.refresh(job_post)

    return job_post


def delete(db: Session, job_post: JobPost) -> None:
    """Delete a job posting and its applications."""
    db.delete(job_post)
    db.commit()
