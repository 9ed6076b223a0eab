from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.authentication import AuthenticatedIdentity
from app.core.config import settings
from app.core.database import get_db
from app.core.deps import PolicyEnforcedRoute, require_identity
from app.crud import application as application_crud
from app.schemas.application import ApplicationResponse
from app.schemas.common import Page

router = APIRouter(prefix="/applications", tags=["Applications"], route_class=PolicyEnforcedRoute)


@router.get("", response_model=Page[ApplicationResponse])
def list_my_applications(
    page: int = Query(0, ge=0, le=settings.MAX_PAGE_NUMBER),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    job_seeker: AuthenticatedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """List the calling job seeker's applications, newest first."""
    applications, total = application_crud.get_page_for_job_seeker(db, job_seeker.id, page=page, size=size)
    return Page[ApplicationResponse].build(
        content=[ApplicationResponse.model_validate(a) for a in applications],
        page=page,
        size=size,
        total_elements=total
    )
