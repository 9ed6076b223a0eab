from pydantic import BaseModel, Field
from typing import Optional

NOT_SPECIFIED_LOCATION = "Not_Specified"
NOT_SPECIFIED_CATEGORY = "Not Specified"
UNKNOWN_EMPLOYER = "Unknown"


class JobPostRequest(BaseModel):
    """Schema for creating or replacing a job posting"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: Optional[str] = None
    skills: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    category_id: Optional[int] = None


class JobPostResponse(BaseModel):
    """
    Public view of a job posting.

    Employer and category are flattened into display fields, with
    placeholders when they are missing.
    """
    id: int
    title: str
    description: str
    location: str = NOT_SPECIFIED_LOCATION
    skills: Optional[str] = None
    salary: Optional[float] = None
    employer_name: str = UNKNOWN_EMPLOYER
    category_id: Optional[int] = None
    category_name: str = NOT_SPECIFIED_CATEGORY
    category_description: str = NOT_SPECIFIED_CATEGORY

    @classmethod
    def from_model(cls, job_post) -> "JobPostResponse":
        employer = job_post.employer
        category = job_post.category
        return cls(
            id=job_post.id,
            title=job_post.title,
            description=job_post.description,
            location=job_post.location or NOT_SPECIFIED_LOCATION,
            skills=job_post.skills,
            salary=job_post.salary,
            employer_name=employer.username if employer is not None else UNKNOWN_EMPLOYER,
            category_id=category.id if category is not None else None,
            category_name=category.name if category is not None else NOT_SPECIFIED_CATEGORY,
            category_description=(category.description or NOT_SPECIFIED_CATEGORY) if category is not None else NOT_SPECIFIED_CATEGORY,
        )
