"""
Job Routes

POST /jobs - Create job posting and match students (company only)
GET /jobs/{job_id}/candidates - Ranked qualified students (owning company only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from careerguide.api.dependencies import get_matching_service, get_store, to_http_error
from careerguide.core.auth import get_current_company
from careerguide.core.errors import CareerGuideError
from careerguide.core.logging import get_logger
from careerguide.db.store import StoreClient
from careerguide.schemas.schemas import JobCreate, JobPostedResponse, RankedCandidate
from careerguide.services.matching_service import JobMatchingService
from careerguide.services.mongo_service import JobService

logger = get_logger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobPostedResponse, status_code=201)
def create_job(
    job: JobCreate,
    company: dict = Depends(get_current_company),
    store: StoreClient = Depends(get_store),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """
    Create a new job posting, then notify and rank qualified students.

    The posting stands even if matching fails; the response says whether
    the ranking was stored.
    """
    try:
        created = JobService(store).create(company["company_id"], job)
    except CareerGuideError as exc:
        raise to_http_error(exc)

    try:
        result = matcher.match_students_to_job(created)
    except CareerGuideError as exc:
        logger.warning("Job %s posted but matching failed: %s", created.job_id, exc)
        return JobPostedResponse(
            job_id=created.job_id, title=created.title,
            qualified_candidates=0, notifications_sent=0, matching_completed=False
        )

    return JobPostedResponse(
        job_id=created.job_id, title=created.title,
        qualified_candidates=result.qualified_candidates,
        notifications_sent=result.notifications_sent,
        matching_completed=True
    )


@router.get("/{job_id}/candidates", response_model=List[RankedCandidate])
def get_job_candidates(
    job_id: str,
    limit: Optional[int] = Query(None, ge=1, le=200),
    company: dict = Depends(get_current_company),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """Qualified students for a job, best match first, with profiles."""
    try:
        return matcher.get_ranked_candidates(job_id, company["company_id"], limit)
    except CareerGuideError as exc:
        raise to_http_error(exc)
