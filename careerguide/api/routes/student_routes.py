"""
Student Routes

GET /students/me/job-matches - Active jobs the student qualifies for
POST /students/me/applications - Apply for a course
"""

from fastapi import APIRouter, Depends
from typing import List

from careerguide.api.dependencies import get_admission_service, get_matching_service, to_http_error
from careerguide.core.auth import get_current_student
from careerguide.core.errors import CareerGuideError
from careerguide.schemas.schemas import Application, ApplicationCreate, JobMatch
from careerguide.services.admission_service import AdmissionService
from careerguide.services.matching_service import JobMatchingService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/me/job-matches", response_model=List[JobMatch])
def get_job_matches(
    student: dict = Depends(get_current_student),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    try:
        return matcher.find_jobs_for_student(student["student_id"])
    except CareerGuideError as exc:
        raise to_http_error(exc)


@router.post("/me/applications", response_model=Application, status_code=201)
def apply_for_course(
    data: ApplicationCreate,
    student: dict = Depends(get_current_student),
    admissions: AdmissionService = Depends(get_admission_service)
):
    """Apply for a course. Creates a pending application; seats are taken on admission."""
    try:
        return admissions.submit_application(student["student_id"], data.course_id)
    except CareerGuideError as exc:
        raise to_http_error(exc)
