"""
Institution Routes

PUT /institutions/applications/{id}/status - Change application status (admit, reject, ...)
GET /institutions/stats - Application counts per status
"""

from fastapi import APIRouter, Depends

from careerguide.api.dependencies import get_admission_service, to_http_error
from careerguide.core.auth import get_current_institution
from careerguide.core.errors import CareerGuideError
from careerguide.schemas.schemas import (
    AdmissionStatsResponse, Application, ApplicationStatusUpdate
)
from careerguide.services.admission_service import AdmissionService

router = APIRouter(prefix="/institutions", tags=["Institutions"])


@router.put("/applications/{application_id}/status", response_model=Application)
def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    institution: dict = Depends(get_current_institution),
    admissions: AdmissionService = Depends(get_admission_service)
):
    """
    Update status of a course application.

    Admitting takes a seat and fails when the course is full or the student
    is already admitted to another course here. Moving an admitted
    application to any other status frees its seat.
    """
    try:
        return admissions.manage_application(
            application_id,
            update.status,
            institution["institution_id"],
            notes=update.notes
        )
    except CareerGuideError as exc:
        raise to_http_error(exc)


@router.get("/stats", response_model=AdmissionStatsResponse)
def get_institution_stats(
    institution: dict = Depends(get_current_institution),
    admissions: AdmissionService = Depends(get_admission_service)
):
    try:
        return admissions.get_admission_stats(institution["institution_id"])
    except CareerGuideError as exc:
        raise to_http_error(exc)
