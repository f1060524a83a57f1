"""
Admission Service

Governs course-application status changes made by institutions.

BUSINESS RULES:
- Only the institution that owns an application may change it
- A student holds at most one 'admitted' application per institution
- Admitting takes a seat; moving away from 'admitted' gives it back
- 0 <= available_seats <= total_seats at all times

Each transition is ONE SQL transaction: application row lock, duplicate
admission check, conditional seat update and status write either all commit
or all roll back. The partial unique index on applications catches a
concurrent double admission that slipped past the check.
"""

from typing import Optional

from careerguide.core.config import Settings, get_settings
from careerguide.core.errors import (
    AuthorizationError, CapacityError, ConflictError, IneligibleError
)
from careerguide.core.logging import get_logger
from careerguide.db.store import StoreClient
from careerguide.schemas.schemas import (
    AdmissionStatsResponse, Application, ApplicationStatus
)
from careerguide.services.eligibility import is_qualified_for_course
from careerguide.services.mongo_service import StudentProfileService
from careerguide.services.sql_service import ApplicationRepository, CourseRepository

logger = get_logger(__name__)


class AdmissionService:
    """Admission state machine plus application intake."""

    def __init__(
        self,
        store: StoreClient,
        students: Optional[StudentProfileService] = None,
        settings: Optional[Settings] = None
    ):
        self.store = store
        self.students = students or StudentProfileService(store)
        self.settings = settings or get_settings()

    def manage_application(
        self,
        application_id: str,
        new_status: ApplicationStatus,
        institution_id: str,
        notes: Optional[str] = None
    ) -> Application:
        """
        Move an application to new_status on behalf of an institution.

        Raises:
            NotFoundError: application (or its course) does not exist
            AuthorizationError: caller institution does not own the application
            ConflictError: student already admitted elsewhere at this institution
            CapacityError: no seats left on the course
            TransientStoreError: database failure, nothing was changed
        """
        new_status = ApplicationStatus(new_status)

        with self.store.session_scope() as session:
            applications = ApplicationRepository(session)
            courses = CourseRepository(session)

            application = applications.get(application_id, for_update=True)
            if application.institution_id != institution_id:
                raise AuthorizationError("Not authorized to manage this application")

            previous = application.status

            if new_status == ApplicationStatus.admitted and previous != ApplicationStatus.admitted:
                others = applications.list_admitted(
                    application.institution_id,
                    application.student_id,
                    exclude_id=application_id,
                    for_update=True
                )
                if others:
                    logger.info(
                        "Admission of %s rejected: student %s already admitted via %s",
                        application_id, application.student_id, others[0].application_id
                    )
                    raise ConflictError(
                        "This student is already admitted to another program in your institution. "
                        "Students cannot be admitted to multiple programs."
                    )

                if not courses.reserve_seat(application.course_id):
                    logger.info(
                        "Admission of %s rejected: course %s is full",
                        application_id, application.course_id
                    )
                    raise CapacityError("No available seats in this course. Cannot admit student.")

            elif new_status != ApplicationStatus.admitted and previous == ApplicationStatus.admitted:
                if not courses.release_seat(application.course_id):
                    logger.warning(
                        "Course %s already at total seats; no seat released for %s",
                        application.course_id, application_id
                    )

            applications.update_status(application_id, new_status, notes)
            updated = applications.get(application_id)

        logger.info(
            "Application %s: %s -> %s (institution %s)",
            application_id, previous.value, new_status.value, institution_id
        )
        return updated

    def submit_application(self, student_id: str, course_id: str) -> Application:
        """
        Student applies for a course. Creates a 'pending' application;
        seats are only taken on admission.

        Raises:
            NotFoundError: course or student profile missing
            IneligibleError: student does not meet the course requirements
            ConflictError: already applied to this course, or too many active
                applications at the institution
        """
        student = self.students.get(student_id)

        with self.store.session_scope() as session:
            applications = ApplicationRepository(session)
            course = CourseRepository(session).get(course_id)

            if not is_qualified_for_course(student, course):
                raise IneligibleError("You do not meet the course requirements")

            active = applications.list_active_for_student(course.institution_id, student_id)
            if any(a.course_id == course_id for a in active):
                raise ConflictError("You have already applied to this course")

            limit = self.settings.max_active_applications_per_institution
            if len(active) >= limit:
                raise ConflictError(f"You can only apply to maximum {limit} courses per institution")

            application = applications.create(student_id, course_id, course.institution_id)

        logger.info("Student %s applied for course %s (%s)", student_id, course_id, application.application_id)
        return application

    def get_admission_stats(self, institution_id: str) -> AdmissionStatsResponse:
        """Application counts per status for one institution."""
        with self.store.session_scope() as session:
            counts = ApplicationRepository(session).count_by_status(institution_id)

        by_status = {status.value: counts.get(status.value, 0) for status in ApplicationStatus}
        return AdmissionStatsResponse(
            institution_id=institution_id,
            total_applications=sum(by_status.values()),
            applications_by_status=by_status
        )
