"""
Job Matching Service

PURPOSE:
When a company posts a job, find every qualified student, rank them by match
score, store the ranking on the job and notify each qualified student.

HOW IT WORKS:
1. Scan all student profiles (MongoDB students)
2. Filter with the eligibility pipeline (services/eligibility.py)
3. Score qualified students (services/scoring.py)
4. Notify each qualified student (MongoDB notifications)
5. Stable-sort by score and replace job.qualified_students

FAILURE SEMANTICS:
- Scan / evaluation failure: logged, re-raised, ranking NOT stored
- Failure creating one notification: logged, loop continues
- Notifications already created are never rolled back
"""

from typing import List, Optional

from careerguide.core.config import Settings, get_settings
from careerguide.core.errors import AuthorizationError, TransientStoreError
from careerguide.core.logging import get_logger
from careerguide.db.store import StoreClient
from careerguide.schemas.schemas import (
    Job, JobMatch, MatchResult, Notification, NotificationType,
    QualifiedStudent, RankedCandidate, Student
)
from careerguide.services.eligibility import is_qualified
from careerguide.services.mongo_service import (
    JobService, NotificationService, StudentProfileService
)
from careerguide.services.scoring import describe_match, score, score_breakdown

logger = get_logger(__name__)


def rank_by_score(entries: List[QualifiedStudent]) -> List[QualifiedStudent]:
    """Descending by score. sorted() is stable: ties keep scan order."""
    return sorted(entries, key=lambda e: e.match_score, reverse=True)


def build_job_match_notification(student: Student, job: Job) -> Notification:
    return Notification(
        user_id=student.student_id,
        type=NotificationType.job_match,
        title="New Job Opportunity",
        message=f'A new job "{job.title}" matches your profile',
        job_id=job.job_id,
        company_id=job.company_id
    )


class JobMatchingService:
    """
    Matches students to jobs.

    Collaborators default to the MongoDB services built from the store;
    any of them can be injected (e.g. a pre-filtered student source).
    """

    def __init__(
        self,
        store: Optional[StoreClient] = None,
        students: Optional[StudentProfileService] = None,
        jobs: Optional[JobService] = None,
        notifications: Optional[NotificationService] = None,
        settings: Optional[Settings] = None
    ):
        self.students = students or StudentProfileService(store)
        self.jobs = jobs or JobService(store)
        self.notifications = notifications or NotificationService(store)
        self.settings = settings or get_settings()

    def match_students_to_job(self, job: Job) -> MatchResult:
        """
        Rank and notify qualified students for a freshly posted job.

        Args:
            job: The job as just persisted

        Returns:
            MatchResult with the stored ranking and notification counts

        Raises:
            TransientStoreError / NotFoundError: scan or final update failed
        """
        accumulator: List[QualifiedStudent] = []
        sent = failed = 0

        try:
            students = self.students.list_all()
            for student in students:
                if not is_qualified(student, job):
                    continue

                accumulator.append(QualifiedStudent(
                    student_id=student.student_id,
                    match_score=score(student, job)
                ))

                try:
                    self.notifications.create(build_job_match_notification(student, job))
                    sent += 1
                except TransientStoreError as exc:
                    failed += 1
                    logger.warning(
                        "Job %s: notification for student %s not created: %s",
                        job.job_id, student.student_id, exc
                    )
        except Exception:
            logger.exception("Job %s: matching aborted, ranking not stored", job.job_id)
            raise

        ranked = rank_by_score(accumulator)
        self.jobs.update_match_results(job.job_id, ranked)

        logger.info(
            "Job %s: scanned %d students, %d qualified, %d notified, %d notification failures",
            job.job_id, len(students), len(ranked), sent, failed
        )
        return MatchResult(
            job_id=job.job_id,
            qualified_candidates=len(ranked),
            qualified_students=ranked,
            notifications_sent=sent,
            notifications_failed=failed
        )

    def get_ranked_candidates(
        self,
        job_id: str,
        company_id: str,
        limit: Optional[int] = None
    ) -> List[RankedCandidate]:
        """
        Top qualified students for a job, with their profiles.
        Only the company that posted the job may see them.
        """
        job = self.jobs.get(job_id)
        if job.company_id != company_id:
            raise AuthorizationError("Not authorized to view candidates for this job")

        limit = limit or self.settings.ranked_candidates_limit
        top = job.qualified_students[:limit]
        profiles = self.students.get_many(q.student_id for q in top)

        return [
            RankedCandidate(
                rank=position,
                student_id=q.student_id,
                match_score=q.match_score,
                student=profiles.get(q.student_id)
            )
            for position, q in enumerate(top, start=1)
        ]

    def find_jobs_for_student(self, student_id: str) -> List[JobMatch]:
        """
        Active jobs the student qualifies for, best match first.
        Same eligibility and scoring as match_students_to_job, reversed.
        """
        student = self.students.get(student_id)
        matches = []
        for job in self.jobs.list_active():
            if not is_qualified(student, job):
                continue
            breakdown = score_breakdown(student, job)
            matches.append(JobMatch(
                job_id=job.job_id,
                company_id=job.company_id,
                title=job.title,
                match_score=breakdown.total,
                reason=describe_match(breakdown)
            ))
        matches.sort(key=lambda m: m.match_score, reverse=True)
        return matches
