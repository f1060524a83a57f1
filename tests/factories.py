"""
Record builders and in-test fakes for the MongoDB services.
"""

from typing import Dict, Iterable, List, Optional

from careerguide.core.errors import NotFoundError, TransientStoreError
from careerguide.schemas.schemas import (
    Certificate, Job, JobRequirements, Notification, QualifiedStudent,
    Student, Transcript, WorkExperience
)


# ============================================================
# RECORD BUILDERS
# ============================================================

def make_student(
    student_id: str,
    transcripts: int = 1,
    certificates: int = 0,
    experience_months: Iterable[int] = (),
    qualifications: Iterable[str] = ()
) -> Student:
    return Student(
        student_id=student_id,
        transcripts=[Transcript(program=f"program-{i}") for i in range(transcripts)],
        certificates=[Certificate(name=f"cert-{i}") for i in range(certificates)],
        work_experience=[WorkExperience(duration_months=m) for m in experience_months],
        qualifications=list(qualifications)
    )


def make_job(
    job_id: str = "job-1",
    company_id: str = "company-1",
    min_certificates: Optional[int] = None,
    min_experience: Optional[int] = None,
    qualifications: Iterable[str] = (),
    title: str = "Junior Developer"
) -> Job:
    return Job(
        job_id=job_id,
        company_id=company_id,
        title=title,
        requirements=JobRequirements(
            min_certificates=min_certificates,
            min_experience=min_experience
        ),
        qualifications=list(qualifications)
    )


# ============================================================
# IN-TEST SERVICE FAKES (same methods as services/mongo_service.py)
# ============================================================

class FakeStudentProfileService:
    def __init__(self, students: List[Student], fail_scan: bool = False):
        self.students = students
        self.fail_scan = fail_scan

    def list_all(self) -> List[Student]:
        if self.fail_scan:
            raise TransientStoreError("MongoDB student scan failed")
        return list(self.students)

    def get(self, student_id: str) -> Student:
        for student in self.students:
            if student.student_id == student_id:
                return student
        raise NotFoundError("Student", student_id)

    def get_many(self, student_ids) -> Dict[str, Student]:
        wanted = set(student_ids)
        return {s.student_id: s for s in self.students if s.student_id in wanted}


class FakeJobService:
    def __init__(self, jobs: List[Job]):
        self.jobs = {job.job_id: job for job in jobs}
        self.updates = []

    def get(self, job_id: str) -> Job:
        if job_id not in self.jobs:
            raise NotFoundError("Job", job_id)
        return self.jobs[job_id]

    def list_active(self) -> List[Job]:
        return [job for job in self.jobs.values() if job.is_active]

    def update_match_results(self, job_id: str, qualified_students: List[QualifiedStudent]) -> None:
        job = self.get(job_id)
        self.updates.append((job_id, list(qualified_students)))
        self.jobs[job_id] = job.model_copy(update={
            "qualified_candidates": len(qualified_students),
            "qualified_students": list(qualified_students)
        })


class FakeNotificationService:
    def __init__(self, fail_for: Iterable[str] = ()):
        self.created: List[Notification] = []
        self.fail_for = set(fail_for)

    def create(self, notification: Notification) -> str:
        if notification.user_id in self.fail_for:
            raise TransientStoreError("MongoDB notification insert failed")
        self.created.append(notification)
        return f"notification-{len(self.created)}"


