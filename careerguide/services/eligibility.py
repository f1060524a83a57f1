"""
Eligibility Evaluator

Decides whether a student is qualified for a job. The decision is an ordered
pipeline of independent checks; every check must pass and evaluation stops at
the first failure.

Checks (in order):
1. Academic completion  - student has at least one transcript
2. Certificates         - enough certificates for job.requirements.min_certificates
3. Experience           - enough work months for job.requirements.min_experience
4. Qualifications       - loose keyword overlap with job.qualifications

A requirement that is unset or zero is trivially met. Missing student data
never raises; it simply fails the requirement.
"""

from typing import Callable, Iterable, List, Sequence

from careerguide.schemas.schemas import Course, Job, Student

EligibilityCheck = Callable[[Student, Job], bool]


# ============================================================
# QUALIFICATION TEXT MATCHING
# ============================================================

def normalize_qualifications(values: Iterable[str]) -> List[str]:
    """Lowercase and drop blank entries (a blank string would match anything)."""
    return [v.strip().lower() for v in values or [] if v and v.strip()]


def qualifications_overlap(a: str, b: str) -> bool:
    """
    Bidirectional, case-insensitive "contains" match.

    Deliberately loose so free-text entries line up:
    "BSc Computer Science" matches "computer science" and vice versa.
    """
    a, b = a.strip().lower(), b.strip().lower()
    return a in b or b in a


def count_matched_qualifications(
    student_qualifications: Sequence[str],
    wanted: Sequence[str]
) -> int:
    """Number of wanted entries matched by at least one student qualification."""
    student_quals = normalize_qualifications(student_qualifications)
    return sum(
        1 for w in normalize_qualifications(wanted)
        if any(qualifications_overlap(s, w) for s in student_quals)
    )


def total_experience_months(student: Student) -> int:
    return sum(exp.duration_months or 0 for exp in student.work_experience or [])


# ============================================================
# CHECKS
# ============================================================

def has_completed_study(student: Student, job: Job) -> bool:
    # Simplified signal: any transcript means a completed academic record
    return bool(student.transcripts)


def meets_certificate_requirement(student: Student, job: Job) -> bool:
    required = job.requirements.min_certificates or 0
    if required == 0:
        return True
    return len(student.certificates or []) >= required


def meets_experience_requirement(student: Student, job: Job) -> bool:
    required = job.requirements.min_experience or 0
    if required == 0:
        return True
    return total_experience_months(student) >= required


def has_relevant_qualification(student: Student, job: Job) -> bool:
    if not normalize_qualifications(job.qualifications):
        return True
    return count_matched_qualifications(student.qualifications, job.qualifications) > 0


ELIGIBILITY_CHECKS = (
    has_completed_study,
    meets_certificate_requirement,
    meets_experience_requirement,
    has_relevant_qualification,
)


def is_qualified(
    student: Student,
    job: Job,
    checks: Sequence[EligibilityCheck] = ELIGIBILITY_CHECKS
) -> bool:
    """
    True when the student passes every check for this job.

    Args:
        student: Student profile
        job: Job posting
        checks: Ordered checks; pass an extended tuple to add rules
    """
    return all(check(student, job) for check in checks)


def is_qualified_for_course(student: Student, course: Course) -> bool:
    """
    Course entry check used when a student applies.
    No requirements means everyone qualifies; otherwise at least one
    requirement must overlap one of the student's qualifications.
    """
    if not normalize_qualifications(course.requirements):
        return True
    return count_matched_qualifications(student.qualifications, course.requirements) > 0
