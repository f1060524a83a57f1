"""
Match Scorer

Turns a (student, job) pair into a compatibility score between 0 and 100.
Only meaningful for students that already passed the eligibility checks.

Weights:
- Academic record   40  (binary: any transcript gives full credit)
- Certificates      20  (proportional to job.requirements.min_certificates)
- Experience        20  (proportional to job.requirements.min_experience)
- Qualifications    20  (share of job qualifications the student matches;
                        blank entries are ignored)

A component whose requirement is absent gets full credit. The score is a pure
function of its inputs, so identical inputs always give identical scores.
"""

from careerguide.schemas.schemas import Job, ScoreBreakdown, Student
from careerguide.services.eligibility import (
    normalize_qualifications, count_matched_qualifications, total_experience_months
)

ACADEMIC_WEIGHT = 40.0
CERTIFICATE_WEIGHT = 20.0
EXPERIENCE_WEIGHT = 20.0
QUALIFICATION_WEIGHT = 20.0


def academic_component(student: Student) -> float:
    # TODO: graduate by grade quality once transcripts carry parsed grades
    return ACADEMIC_WEIGHT if student.transcripts else 0.0


def certificate_component(student: Student, job: Job) -> float:
    required = job.requirements.min_certificates or 0
    if required == 0:
        return CERTIFICATE_WEIGHT
    ratio = len(student.certificates or []) / max(required, 1)
    return CERTIFICATE_WEIGHT * min(ratio, 1.0)


def experience_component(student: Student, job: Job) -> float:
    required = job.requirements.min_experience or 0
    if required == 0:
        return EXPERIENCE_WEIGHT
    return EXPERIENCE_WEIGHT * min(total_experience_months(student) / required, 1.0)


def qualification_component(student: Student, job: Job) -> float:
    wanted = normalize_qualifications(job.qualifications)
    if not wanted:
        return QUALIFICATION_WEIGHT
    matched = count_matched_qualifications(student.qualifications, wanted)
    return QUALIFICATION_WEIGHT * matched / len(wanted)


def score_breakdown(student: Student, job: Job) -> ScoreBreakdown:
    """Per-component scores; .total is the match score."""
    return ScoreBreakdown(
        academic=academic_component(student),
        certificates=certificate_component(student, job),
        experience=experience_component(student, job),
        qualifications=qualification_component(student, job)
    )


def score(student: Student, job: Job) -> float:
    """Match score in [0, 100]."""
    return score_breakdown(student, job).total


def describe_match(breakdown: ScoreBreakdown) -> str:
    """Generate human-readable match reason."""
    reasons = [f"Overall match: {int(breakdown.total)}%"]

    qual_pct = int(breakdown.qualifications / QUALIFICATION_WEIGHT * 100)
    if qual_pct >= 80:
        reasons.append(f"Excellent qualification match ({qual_pct}%)")
    elif qual_pct >= 50:
        reasons.append(f"Good qualification match ({qual_pct}%)")
    else:
        reasons.append(f"Partial qualification match ({qual_pct}%)")

    if breakdown.experience >= EXPERIENCE_WEIGHT:
        reasons.append("Experience requirements met")
    else:
        reasons.append("Experience below the preferred level")

    if breakdown.certificates < CERTIFICATE_WEIGHT:
        reasons.append("Fewer certificates than requested")

    return ". ".join(reasons) + "."
