"""
Tests for services/matching_service.py - job matching orchestration.
"""

import pytest

from careerguide.core.errors import AuthorizationError, NotFoundError, TransientStoreError
from careerguide.schemas.schemas import NotificationType, QualifiedStudent
from careerguide.services import matching_service
from careerguide.services.matching_service import JobMatchingService, rank_by_score
from tests.factories import (
    FakeJobService, FakeNotificationService, FakeStudentProfileService,
    make_job, make_student
)


def build_service(students, jobs, notifications=None, settings=None, fail_scan=False):
    return JobMatchingService(
        students=FakeStudentProfileService(students, fail_scan=fail_scan),
        jobs=FakeJobService(jobs),
        notifications=notifications or FakeNotificationService(),
        settings=settings
    )


@pytest.fixture
def job():
    return make_job(
        job_id="job-1", company_id="acme",
        min_certificates=2, min_experience=12, qualifications=["Computer Science", "Mathematics"]
    )


@pytest.fixture
def students():
    return [
        # qualified, partial qualification match: 40 + 20 + 20 + 10 = 90
        make_student("s-partial", certificates=2, experience_months=[6, 8], qualifications=["BSc Computer Science"]),
        # not qualified: no transcripts
        make_student("s-no-study", transcripts=0, certificates=5, experience_months=[48],
                     qualifications=["Computer Science"]),
        # qualified, full match: 100
        make_student("s-full", certificates=3, experience_months=[24],
                     qualifications=["Computer Science", "Applied Mathematics"]),
        # not qualified: too little experience
        make_student("s-junior", certificates=2, experience_months=[3], qualifications=["Mathematics"]),
        # qualified, same score as s-partial: ties keep scan order
        make_student("s-partial-2", certificates=2, experience_months=[12], qualifications=["Mathematics"]),
    ]


class TestMatchStudentsToJob:

    def test_ranks_qualified_students_descending(self, job, students):
        service = build_service(students, [job])

        result = service.match_students_to_job(job)

        ids = [q.student_id for q in result.qualified_students]
        assert ids == ["s-full", "s-partial", "s-partial-2"]
        scores = [q.match_score for q in result.qualified_students]
        assert scores == sorted(scores, reverse=True)
        assert result.qualified_candidates == len(result.qualified_students) == 3

    def test_ranking_is_persisted_on_job(self, job, students):
        service = build_service(students, [job])

        service.match_students_to_job(job)

        stored = service.jobs.get("job-1")
        assert stored.qualified_candidates == len(stored.qualified_students) == 3
        assert stored.qualified_students[0].student_id == "s-full"
        assert stored.qualified_students[0].match_score == pytest.approx(100.0)

    def test_one_notification_per_qualified_student(self, job, students):
        notifications = FakeNotificationService()
        service = build_service(students, [job], notifications=notifications)

        result = service.match_students_to_job(job)

        assert result.notifications_sent == 3
        assert {n.user_id for n in notifications.created} == {"s-full", "s-partial", "s-partial-2"}
        for n in notifications.created:
            assert n.type == NotificationType.job_match
            assert n.job_id == "job-1"
            assert n.company_id == "acme"
            assert n.is_read is False

    def test_rerun_replaces_previous_ranking(self, job, students):
        service = build_service(students, [job])
        service.match_students_to_job(job)

        service.students.students = students[:1]
        service.match_students_to_job(job)

        stored = service.jobs.get("job-1")
        assert [q.student_id for q in stored.qualified_students] == ["s-partial"]
        assert stored.qualified_candidates == 1

    def test_no_students(self, job):
        service = build_service([], [job])

        result = service.match_students_to_job(job)

        assert result.qualified_candidates == 0
        assert service.jobs.get("job-1").qualified_students == []

    def test_notification_failure_is_logged_and_loop_continues(self, job, students):
        notifications = FakeNotificationService(fail_for=["s-partial"])
        service = build_service(students, [job], notifications=notifications)

        result = service.match_students_to_job(job)

        assert result.notifications_failed == 1
        assert result.notifications_sent == 2
        # failed notification does not remove the student from the ranking
        assert result.qualified_candidates == 3
        assert service.jobs.updates

    def test_scan_failure_stores_nothing(self, job, students):
        service = build_service(students, [job], fail_scan=True)

        with pytest.raises(TransientStoreError):
            service.match_students_to_job(job)

        assert service.jobs.updates == []

    def test_evaluation_failure_stores_nothing_but_keeps_sent_notifications(self, job, students, monkeypatch):
        notifications = FakeNotificationService()
        service = build_service(students, [job], notifications=notifications)
        real_check = matching_service.is_qualified

        def corrupt_profile(student, job):
            if student.student_id == "s-junior":
                raise ValueError("corrupt profile")
            return real_check(student, job)

        monkeypatch.setattr(matching_service, "is_qualified", corrupt_profile)

        with pytest.raises(ValueError):
            service.match_students_to_job(job)

        assert service.jobs.updates == []
        # notifications created before the failure stay
        assert [n.user_id for n in notifications.created] == ["s-partial", "s-full"]


class TestRankByScore:

    def test_stable_for_ties(self):
        entries = [
            QualifiedStudent(student_id="a", match_score=80),
            QualifiedStudent(student_id="b", match_score=90),
            QualifiedStudent(student_id="c", match_score=80),
        ]
        assert [e.student_id for e in rank_by_score(entries)] == ["b", "a", "c"]


class TestRankedCandidates:

    def test_owner_sees_top_candidates_with_profiles(self, job, students, settings):
        service = build_service(students, [job], settings=settings)
        service.match_students_to_job(job)

        candidates = service.get_ranked_candidates("job-1", "acme", limit=2)

        assert [c.rank for c in candidates] == [1, 2]
        assert [c.student_id for c in candidates] == ["s-full", "s-partial"]
        assert candidates[0].student.student_id == "s-full"

    def test_missing_profile_reported_as_none(self, job, students, settings):
        service = build_service(students, [job], settings=settings)
        service.match_students_to_job(job)
        service.students.students = [s for s in students if s.student_id != "s-full"]

        candidates = service.get_ranked_candidates("job-1", "acme")

        assert candidates[0].student_id == "s-full"
        assert candidates[0].student is None

    def test_other_company_is_rejected(self, job, students, settings):
        service = build_service(students, [job], settings=settings)

        with pytest.raises(AuthorizationError):
            service.get_ranked_candidates("job-1", "globex")

    def test_unknown_job(self, settings):
        service = build_service([], [], settings=settings)

        with pytest.raises(NotFoundError):
            service.get_ranked_candidates("nope", "acme")


class TestFindJobsForStudent:

    def test_returns_qualified_active_jobs_best_first(self, settings):
        student = make_student("s1", certificates=1, experience_months=[6], qualifications=["Accounting"])
        jobs = [
            make_job("j-acc", qualifications=["Accounting", "Finance"]),  # 40+20+20+10 = 90
            make_job("j-open"),                                   # 100
            make_job("j-law", qualifications=["Law"]),            # not qualified
            make_job("j-closed").model_copy(update={"is_active": False}),
        ]
        service = build_service([student], jobs, settings=settings)

        matches = service.find_jobs_for_student("s1")

        assert [m.job_id for m in matches] == ["j-open", "j-acc"]
        assert matches[0].match_score == pytest.approx(100.0)
        assert matches[1].reason.startswith("Overall match: 90%")

    def test_unknown_student(self, settings):
        service = build_service([], [make_job()], settings=settings)

        with pytest.raises(NotFoundError):
            service.find_jobs_for_student("ghost")
