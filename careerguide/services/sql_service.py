"""
SQL Service - repository operations for the admission ledger.

Tables:
1. courses       - seat capacity (total_seats / available_seats)
2. applications  - student course applications and their status

Repositories work on a caller-owned Session so several operations share one
transaction (see StoreClient.session_scope). Seat changes are conditional
UPDATEs: the WHERE clause re-checks the bound, so two concurrent admits can
never both take the last seat.
"""

import json
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import DateTime, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from careerguide.core.errors import ConflictError, NotFoundError
from careerguide.db.postgres import rows_to_dicts
from careerguide.schemas.schemas import (
    ACTIVE_APPLICATION_STATUSES, Application, ApplicationStatus, Course
)

APPLICATION_COLUMNS = """
    application_id, student_id, course_id, institution_id, status, notes,
    applied_at, updated_at
"""


def _lock_clause(session: Session) -> str:
    # Row locks exist on PostgreSQL; SQLite serializes writers instead
    return " FOR UPDATE" if session.get_bind().dialect.name == "postgresql" else ""


def _row_to_course(row: dict) -> Course:
    row = dict(row)
    row["requirements"] = json.loads(row.get("requirements") or "[]")
    return Course(**row)


# ============================================================
# COURSES TABLE
# ============================================================

class CourseRepository:
    """Seat bookkeeping for courses."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        institution_id: str,
        name: str,
        total_seats: int,
        requirements: Optional[List[str]] = None,
        course_id: Optional[str] = None
    ) -> Course:
        """Insert a course with every seat available."""
        course_id = course_id or uuid4().hex
        self.session.execute(
            text("""
                INSERT INTO courses (course_id, institution_id, name, requirements,
                    total_seats, available_seats)
                VALUES (:cid, :iid, :name, :reqs, :seats, :seats)
            """),
            {
                "cid": course_id, "iid": institution_id, "name": name,
                "reqs": json.dumps(requirements or []), "seats": total_seats
            }
        )
        return self.get(course_id)

    def get(self, course_id: str) -> Course:
        result = self.session.execute(
            text("""
                SELECT course_id, institution_id, name, requirements, total_seats, available_seats
                FROM courses WHERE course_id = :cid
            """),
            {"cid": course_id}
        )
        rows = rows_to_dicts(result)
        if not rows:
            raise NotFoundError("Course", course_id)
        return _row_to_course(rows[0])

    def reserve_seat(self, course_id: str) -> bool:
        """
        Take one seat. Returns False when the course is full.
        Raises NotFoundError when the course does not exist.
        """
        result = self.session.execute(
            text("""
                UPDATE courses
                SET available_seats = available_seats - 1, updated_at = CURRENT_TIMESTAMP
                WHERE course_id = :cid AND available_seats > 0
            """),
            {"cid": course_id}
        )
        if result.rowcount == 1:
            return True
        self.get(course_id)
        return False

    def release_seat(self, course_id: str) -> bool:
        """
        Give one seat back. Returns False when the course is already at
        total_seats (nothing to release).
        """
        result = self.session.execute(
            text("""
                UPDATE courses
                SET available_seats = available_seats + 1, updated_at = CURRENT_TIMESTAMP
                WHERE course_id = :cid AND available_seats < total_seats
            """),
            {"cid": course_id}
        )
        if result.rowcount == 1:
            return True
        self.get(course_id)
        return False


# ============================================================
# APPLICATIONS TABLE
# ============================================================

class ApplicationRepository:
    """Course applications and their status."""

    def __init__(self, session: Session):
        self.session = session

    def _select(self, where: str, params: dict, lock: bool = False) -> List[Application]:
        sql = f"SELECT {APPLICATION_COLUMNS} FROM applications WHERE {where}"
        if lock:
            sql += _lock_clause(self.session)
        result = self.session.execute(
            text(sql).columns(applied_at=DateTime, updated_at=DateTime),
            params
        )
        return [Application(**row) for row in rows_to_dicts(result)]

    def create(
        self,
        student_id: str,
        course_id: str,
        institution_id: str,
        application_id: Optional[str] = None
    ) -> Application:
        """Insert a pending application."""
        application_id = application_id or uuid4().hex
        self.session.execute(
            text("""
                INSERT INTO applications (application_id, student_id, course_id, institution_id, status)
                VALUES (:aid, :sid, :cid, :iid, 'pending')
            """),
            {"aid": application_id, "sid": student_id, "cid": course_id, "iid": institution_id}
        )
        return self.get(application_id)

    def get(self, application_id: str, for_update: bool = False) -> Application:
        """Fetch one application; for_update locks the row until commit."""
        rows = self._select("application_id = :aid", {"aid": application_id}, lock=for_update)
        if not rows:
            raise NotFoundError("Application", application_id)
        return rows[0]

    def list_admitted(
        self,
        institution_id: str,
        student_id: str,
        exclude_id: Optional[str] = None,
        for_update: bool = False
    ) -> List[Application]:
        """Admitted applications of a student at an institution, minus exclude_id."""
        where = "institution_id = :iid AND student_id = :sid AND status = 'admitted'"
        params = {"iid": institution_id, "sid": student_id}
        if exclude_id:
            where += " AND application_id <> :aid"
            params["aid"] = exclude_id
        return self._select(where, params, lock=for_update)

    def list_active_for_student(self, institution_id: str, student_id: str) -> List[Application]:
        """Applications at one institution that still hold a place (see ACTIVE_APPLICATION_STATUSES)."""
        statuses = ", ".join(f"'{s.value}'" for s in ACTIVE_APPLICATION_STATUSES)
        return self._select(
            f"institution_id = :iid AND student_id = :sid AND status IN ({statuses})",
            {"iid": institution_id, "sid": student_id}
        )

    def update_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        notes: Optional[str] = None
    ) -> None:
        """
        Set status (and notes when given).

        Raises ConflictError when the single-admission index rejects the write,
        i.e. a concurrent transaction admitted the same student first.
        """
        try:
            self.session.execute(
                text("""
                    UPDATE applications
                    SET status = :status, notes = COALESCE(:notes, notes),
                        updated_at = CURRENT_TIMESTAMP
                    WHERE application_id = :aid
                """),
                {"aid": application_id, "status": status.value, "notes": notes}
            )
        except IntegrityError as exc:
            raise ConflictError(
                "This student is already admitted to another program in your institution"
            ) from exc

    def count_by_status(self, institution_id: str) -> dict:
        result = self.session.execute(
            text("""
                SELECT status, COUNT(*) AS total FROM applications
                WHERE institution_id = :iid GROUP BY status
            """),
            {"iid": institution_id}
        )
        return {row["status"]: row["total"] for row in rows_to_dicts(result)}
