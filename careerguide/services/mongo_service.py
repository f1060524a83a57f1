"""
MongoDB Service - repository operations for document collections.

Collections in this database:
1. students       - Student profiles (read-only for matching)
2. jobs           - Job postings plus their ranked qualified students
3. notifications  - Notifications created by job matching

Every pymongo failure is re-raised as TransientStoreError so callers only
deal with domain errors.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterable, List
from uuid import uuid4

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from careerguide.core.errors import NotFoundError, TransientStoreError
from careerguide.core.logging import get_logger
from careerguide.db.mongodb import COLLECTIONS
from careerguide.db.store import StoreClient
from careerguide.schemas.schemas import (
    Job, JobCreate, Notification, QualifiedStudent, Student
)

logger = get_logger(__name__)


@contextmanager
def mongo_errors(operation: str):
    """Translate driver errors into TransientStoreError."""
    try:
        yield
    except PyMongoError as exc:
        logger.error("MongoDB %s failed: %s", operation, exc)
        raise TransientStoreError(f"MongoDB {operation} failed") from exc


# ============================================================
# STUDENTS COLLECTION
# Student profiles, owned by profile management
# ============================================================

class StudentProfileService:
    """
    Read-only access to student profiles.

    list_all() is a full collection scan. It is the single place to swap in
    an indexed pre-filter (e.g. by qualification keyword) when the student
    base outgrows a scan per job posting.
    """

    def __init__(self, store: StoreClient):
        self.collection: Collection = store.collection(COLLECTIONS["students"])

    def list_all(self) -> List[Student]:
        """Fetch every student profile."""
        with mongo_errors("student scan"):
            return [Student.model_validate(doc) for doc in self.collection.find({})]

    def get(self, student_id: str) -> Student:
        with mongo_errors("student lookup"):
            doc = self.collection.find_one({"_id": student_id})
        if doc is None:
            raise NotFoundError("Student", student_id)
        return Student.model_validate(doc)

    def get_many(self, student_ids: Iterable[str]) -> Dict[str, Student]:
        """Fetch several profiles at once, keyed by id. Missing ids are skipped."""
        ids = list(student_ids)
        if not ids:
            return {}
        with mongo_errors("student lookup"):
            docs = list(self.collection.find({"_id": {"$in": ids}}))
        students = [Student.model_validate(doc) for doc in docs]
        return {s.student_id: s for s in students}


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Job postings. The matching orchestrator is the only writer of
    qualified_candidates / qualified_students.
    """

    def __init__(self, store: StoreClient):
        self.collection: Collection = store.collection(COLLECTIONS["jobs"])

    def create(self, company_id: str, data: JobCreate) -> Job:
        """
        Insert a new job posting.

        Returns:
            The stored Job (no qualified students yet)
        """
        doc = {
            "_id": uuid4().hex,
            "company_id": company_id,
            "title": data.title,
            "description": data.description,
            "requirements": data.requirements.model_dump(),
            "qualifications": list(data.qualifications),
            "is_active": True,
            "posted_at": datetime.utcnow(),
            "qualified_candidates": 0,
            "qualified_students": []
        }
        with mongo_errors("job insert"):
            self.collection.insert_one(doc)
        return Job.model_validate(doc)

    def get(self, job_id: str) -> Job:
        with mongo_errors("job lookup"):
            doc = self.collection.find_one({"_id": job_id})
        if doc is None:
            raise NotFoundError("Job", job_id)
        return Job.model_validate(doc)

    def list_active(self) -> List[Job]:
        """All open postings, newest first."""
        with mongo_errors("job scan"):
            docs = list(self.collection.find({"is_active": True}).sort("posted_at", -1))
        return [Job.model_validate(doc) for doc in docs]

    def update_match_results(
        self,
        job_id: str,
        qualified_students: List[QualifiedStudent]
    ) -> None:
        """
        Replace the ranked list on a job (no merge with a previous run).
        """
        with mongo_errors("job update"):
            result = self.collection.update_one(
                {"_id": job_id},
                {"$set": {
                    "qualified_candidates": len(qualified_students),
                    "qualified_students": [q.model_dump() for q in qualified_students],
                    "matched_at": datetime.utcnow()
                }}
            )
        if result.matched_count == 0:
            raise NotFoundError("Job", job_id)


# ============================================================
# NOTIFICATIONS COLLECTION
# ============================================================

class NotificationService:
    """
    Creates notification records. Delivery (email, push) happens elsewhere;
    read flags are owned by notification management.
    """

    def __init__(self, store: StoreClient):
        self.collection: Collection = store.collection(COLLECTIONS["notifications"])

    def create(self, notification: Notification) -> str:
        """
        Insert a notification.

        Returns:
            MongoDB ObjectId as string
        """
        doc = notification.model_dump(mode="json")
        doc["created_at"] = notification.created_at
        with mongo_errors("notification insert"):
            result = self.collection.insert_one(doc)
        return str(result.inserted_id)
