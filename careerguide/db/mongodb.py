"""
MongoDB Connection Utility

MongoDB stores:
- Student profiles (qualifications, certificates, work experience, transcripts)
- Job postings, including the ranked list of qualified students
- Notifications sent to students

WHY MongoDB for these?
- Profiles are nested, variable-length documents
- The ranked candidate list is written as one embedded array per job
- No joins needed: Each document is self-contained
"""
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from careerguide.core.config import Settings
from careerguide.core.logging import get_logger

logger = get_logger(__name__)


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "jobs": "jobs",
    "notifications": "notifications",
}


def create_mongo_client(settings: Settings) -> MongoClient:
    """
    Create a MongoDB client. Connection pooling is handled by pymongo and
    connecting is lazy, so this never blocks.
    """
    return MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        connectTimeoutMS=settings.mongodb_timeout_ms,
        socketTimeoutMS=settings.mongodb_timeout_ms,
    )


def test_mongo_connection(client: MongoClient) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    # Jobs: owner lookups and the active-jobs scan for student matching
    db[COLLECTIONS["jobs"]].create_index("company_id")
    db[COLLECTIONS["jobs"]].create_index([("is_active", ASCENDING), ("posted_at", DESCENDING)])

    # Notifications: a student's inbox, newest first
    db[COLLECTIONS["notifications"]].create_index([
        ("user_id", ASCENDING),
        ("created_at", DESCENDING)
    ])

    logger.info("MongoDB indexes created")
