"""
PostgreSQL Connection Utility

PostgreSQL stores the admission ledger:
- courses: seat capacity per course (total / available)
- applications: one row per student course application with its status

WHY PostgreSQL for these?
- Seat counters and admissions must change atomically (one transaction)
- CHECK constraint keeps 0 <= available_seats <= total_seats
- Partial unique index allows at most one 'admitted' row per
  (institution_id, student_id)

The DDL below is plain SQL that also runs on SQLite (used by the test suite).
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from careerguide.core.config import Settings
from careerguide.core.logging import get_logger

logger = get_logger(__name__)


def create_sql_engine(settings: Settings) -> Engine:
    """
    Create engine with connection pool.
    pool_size: connections kept ready
    max_overflow: extra connections allowed under load
    """
    return create_engine(
        settings.postgres_url,
        pool_size=settings.postgres_pool_size,
        max_overflow=settings.postgres_max_overflow,
        pool_pre_ping=True,
        connect_args={"connect_timeout": settings.postgres_connect_timeout},
        echo=settings.sql_echo  # Log SQL queries when enabled
    )


SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS courses (
        course_id VARCHAR(64) PRIMARY KEY,
        institution_id VARCHAR(64) NOT NULL,
        name VARCHAR(200) NOT NULL DEFAULT '',
        requirements TEXT NOT NULL DEFAULT '[]',
        total_seats INTEGER NOT NULL CHECK (total_seats > 0),
        available_seats INTEGER NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        CONSTRAINT ck_courses_seat_bounds
            CHECK (available_seats >= 0 AND available_seats <= total_seats)
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_courses_institution ON courses (institution_id)",
    """
    CREATE TABLE IF NOT EXISTS applications (
        application_id VARCHAR(64) PRIMARY KEY,
        student_id VARCHAR(64) NOT NULL,
        course_id VARCHAR(64) NOT NULL REFERENCES courses (course_id),
        institution_id VARCHAR(64) NOT NULL,
        status VARCHAR(20) NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'admitted', 'rejected', 'waiting_list', 'withdrawn')),
        notes TEXT,
        applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_applications_institution_student
        ON applications (institution_id, student_id)
    """,
    "CREATE INDEX IF NOT EXISTS ix_applications_course ON applications (course_id)",
    # One active admission per student per institution
    """
    CREATE UNIQUE INDEX IF NOT EXISTS ux_applications_single_admission
        ON applications (institution_id, student_id)
        WHERE status = 'admitted'
    """,
]


def init_schema(engine: Engine) -> None:
    """Create tables and indexes. Idempotent; call once during startup."""
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info("SQL schema ready (%s)", engine.dialect.name)


def test_postgres_connection(engine: Engine) -> bool:
    """
    Test if PostgreSQL is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1 as test")).fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("PostgreSQL connection failed: %s", e)
        return False


def rows_to_dicts(result) -> list:
    """Convert a result's rows to a list of dicts."""
    columns = list(result.keys())
    return [dict(zip(columns, row)) for row in result.fetchall()]
