"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from careerguide.core.config import Settings
from careerguide.db.postgres import init_schema
from careerguide.db.store import StoreClient


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(ranked_candidates_limit=50, max_active_applications_per_institution=2)


@pytest.fixture
def sql_engine(tmp_path):
    """SQLite file database with the admission schema."""
    # routes run in a threadpool, so connections cross threads
    engine = create_engine(
        f"sqlite:///{tmp_path / 'admissions.db'}",
        connect_args={"check_same_thread": False}
    )
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(sql_engine) -> StoreClient:
    """StoreClient over SQLite; the Mongo side is a MagicMock."""
    return StoreClient(engine=sql_engine, mongo_db=MagicMock())
