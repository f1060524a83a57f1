"""
Store client - the one handle to both datastores.

Built once at startup (see careerguide.main.create_app) and passed to every
service. There are no module-level connections.
"""
from contextlib import contextmanager
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from careerguide.core.config import Settings
from careerguide.core.errors import TransientStoreError
from careerguide.core.logging import get_logger
from careerguide.db.mongodb import create_mongo_client, init_mongo_indexes, test_mongo_connection
from careerguide.db.postgres import create_sql_engine, init_schema, test_postgres_connection

logger = get_logger(__name__)


class StoreClient:
    """
    Owns the SQLAlchemy engine (admission ledger) and the MongoDB database
    (profiles, jobs, notifications).
    """

    def __init__(
        self,
        engine: Engine,
        mongo_db: Database,
        mongo_client: Optional[MongoClient] = None
    ):
        self.engine = engine
        self.session_factory = sessionmaker(autoflush=False, bind=engine)
        self.mongo_db = mongo_db
        self.mongo_client = mongo_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "StoreClient":
        client = create_mongo_client(settings)
        return cls(
            engine=create_sql_engine(settings),
            mongo_db=client[settings.mongodb_db],
            mongo_client=client
        )

    @contextmanager
    def session_scope(self):
        """
        One SQL transaction. Commits on success, rolls back on any error.
        Driver errors surface as TransientStoreError.

        Usage:
            with store.session_scope() as session:
                session.execute(text("SELECT 1"))
        """
        session: Session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("SQL transaction rolled back: %s", exc)
            raise TransientStoreError(f"Database operation failed: {exc.__class__.__name__}") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def collection(self, name: str) -> Collection:
        return self.mongo_db[name]

    def initialize(self) -> None:
        """Create SQL schema and Mongo indexes."""
        init_schema(self.engine)
        init_mongo_indexes(self.mongo_db)

    def health(self) -> dict:
        mongo_ok = self.mongo_client is not None and test_mongo_connection(self.mongo_client)
        return {
            "postgres": "connected" if test_postgres_connection(self.engine) else "disconnected",
            "mongodb": "connected" if mongo_ok else "disconnected"
        }

    def close(self) -> None:
        self.engine.dispose()
        if self.mongo_client is not None:
            self.mongo_client.close()
