"""
Database module - PostgreSQL and MongoDB connections behind one StoreClient.
"""
from careerguide.db.store import StoreClient
from careerguide.db.postgres import init_schema
from careerguide.db.mongodb import COLLECTIONS, init_mongo_indexes

__all__ = [
    "StoreClient",
    "init_schema",
    "COLLECTIONS",
    "init_mongo_indexes"
]
