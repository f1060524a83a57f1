#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify both datastores are reachable and the schema exists.
Usage: python scripts/check_connections.py [--init]
"""
import argparse

from careerguide.core.config import get_settings
from careerguide.core.logging import configure_logging
from careerguide.db.mongodb import test_mongo_connection
from careerguide.db.postgres import test_postgres_connection
from careerguide.db.store import StoreClient


def main():
    parser = argparse.ArgumentParser(description="Check datastore connections")
    parser.add_argument("--init", action="store_true", help="Create SQL schema and Mongo indexes")
    args = parser.parse_args()

    settings = get_settings()
    logger = configure_logging(settings.log_level)
    store = StoreClient.from_settings(settings)

    ok = True
    logger.info(
        "PostgreSQL: postgresql://%s:****@%s:%s/%s",
        settings.postgres_user, settings.postgres_host, settings.postgres_port, settings.postgres_db
    )
    if test_postgres_connection(store.engine):
        logger.info("PostgreSQL: CONNECTED")
    else:
        logger.error("PostgreSQL: FAILED")
        ok = False

    logger.info("MongoDB: %s (database %s)", settings.mongodb_uri, settings.mongodb_db)
    if test_mongo_connection(store.mongo_client):
        logger.info("MongoDB: CONNECTED")
    else:
        logger.error("MongoDB: FAILED")
        ok = False

    if ok and args.init:
        store.initialize()

    store.close()
    raise SystemExit(0 if ok else 1)


if __name__ == "__main__":
    main()
