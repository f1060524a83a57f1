"""
Career Guidance Platform - Matching & Admission API

FastAPI backend with:
- MongoDB for documents (student profiles, jobs, notifications)
- PostgreSQL for the admission ledger (courses, applications)
- JWT verification for company / institution / student callers

Run: uvicorn careerguide.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careerguide.api.routes import api_router
from careerguide.core.config import get_settings
from careerguide.core.logging import configure_logging, get_logger
from careerguide.db.store import StoreClient

logger = get_logger(__name__)


def create_app(store: Optional[StoreClient] = None) -> FastAPI:
    """
    Build the application around one StoreClient.

    Args:
        store: Pre-built store (tests); built from settings when omitted
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: create SQL schema and MongoDB indexes
        try:
            app.state.store.initialize()
        except Exception as e:
            logger.warning("Store initialization failed: %s", e)
        yield
        # Shutdown
        app.state.store.close()

    app = FastAPI(
        title="Career Guidance Platform",
        description="""
        Matching & admission engine of the career guidance platform.

        ## Features
        - **Job matching**: Eligibility checks + weighted match score, ranked per job
        - **Notifications**: One job_match notification per qualified student
        - **Admissions**: Seat-capacity and single-admission rules, applied atomically
        - **Stats**: Application counts per status for institutions
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store or StoreClient.from_settings(settings)
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        return {"status": "healthy", **app.state.store.health()}

    return app


app = create_app()
