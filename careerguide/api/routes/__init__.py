"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from careerguide.api.routes.job_routes import router as job_router
from careerguide.api.routes.student_routes import router as student_router
from careerguide.api.routes.institution_routes import router as institution_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(job_router)
api_router.include_router(student_router)
api_router.include_router(institution_router)
