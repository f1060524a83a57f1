"""
Shared route dependencies.

The StoreClient lives on app.state (built by create_app); services are
constructed per request around it.
"""

from fastapi import Depends, HTTPException, Request

from careerguide.core.errors import CareerGuideError
from careerguide.db.store import StoreClient
from careerguide.services.admission_service import AdmissionService
from careerguide.services.matching_service import JobMatchingService


def get_store(request: Request) -> StoreClient:
    return request.app.state.store


def get_matching_service(store: StoreClient = Depends(get_store)) -> JobMatchingService:
    return JobMatchingService(store)


def get_admission_service(store: StoreClient = Depends(get_store)) -> AdmissionService:
    return AdmissionService(store)


def to_http_error(exc: CareerGuideError) -> HTTPException:
    """404 / 403 / 409 / 503 depending on the error kind."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)
