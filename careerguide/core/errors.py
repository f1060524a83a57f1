"""
Domain errors raised by the matching and admission services.

Business outcomes (NotFound, Authorization, Conflict, Capacity) are reported
to the caller as-is and are never retried. TransientStoreError wraps driver
failures (PostgreSQL / MongoDB unreachable, timeouts, aborted transactions).
"""


class CareerGuideError(Exception):
    """Base class for every error the core raises."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CareerGuideError):
    """Referenced student, job, course or application does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class AuthorizationError(CareerGuideError):
    """Caller does not own the target record."""

    status_code = 403


class ConflictError(CareerGuideError):
    """Student already holds an active admission (or application) that blocks this one."""

    status_code = 409


class IneligibleError(ConflictError):
    """Student does not meet the course requirements."""


class CapacityError(CareerGuideError):
    """No seats left on the course."""

    status_code = 409


class TransientStoreError(CareerGuideError):
    """Datastore call failed (network, availability, aborted transaction)."""

    status_code = 503
