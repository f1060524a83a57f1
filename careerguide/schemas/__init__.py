"""
Schemas module - domain records and API request/response schemas.
"""

from careerguide.schemas.schemas import (
    ApplicationStatus,
    Student,
    Job,
    Course,
    Application,
    Notification,
)

__all__ = [
    "ApplicationStatus",
    "Student",
    "Job",
    "Course",
    "Application",
    "Notification",
]
