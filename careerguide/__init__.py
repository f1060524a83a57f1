"""
Career Guidance Platform - Matching & Admission Engine

Architecture:
- MongoDB: Document records (student profiles, jobs, notifications)
- PostgreSQL: Transactional admission ledger (courses, applications)
- Matching: Eligibility pipeline + weighted score, no AI involved
"""

__version__ = "1.0.0"
