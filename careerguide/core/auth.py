"""
Authentication Utility - JWT verification.

Tokens are issued by the platform's auth service; this module only verifies
them and exposes FastAPI dependencies for protected routes.

Expected claims: {"sub": "<user id>", "role": "student|company|institution|admin"}
"""

from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from careerguide.core.config import get_settings

# Bearer token extractor
bearer_scheme = HTTPBearer()


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise credentials_exception

    return {"user_id": str(user_id), "role": role}


def _require_role(user: dict, role: str, detail: str) -> dict:
    if user["role"] != role:
        raise HTTPException(status_code=403, detail=detail)
    # Account ids double as profile ids (student_id / company_id / institution_id)
    user[f"{role}_id"] = user["user_id"]
    return user


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require student role and expose student_id."""
    return _require_role(user, "student", "Students only")


async def get_current_company(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require company role and expose company_id."""
    return _require_role(user, "company", "Companies only")


async def get_current_institution(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require institution role and expose institution_id."""
    return _require_role(user, "institution", "Institutions only")
