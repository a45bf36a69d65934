"""
API Dependencies
Common dependencies used across API endpoints.

This module provides:
- User authentication (JWT validation)
- Household resolution for read and write paths

Dependencies are injected into FastAPI endpoints using Depends().
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from whereisit.core.exceptions import Unauthenticated
from whereisit.db.session import get_db
from whereisit.models.user import User
from whereisit.services.auth_service import verify_token, ensure_user
from whereisit.services.household_scope import ensure_user_household


# HTTP Bearer token scheme for JWT authentication
# auto_error is off so a missing header answers 401 like a bad token
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate current user from JWT token.

    This dependency:
    1. Extracts JWT token from Authorization header
    2. Validates token signature, expiration and type
    3. Loads the local user row, creating it on first access
    4. Returns User object

    Raises:
        Unauthenticated: If the token is missing, invalid or expired

    Usage in endpoint:
        @router.get("/household")
        def get_household(current_user: User = Depends(get_current_user)):
            return {"household_id": current_user.household_id}
    """
    if credentials is None:
        raise Unauthenticated()

    payload = verify_token(credentials.credentials, expected_type="access")
    if payload is None:
        raise Unauthenticated("Invalid or expired token")

    user = ensure_user(db, payload.sub, payload.email)
    db.commit()

    # Picked up by the error handler for context
    request.state.user = user
    return user


def get_household_id(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> int:
    """
    Household of the caller for write paths, provisioned on first use.

    Raises:
        ProvisioningFailed: If the default household cannot be created
    """
    household_id = ensure_user_household(db, current_user.id)
    db.commit()
    return household_id


def get_optional_household_id(
    current_user: User = Depends(get_current_user)
) -> Optional[int]:
    """Household of the caller for read and bulk paths; None when unbound."""
    return current_user.household_id
