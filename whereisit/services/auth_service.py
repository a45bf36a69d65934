"""
Authentication Service
Handles JWT token verification and the local mirror of external users.

Identity is owned by an external provider. This service:
- Verifies HS256 bearer tokens (signature, expiration, type)
- Issues access tokens for tooling and tests
- Creates the local user row the first time an identity is seen
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from whereisit.core.config import settings
from whereisit.models.user import User
from whereisit.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

# JWT Configuration
# Algorithm used for signing tokens (HS256 = HMAC with SHA-256)
ALGORITHM = "HS256"


# ============================================================================
# JWT Token Functions
# ============================================================================

def create_access_token(user_id: str, email: Optional[str] = None) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: External user id, stored as the token subject
        email: Optional email claim, used to match invitations

    Returns:
        Encoded JWT token string

    Example:
        token = create_access_token("user_2abc", "anna@example.com")
        # Use in header: Authorization: Bearer {token}
    """
    expire = datetime.now(timezone.utc) + timedelta(seconds=settings.JWT_EXPIRATION)

    payload = {
        "sub": user_id,
        "exp": expire,
        "type": "access"
    }
    if email:
        payload["email"] = email

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str, expected_type: str = "access") -> Optional[TokenPayload]:
    """
    Verify and decode a JWT token.

    Validates token signature, expiration, and type.
    Returns the token payload if valid, None otherwise.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        # Bad signature, expired, malformed
        return None

    user_id = payload.get("sub")
    token_type = payload.get("type")
    exp = payload.get("exp")

    if not user_id or not token_type or not exp:
        return None

    if token_type != expected_type:
        return None

    return TokenPayload(
        sub=user_id,
        email=payload.get("email"),
        exp=exp,
        type=token_type
    )


# ============================================================================
# User Mirror
# ============================================================================

def ensure_user(db: Session, user_id: str, email: Optional[str] = None) -> User:
    """
    Return the local user row, creating it on first access.

    The email is refreshed when the token carries a different one, so that
    invitations addressed to the new email can be matched.
    """
    user = db.query(User).filter(User.id == user_id).first()

    if user is None:
        user = User(id=user_id, email=email)
        db.add(user)
        db.flush()
        logger.info(f"Created local user {user_id}")
    elif email and user.email != email:
        user.email = email
        db.flush()

    return user
