"""
Authentication Schemas
Decoded bearer token contents.
"""

from pydantic import BaseModel
from typing import Optional


class TokenPayload(BaseModel):
    """
    Claims carried by an access token.

    Fields:
        sub: External user id
        email: Email reported by the identity provider, if any
        exp: Expiration timestamp
        type: Token type, always "access"
    """
    sub: str
    email: Optional[str] = None
    exp: int
    type: str
