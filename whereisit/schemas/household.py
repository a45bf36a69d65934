"""
Household Pydantic Schemas
Defines request and response models for household and invitation endpoints.

Names are validated by the service layer (blank names are rejected there with
a 400), so request schemas only bound their length.
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List
from datetime import datetime


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class HouseholdCreate(BaseModel):
    """
    Schema for explicitly creating a household.

    The creator becomes the owner. Fails with 409 if the caller already
    belongs to a household.

    Example request body:
        {"name": "Casa Rossi"}
    """
    name: str = Field(..., max_length=255, description="Display name for the household")


class HouseholdRename(BaseModel):
    name: str = Field(..., max_length=255, description="New display name")


class InviteRequest(BaseModel):
    """Invite an email address to join the caller's household."""
    email: EmailStr = Field(..., description="Address to invite")


class InvitationIdRequest(BaseModel):
    """Body shared by accept, resend and cancel."""
    invitation_id: int = Field(..., description="Invitation ID")


class AcceptByCodeRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=20, description="Invitation code, case-insensitive")


class RemoveMemberRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="Member to remove")


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class HouseholdResponse(BaseModel):
    id: int
    name: str
    owner_id: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class HouseholdState(BaseModel):
    """
    Result of GET /household.

    household is null when the caller has not been bound to one yet.
    """
    household: Optional[HouseholdResponse] = None
    is_owner: bool = False


class MemberResponse(BaseModel):
    id: str
    email: Optional[str] = None
    image_url: Optional[str] = None
    is_owner: bool = False


class MembersResponse(BaseModel):
    members: List[MemberResponse]


class InvitationResponse(BaseModel):
    id: int
    household_id: int
    invited_email: str
    status: str
    invitation_code: Optional[str] = None
    invited_by: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class InvitationListResponse(BaseModel):
    invitations: List[InvitationResponse]


class InviteResponse(BaseModel):
    """Returned to the inviter: the code can be shared by hand if email fails."""
    id: int
    code: str


class AcceptResponse(BaseModel):
    success: bool = True
    household_id: int


class SuccessResponse(BaseModel):
    success: bool = True
