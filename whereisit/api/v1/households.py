"""
Household API Endpoints
Household lifecycle, membership and invitations.

Endpoints:
- GET    /household                      Current household (null when unbound)
- POST   /household                      Create a household owned by the caller
- PUT    /household/rename               Rename (owner only)
- GET    /household/members              Members with owner flag
- POST   /household/leave                Leave (not allowed for the owner)
- POST   /household/remove-member        Remove a member (owner only)
- POST   /household/invite               Invite an email, returns the code
- GET    /household/invitations          Pending invitations of the household
- GET    /household/pending-invitations  Same, owner view
- GET    /household/my-invitations       Pending invitations addressed to the caller
- POST   /household/accept-invitation    Accept by id (email must match)
- POST   /household/accept-by-code       Join with a code
- POST   /household/resend-invitation    Send the email again
- POST   /household/cancel-invitation    Cancel (owner only)
"""

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from whereisit.api.v1.deps import get_current_user
from whereisit.db.session import get_db
from whereisit.models.user import User
from whereisit.schemas.household import (
    AcceptByCodeRequest,
    AcceptResponse,
    HouseholdCreate,
    HouseholdRename,
    HouseholdResponse,
    HouseholdState,
    InvitationIdRequest,
    InvitationListResponse,
    InvitationResponse,
    InviteRequest,
    InviteResponse,
    MemberResponse,
    MembersResponse,
    RemoveMemberRequest,
    SuccessResponse,
)
from whereisit.services.household_service import HouseholdService
from whereisit.services.invitation_service import notify_invitation


router = APIRouter(prefix="/household")


@router.get("", response_model=HouseholdState)
def get_household(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    household = HouseholdService.get_household(db, current_user)
    if household is None:
        return HouseholdState()
    return HouseholdState(
        household=HouseholdResponse.model_validate(household),
        is_owner=household.is_owner(current_user.id)
    )


@router.post("", response_model=HouseholdResponse, status_code=status.HTTP_201_CREATED)
def create_household(
    data: HouseholdCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a household; the caller becomes its owner and first member."""
    household = HouseholdService.create_household(db, current_user, data.name)
    db.commit()
    db.refresh(household)
    return household


@router.put("/rename", response_model=HouseholdResponse)
def rename_household(
    data: HouseholdRename,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    household = HouseholdService.rename_household(db, current_user, data.name)
    db.commit()
    db.refresh(household)
    return household


@router.get("/members", response_model=MembersResponse)
def get_members(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    members = HouseholdService.get_members(db, current_user)
    return MembersResponse(members=[
        MemberResponse(
            id=member.id,
            email=member.email,
            image_url=member.image_url,
            is_owner=is_owner
        )
        for member, is_owner in members
    ])


@router.post("/leave", response_model=SuccessResponse)
def leave_household(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    HouseholdService.leave_household(db, current_user)
    db.commit()
    return SuccessResponse()


@router.post("/remove-member", response_model=SuccessResponse)
def remove_member(
    data: RemoveMemberRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    HouseholdService.remove_member(db, current_user, data.user_id)
    db.commit()
    return SuccessResponse()


@router.post("/invite", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
def invite_member(
    data: InviteRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Invite an email address to the caller's household.

    The email is sent after the response; the code is returned so it can
    be shared by hand if delivery fails.
    """
    invitation, household = HouseholdService.invite(db, current_user, str(data.email))
    db.commit()

    background_tasks.add_task(
        notify_invitation,
        invitation.invited_email,
        household.name,
        invitation.invitation_code
    )
    return InviteResponse(id=invitation.id, code=invitation.invitation_code)


@router.get("/invitations", response_model=InvitationListResponse)
def get_invitations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invitations = HouseholdService.get_invitations(db, current_user)
    return InvitationListResponse(invitations=[InvitationResponse.model_validate(i) for i in invitations])


@router.get("/pending-invitations", response_model=InvitationListResponse)
def get_pending_invitations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invitations = HouseholdService.get_pending_invitations(db, current_user)
    return InvitationListResponse(invitations=[InvitationResponse.model_validate(i) for i in invitations])


@router.get("/my-invitations", response_model=InvitationListResponse)
def get_my_invitations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invitations = HouseholdService.get_my_invitations(db, current_user)
    return InvitationListResponse(invitations=[InvitationResponse.model_validate(i) for i in invitations])


@router.post("/accept-invitation", response_model=AcceptResponse)
def accept_invitation(
    data: InvitationIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invitation = HouseholdService.accept_invitation(db, current_user, data.invitation_id)
    household_id = invitation.household_id
    db.commit()
    return AcceptResponse(household_id=household_id)


@router.post("/accept-by-code", response_model=HouseholdResponse)
def accept_by_code(
    data: AcceptByCodeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Join the household behind a code. Returns the joined household."""
    _, household = HouseholdService.accept_by_code(db, current_user, data.code)
    db.commit()
    db.refresh(household)
    return household


@router.post("/resend-invitation", response_model=InvitationResponse)
def resend_invitation(
    data: InvitationIdRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invitation, household = HouseholdService.resend_invitation(db, current_user, data.invitation_id)
    db.commit()
    db.refresh(invitation)

    background_tasks.add_task(
        notify_invitation,
        invitation.invited_email,
        household.name,
        invitation.invitation_code
    )
    return invitation


@router.post("/cancel-invitation", response_model=SuccessResponse)
def cancel_invitation(
    data: InvitationIdRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    HouseholdService.cancel_invitation(db, current_user, data.invitation_id)
    db.commit()
    return SuccessResponse()
