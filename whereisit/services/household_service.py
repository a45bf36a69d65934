"""
Household Service - Business Logic Layer
Handles household lifecycle, membership and invitations.

Key responsibilities:
- Explicit household creation and rename
- Membership management (list, leave, remove)
- Invitation workflow (issue, list, accept by id or code, resend, cancel)
- Permission checks (owner-only operations)

Households created automatically by HouseholdScope have no owner, so
owner-only operations are unavailable in them.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from whereisit.core.constants import INVITATION_PENDING, INVITATION_ACCEPTED, INVITATION_CANCELLED
from whereisit.core.exceptions import Conflict, InvalidArgument, NotFound, PermissionDenied
from whereisit.models.household import Household
from whereisit.models.household_invitation import HouseholdInvitation
from whereisit.models.user import User
from whereisit.services.invitation_service import issue_invitation

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidArgument("Household name cannot be empty")
    return cleaned


class HouseholdService:
    """
    Service class for household-related business logic.

    All methods take a database session as parameter for transaction control.
    The caller (usually API endpoint) is responsible for committing.
    """

    @staticmethod
    def get_household(db: Session, user: User) -> Optional[Household]:
        if user.household_id is None:
            return None
        return db.query(Household).filter(Household.id == user.household_id).first()

    @staticmethod
    def require_household(db: Session, user: User) -> Household:
        household = HouseholdService.get_household(db, user)
        if household is None:
            raise Conflict("You are not in a household")
        return household

    @staticmethod
    def require_owner(db: Session, user: User, action: str) -> Household:
        household = HouseholdService.require_household(db, user)
        if not household.is_owner(user.id):
            raise PermissionDenied(f"Only the household owner can {action}")
        return household

    @staticmethod
    def create_household(db: Session, user: User, name: str) -> Household:
        """
        Create a household owned by the caller and join it.

        Raises:
            InvalidArgument: Blank name
            Conflict: Caller already belongs to a household
        """
        cleaned = _clean_name(name)
        if user.household_id is not None:
            raise Conflict("User already has a household")

        household = Household(name=cleaned, owner_id=user.id)
        db.add(household)
        db.flush()

        user.household_id = household.id
        db.flush()

        logger.info(f"User {user.id} created household {household.id}")
        return household

    @staticmethod
    def rename_household(db: Session, user: User, name: str) -> Household:
        cleaned = _clean_name(name)
        household = HouseholdService.require_owner(db, user, "rename the household")
        household.name = cleaned
        db.flush()
        return household

    @staticmethod
    def get_members(db: Session, user: User) -> List[Tuple[User, bool]]:
        """
        List the members of the caller's household.

        Returns:
            (member, is_owner) pairs, oldest member first
        """
        household = HouseholdService.require_household(db, user)
        members = db.query(User).filter(
            User.household_id == household.id
        ).order_by(User.created_at.asc(), User.id.asc()).all()
        return [(member, household.is_owner(member.id)) for member in members]

    @staticmethod
    def leave_household(db: Session, user: User) -> None:
        household = HouseholdService.require_household(db, user)
        if household.is_owner(user.id):
            raise Conflict("Household owner cannot leave. Transfer ownership or delete the household first.")

        user.household_id = None
        db.flush()
        logger.info(f"User {user.id} left household {household.id}")

    @staticmethod
    def remove_member(db: Session, user: User, member_id: str) -> None:
        household = HouseholdService.require_owner(db, user, "remove members")
        if member_id == user.id:
            raise Conflict("Cannot remove yourself from the household")

        member = db.query(User).filter(User.id == member_id).first()
        if member is None or member.household_id != household.id:
            raise NotFound("User is not a member of your household")

        member.household_id = None
        db.flush()
        logger.info(f"User {member_id} removed from household {household.id} by {user.id}")

    # ------------------------------------------------------------------
    # Invitations
    # ------------------------------------------------------------------

    @staticmethod
    def invite(db: Session, user: User, email: str) -> Tuple[HouseholdInvitation, Household]:
        """
        Issue an invitation from the caller's household.

        Any member may invite. The caller schedules the email after commit.
        """
        household = HouseholdService.get_household(db, user)
        if household is None:
            raise Conflict("You must be part of a household to invite members")

        invitation = issue_invitation(
            db,
            household_id=household.id,
            invited_email=email.strip().lower(),
            invited_by=user.id
        )
        return invitation, household

    @staticmethod
    def get_invitations(db: Session, user: User) -> List[HouseholdInvitation]:
        """Pending invitations of the caller's household, empty without one."""
        if user.household_id is None:
            return []
        return db.query(HouseholdInvitation).filter(
            HouseholdInvitation.household_id == user.household_id,
            HouseholdInvitation.status == INVITATION_PENDING
        ).order_by(HouseholdInvitation.created_at.desc(), HouseholdInvitation.id.desc()).all()

    @staticmethod
    def get_pending_invitations(db: Session, user: User) -> List[HouseholdInvitation]:
        """Owner view of the household's pending invitations."""
        household = HouseholdService.require_owner(db, user, "view pending invitations")
        return db.query(HouseholdInvitation).filter(
            HouseholdInvitation.household_id == household.id,
            HouseholdInvitation.status == INVITATION_PENDING
        ).order_by(HouseholdInvitation.created_at.desc(), HouseholdInvitation.id.desc()).all()

    @staticmethod
    def get_my_invitations(db: Session, user: User) -> List[HouseholdInvitation]:
        """Pending invitations addressed to the caller's email."""
        if not user.email:
            return []
        return db.query(HouseholdInvitation).filter(
            func.lower(HouseholdInvitation.invited_email) == user.email.lower(),
            HouseholdInvitation.status == INVITATION_PENDING
        ).order_by(HouseholdInvitation.created_at.desc(), HouseholdInvitation.id.desc()).all()

    @staticmethod
    def accept_invitation(db: Session, user: User, invitation_id: int) -> HouseholdInvitation:
        """
        Accept an invitation addressed to the caller's email.

        Raises:
            InvalidArgument: Caller has no email
            NotFound: No such invitation
            PermissionDenied: Invitation addressed to someone else
            Conflict: Invitation no longer pending
        """
        if not user.email:
            raise InvalidArgument("User email is required")

        invitation = db.query(HouseholdInvitation).filter(
            HouseholdInvitation.id == invitation_id
        ).first()
        if invitation is None:
            raise NotFound("Invitation not found")

        if invitation.invited_email.lower() != user.email.lower():
            raise PermissionDenied("This invitation is not for you")

        if not invitation.is_pending:
            raise Conflict("This invitation has already been processed")

        return HouseholdService._join(db, user, invitation)

    @staticmethod
    def accept_by_code(db: Session, user: User, code: str) -> Tuple[HouseholdInvitation, Household]:
        """
        Join a household by typing the invitation code.

        Codes are matched case-insensitively. Anyone holding the code may use
        it, regardless of the invited email.
        """
        normalized = (code or "").strip().upper()
        invitation = db.query(HouseholdInvitation).filter(
            HouseholdInvitation.invitation_code == normalized,
            HouseholdInvitation.status == INVITATION_PENDING
        ).first()
        if invitation is None:
            raise NotFound("Invalid or expired invitation code")

        HouseholdService._join(db, user, invitation)
        return invitation, invitation.household

    @staticmethod
    def _join(db: Session, user: User, invitation: HouseholdInvitation) -> HouseholdInvitation:
        user.household_id = invitation.household_id
        invitation.status = INVITATION_ACCEPTED
        db.flush()
        logger.info(f"User {user.id} joined household {invitation.household_id} via invitation {invitation.id}")
        return invitation

    @staticmethod
    def _get_household_invitation(db: Session, household_id: int, invitation_id: int) -> HouseholdInvitation:
        invitation = db.query(HouseholdInvitation).filter(
            HouseholdInvitation.id == invitation_id,
            HouseholdInvitation.household_id == household_id
        ).first()
        if invitation is None:
            raise NotFound("Invitation not found")
        return invitation

    @staticmethod
    def resend_invitation(db: Session, user: User, invitation_id: int) -> Tuple[HouseholdInvitation, Household]:
        """Touch a pending invitation so its email can be sent again."""
        household = HouseholdService.require_household(db, user)
        invitation = HouseholdService._get_household_invitation(db, household.id, invitation_id)
        if not invitation.is_pending:
            raise Conflict("This invitation has already been processed")

        invitation.updated_at = func.now()
        db.flush()
        return invitation, household

    @staticmethod
    def cancel_invitation(db: Session, user: User, invitation_id: int) -> HouseholdInvitation:
        """Mark a pending invitation cancelled. The row is kept for history."""
        household = HouseholdService.require_owner(db, user, "cancel invitations")
        invitation = HouseholdService._get_household_invitation(db, household.id, invitation_id)
        if not invitation.is_pending:
            raise Conflict("This invitation has already been processed")

        invitation.status = INVITATION_CANCELLED
        db.flush()
        return invitation
