"""
HouseholdInvitation Model
Manages invitations for joining households.

The invitation flow:
1. A member invites an email address
2. A unique 6-character code is generated and emailed (best effort)
3. The invited user accepts either from their pending list (matching email)
   or by typing the code
4. The invitation is marked accepted and the user joins the household

The same email may hold several pending invitations to the same household;
only codes are unique.
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from whereisit.core.constants import INVITATION_PENDING, INVITATION_ACCEPTED, INVITATION_CANCELLED
from whereisit.models.base import BaseModel


class HouseholdInvitation(BaseModel):
    """
    Household invitation model.

    Fields:
        id (int): Primary key, inherited from BaseModel
        household_id (int): Household the invitation is for
        invited_email (str): Address the invitation was sent to
        status (str): pending, accepted or cancelled
        invitation_code (str): Unique 6-character code (nullable)
        invited_by (str): User who issued the invitation
        created_at (datetime): Invite creation timestamp
        updated_at (datetime): Last status change

    Code format:
        - 6 characters from ABCDEFGHJKLMNPQRSTUVWXYZ23456789
        - Example: "K4T2M9", "XPR7HQ"
        - Unique constraint; collisions are retried by the issuer
    """

    __tablename__ = "household_invitations"

    household_id = Column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Household this invitation is for"
    )

    invited_email = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Email address that was invited"
    )

    status = Column(
        String(20),
        default=INVITATION_PENDING,
        nullable=False,
        comment="pending, accepted or cancelled"
    )

    invitation_code = Column(
        String(6),
        unique=True,
        nullable=True,
        comment="Unique 6-character invitation code"
    )

    invited_by = Column(
        String(255),
        nullable=True,
        comment="User who created this invitation"
    )

    __table_args__ = (
        Index("idx_invitation_code_status", invitation_code, status),
    )

    household = relationship("Household", back_populates="invitations")

    def __repr__(self):
        """String representation for debugging."""
        return (
            f"<HouseholdInvitation(id={self.id}, code={self.invitation_code}, "
            f"household_id={self.household_id}, status={self.status})>"
        )

    @property
    def is_pending(self) -> bool:
        """Check if invitation can still be accepted or cancelled."""
        return self.status == INVITATION_PENDING

    @property
    def is_accepted(self) -> bool:
        return self.status == INVITATION_ACCEPTED

    @property
    def is_cancelled(self) -> bool:
        return self.status == INVITATION_CANCELLED
