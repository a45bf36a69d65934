"""
Invitation Code Issuer

Generates short, human-typable codes for joining a household and persists
invitations under a unique constraint.

Collision handling:
- Each attempt inserts inside a SAVEPOINT
- A unique violation rolls back only that savepoint and a new code is drawn
- After INVITE_CODE_MAX_ATTEMPTS consecutive collisions the issuer gives up

Email notification runs after the invitation is committed and can never
affect it.
"""

import logging
import secrets
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whereisit.core.constants import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    INVITE_CODE_MAX_ATTEMPTS,
    INVITATION_PENDING,
)
from whereisit.core.exceptions import CodeGenerationExhausted
from whereisit.integrations.mailer import ResendMailer, mailer as default_mailer
from whereisit.models.household_invitation import HouseholdInvitation

logger = logging.getLogger(__name__)


def generate_invitation_code() -> str:
    """
    Generate a 6-character invitation code.

    Format: uppercase letters and digits without the look-alikes I, O, 0, 1
    Example: "K4T2M9", "XPR7HQ"

    Note: uniqueness is enforced by the database, see issue_invitation
    """
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def _code_taken(db: Session, code: str) -> bool:
    return db.query(HouseholdInvitation.id).filter(
        HouseholdInvitation.invitation_code == code
    ).first() is not None


def issue_invitation(
    db: Session,
    household_id: int,
    invited_email: str,
    invited_by: Optional[str] = None,
    code_factory: Callable[[], str] = generate_invitation_code
) -> HouseholdInvitation:
    """
    Persist a pending invitation with a unique code.

    Args:
        db: Database session
        household_id: Household to invite into
        invited_email: Address being invited (not deduplicated)
        invited_by: User issuing the invitation
        code_factory: Code generator, replaceable in tests

    Returns:
        The flushed HouseholdInvitation

    Raises:
        CodeGenerationExhausted: If every attempt collided
        IntegrityError: Any other constraint failure, unchanged
    """
    for attempt in range(1, INVITE_CODE_MAX_ATTEMPTS + 1):
        code = code_factory()
        invitation = HouseholdInvitation(
            household_id=household_id,
            invited_email=invited_email,
            status=INVITATION_PENDING,
            invitation_code=code,
            invited_by=invited_by
        )
        try:
            with db.begin_nested():
                db.add(invitation)
                db.flush()
        except IntegrityError:
            if not _code_taken(db, code):
                raise
            logger.warning(f"Invitation code collision on attempt {attempt}/{INVITE_CODE_MAX_ATTEMPTS}")
            continue

        logger.info(f"Issued invitation {invitation.id} for household {household_id}")
        return invitation

    logger.error(f"Gave up issuing invitation for household {household_id} after {INVITE_CODE_MAX_ATTEMPTS} collisions")
    raise CodeGenerationExhausted()


def notify_invitation(
    to_email: str,
    household_name: str,
    invitation_code: str,
    mailer: Optional[ResendMailer] = None
) -> bool:
    """
    Best-effort invitation email, meant to run as a background task.

    Never raises: the response has already been sent when this runs.
    """
    mailer = mailer or default_mailer
    try:
        return mailer.send_invite(to_email, household_name, invitation_code)
    except Exception as e:
        logger.error(f"[Email] Unexpected failure notifying {to_email}: {e}")
        return False
