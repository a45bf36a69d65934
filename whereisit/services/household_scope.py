"""
Household Scope
Resolves a user to the household every record of theirs belongs to.

Two entry points:
- ensure_user_household: write paths. Auto-provisions a default household
  the first time a user without one creates data.
- get_user_household_id: read and bulk paths. Lookup only, never creates;
  callers degrade to empty results or zero affected rows.

Known race: two concurrent first-time requests of the same user can both
see "no household" and each create one. The last user update wins and the
other household is left orphaned (no members, no data). This is accepted.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from whereisit.core.constants import DEFAULT_HOUSEHOLD_NAME
from whereisit.core.exceptions import ProvisioningFailed
from whereisit.models.household import Household
from whereisit.models.user import User

logger = logging.getLogger(__name__)


def get_user_household_id(db: Session, user_id: str) -> Optional[int]:
    """Return the user's household id, or None when unbound or unknown."""
    return db.query(User.household_id).filter(User.id == user_id).scalar()


def ensure_user_household(db: Session, user_id: str) -> int:
    """
    Return the user's household id, creating a default household if needed.

    Steps when the user has no household:
    1. Insert a household named "My Household" with no owner
    2. Point the existing user row at it, or insert the user row
    3. Return the new id

    Raises:
        ProvisioningFailed: If the household insert fails
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is not None and user.household_id is not None:
        return user.household_id

    try:
        household = Household(name=DEFAULT_HOUSEHOLD_NAME)
        db.add(household)
        db.flush()
    except SQLAlchemyError as e:
        logger.error(f"Household provisioning failed for user {user_id}: {e}")
        raise ProvisioningFailed() from e

    if user is None:
        user = User(id=user_id, household_id=household.id)
        db.add(user)
    else:
        user.household_id = household.id
    db.flush()

    logger.info(f"Provisioned household {household.id} for user {user_id}")
    return household.id
