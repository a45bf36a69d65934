"""
Bulk Item Operations

Tag merge, delete and relocate over a list of item ids.

Rules shared by every operation:
- An empty id list returns 0 before touching the database
- No household for the caller returns 0, not an error
- Ids outside the caller's household are silently skipped; the returned
  count only includes rows actually changed
"""

import logging
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from whereisit.models.item import Item
from whereisit.services.household_scope import get_user_household_id
from whereisit.services.item_service import ItemService

logger = logging.getLogger(__name__)


def merge_tags(existing: Optional[list], incoming: list) -> list:
    """Union of both lists without duplicates, first occurrence kept."""
    return list(dict.fromkeys(list(existing or []) + list(incoming)))


def _household_items(db: Session, item_ids: list[int], household_id: int):
    return db.query(Item).filter(
        and_(
            Item.id.in_(set(item_ids)),
            Item.household_id == household_id
        )
    )


def bulk_merge_tags(db: Session, user_id: str, item_ids: list[int], tags: list[str]) -> int:
    """
    Merge tags into every listed item of the caller's household.

    Idempotent: repeating the call leaves the tags unchanged.

    Returns:
        Number of items in the household that were matched
    """
    if not item_ids:
        return 0

    household_id = get_user_household_id(db, user_id)
    if household_id is None:
        return 0

    items = _household_items(db, item_ids, household_id).all()
    for item in items:
        # Assign a new list so the JSON column is flagged as changed
        item.tags = merge_tags(item.tags, tags)
    db.flush()

    logger.info(f"Merged {len(tags)} tag(s) into {len(items)} item(s) of household {household_id}")
    return len(items)


def bulk_delete(db: Session, user_id: str, item_ids: list[int]) -> int:
    """Delete the listed items of the caller's household and their history."""
    if not item_ids:
        return 0

    household_id = get_user_household_id(db, user_id)
    if household_id is None:
        return 0

    items = _household_items(db, item_ids, household_id).all()
    for item in items:
        db.delete(item)
    db.flush()

    logger.info(f"Deleted {len(items)} item(s) of household {household_id}")
    return len(items)


def bulk_relocate(
    db: Session,
    user_id: str,
    item_ids: list[int],
    location_id: Optional[int],
    container_id: Optional[int] = None
) -> int:
    """
    Move the listed items to a location and optionally a container.

    The container is cleared when not given. Target ids must belong to the
    household.

    Raises:
        NotFound: Target location or container outside the household
    """
    if not item_ids:
        return 0

    household_id = get_user_household_id(db, user_id)
    if household_id is None:
        return 0

    ItemService.validate_placement(db, household_id, location_id, container_id)

    count = _household_items(db, item_ids, household_id).update(
        {Item.location_id: location_id, Item.container_id: container_id},
        synchronize_session="fetch"
    )
    db.flush()

    logger.info(f"Relocated {count} item(s) of household {household_id}")
    return count
