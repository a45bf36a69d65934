"""
Consumption Tracker

Records consumption events against an item's quantity and derives a
consumption rate from the history.

Forecast arithmetic:
    initial_quantity = current + sum(consumed)
    daily_rate       = sum(consumed) / days between first and last entry
    reorder_point    = ceil(daily_rate * 7)
    days_until_empty = floor(current / daily_rate)

A rate needs at least two entries spanning a positive amount of time.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from whereisit.core.constants import REORDER_LEAD_TIME_DAYS, MIN_HISTORY_FOR_FORECAST
from whereisit.core.exceptions import InvalidArgument
from whereisit.models.consumption import ConsumptionEntry
from whereisit.models.item import Item
from whereisit.models.location import Location
from whereisit.schemas.consumption import ConsumptionEntryResponse, ConsumptionForecast, LowStockItem
from whereisit.services.item_service import ItemService

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_forecast(current_quantity: int, history: Sequence[ConsumptionEntry]) -> ConsumptionForecast:
    """
    Derive the forecast from a history sorted by recorded_at ascending.

    Pure: no storage access.
    """
    total_consumed = sum(entry.consumed_quantity for entry in history)
    forecast = ConsumptionForecast(
        history=[ConsumptionEntryResponse.model_validate(entry) for entry in history],
        initial_quantity=current_quantity + total_consumed,
    )

    if len(history) < MIN_HISTORY_FOR_FORECAST:
        return forecast

    elapsed = _as_utc(history[-1].recorded_at) - _as_utc(history[0].recorded_at)
    days_elapsed = elapsed.total_seconds() / SECONDS_PER_DAY
    if days_elapsed <= 0:
        return forecast

    daily_rate = total_consumed / days_elapsed
    if daily_rate <= 0:
        return forecast

    forecast.daily_rate = daily_rate
    forecast.reorder_point = math.ceil(daily_rate * REORDER_LEAD_TIME_DAYS)
    forecast.days_until_empty = math.floor(current_quantity / daily_rate) if current_quantity > 0 else 0
    return forecast


def _history_for(db: Session, item_id: int) -> list[ConsumptionEntry]:
    return db.query(ConsumptionEntry).filter(
        ConsumptionEntry.item_id == item_id
    ).order_by(ConsumptionEntry.recorded_at.asc(), ConsumptionEntry.id.asc()).all()


def _histories_for(db: Session, item_ids: Sequence[int]) -> dict[int, list[ConsumptionEntry]]:
    """History of several items in one query, grouped by item id."""
    histories: dict[int, list[ConsumptionEntry]] = {item_id: [] for item_id in item_ids}
    if not item_ids:
        return histories

    entries = db.query(ConsumptionEntry).filter(
        ConsumptionEntry.item_id.in_(item_ids)
    ).order_by(ConsumptionEntry.recorded_at.asc(), ConsumptionEntry.id.asc()).all()
    for entry in entries:
        histories[entry.item_id].append(entry)
    return histories


class ConsumptionService:

    @staticmethod
    def record_consumption(
        db: Session,
        item_id: int,
        household_id: Optional[int],
        consumed_quantity: int,
        recorded_at: Optional[datetime] = None
    ) -> int:
        """
        Subtract consumed_quantity from the item and log the event.

        The quantity never goes below zero. Both writes are flushed in the
        caller's transaction, so a failing history insert rolls back the
        quantity change as well.

        Returns:
            The new quantity

        Raises:
            InvalidArgument: consumed_quantity is not positive
            NotFound: Item not in the household
        """
        if consumed_quantity is None or consumed_quantity <= 0:
            raise InvalidArgument("Consumed quantity must be greater than zero")

        item = ItemService.require_item(db, item_id, household_id)

        new_quantity = max(0, item.quantity - consumed_quantity)
        item.quantity = new_quantity
        db.flush()

        entry = ConsumptionEntry(
            item_id=item.id,
            quantity_remaining=new_quantity,
            consumed_quantity=consumed_quantity,
            recorded_at=recorded_at or datetime.now(timezone.utc),
        )
        db.add(entry)
        db.flush()

        logger.info(f"Item {item.id}: consumed {consumed_quantity}, {new_quantity} left")
        return new_quantity

    @staticmethod
    def get_consumption_forecast(db: Session, item_id: int, household_id: Optional[int]) -> ConsumptionForecast:
        item = ItemService.require_item(db, item_id, household_id)
        return compute_forecast(item.quantity, _history_for(db, item.id))

    @staticmethod
    def get_low_stock(
        db: Session,
        household_id: Optional[int],
        limit: int,
        offset: int
    ) -> Tuple[list[LowStockItem], int]:
        """
        Items that will run out within the reorder lead time.

        An item qualifies when it has a positive consumption rate and its
        quantity is at or below its reorder point. Sorted by days until
        empty, soonest first.
        """
        if household_id is None:
            return [], 0

        rows = db.query(Item, Location.name).outerjoin(
            Location, Item.location_id == Location.id
        ).filter(
            Item.household_id == household_id
        ).order_by(Item.created_at.desc(), Item.id.desc()).all()

        histories = _histories_for(db, [item.id for item, _ in rows])

        low_stock = []
        for item, location_name in rows:
            forecast = compute_forecast(item.quantity, histories[item.id])
            if forecast.daily_rate is None:
                continue
            if item.quantity > forecast.reorder_point:
                continue

            low_stock.append(LowStockItem(
                id=item.id,
                name=item.name,
                description=item.description,
                photo_url=item.photo_url,
                thumbnail_url=item.thumbnail_url,
                quantity=item.quantity,
                location_id=item.location_id,
                location_name=location_name,
                tags=item.tags or [],
                is_favorite=item.is_favorite,
                reorder_point=forecast.reorder_point,
                daily_rate=forecast.daily_rate,
                days_until_empty=forecast.days_until_empty,
            ))

        low_stock.sort(key=lambda entry: entry.days_until_empty)
        return low_stock[offset:offset + limit], len(low_stock)
