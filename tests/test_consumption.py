"""
Consumption tracking and forecast tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import event

from whereisit.core.exceptions import InvalidArgument, NotFound
from whereisit.models import ConsumptionEntry, Household, Item, Location
from whereisit.services.consumption_service import ConsumptionService, compute_forecast
from whereisit.services.item_service import ItemService

T0 = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


def entry(id, remaining, consumed, at):
    return ConsumptionEntry(id=id, item_id=1, quantity_remaining=remaining, consumed_quantity=consumed, recorded_at=at)


@pytest.fixture
def household(db):
    household = Household(name="Casa")
    db.add(household)
    db.flush()
    return household


@pytest.fixture
def make_item(db, household):
    def _make_item(name="Coffee pods", quantity=20, household_id=None, **kwargs):
        item = Item(household_id=household_id or household.id, name=name, quantity=quantity, **kwargs)
        db.add(item)
        db.flush()
        return item
    return _make_item


# ============================================================================
# Forecast arithmetic
# ============================================================================

class TestComputeForecast:

    def test_two_entries_five_days_apart(self):
        history = [
            entry(1, 13, 2, T0),
            entry(2, 10, 3, T0 + timedelta(days=5)),
        ]

        forecast = compute_forecast(10, history)

        assert forecast.initial_quantity == 15
        assert forecast.daily_rate == pytest.approx(1.0)
        assert forecast.reorder_point == 7
        assert forecast.days_until_empty == 10
        assert [h.id for h in forecast.history] == [1, 2]

    def test_no_history(self):
        forecast = compute_forecast(8, [])

        assert forecast.history == []
        assert forecast.initial_quantity == 8
        assert forecast.daily_rate is None
        assert forecast.reorder_point is None
        assert forecast.days_until_empty is None

    def test_single_entry_has_no_rate(self):
        forecast = compute_forecast(4, [entry(1, 4, 1, T0)])

        assert forecast.initial_quantity == 5
        assert forecast.daily_rate is None

    def test_entries_at_the_same_instant_have_no_rate(self):
        forecast = compute_forecast(4, [entry(1, 5, 1, T0), entry(2, 4, 1, T0)])
        assert forecast.daily_rate is None
        assert forecast.reorder_point is None

    def test_reorder_point_rounds_up(self):
        # 3 units over 2 days: 1.5/day, 10.5 over a week
        forecast = compute_forecast(6, [entry(1, 8, 1, T0), entry(2, 6, 2, T0 + timedelta(days=2))])

        assert forecast.daily_rate == pytest.approx(1.5)
        assert forecast.reorder_point == 11
        assert forecast.days_until_empty == 4

    def test_empty_item_has_zero_days_left(self):
        forecast = compute_forecast(0, [entry(1, 2, 3, T0), entry(2, 0, 2, T0 + timedelta(days=1))])
        assert forecast.days_until_empty == 0

    def test_naive_timestamps_are_treated_as_utc(self):
        naive = T0.replace(tzinfo=None)
        forecast = compute_forecast(10, [entry(1, 12, 1, naive), entry(2, 10, 2, T0 + timedelta(days=3))])
        assert forecast.daily_rate == pytest.approx(1.0)


# ============================================================================
# Recording
# ============================================================================

class TestRecordConsumption:

    def test_subtracts_and_logs(self, db, household, make_item):
        item = make_item(quantity=20)

        new_quantity = ConsumptionService.record_consumption(db, item.id, household.id, 5)

        assert new_quantity == 15
        assert item.quantity == 15
        logged = db.query(ConsumptionEntry).filter(ConsumptionEntry.item_id == item.id).one()
        assert logged.consumed_quantity == 5
        assert logged.quantity_remaining == 15

    def test_quantity_never_goes_negative(self, db, household, make_item):
        item = make_item(quantity=3)

        assert ConsumptionService.record_consumption(db, item.id, household.id, 10) == 0

        logged = db.query(ConsumptionEntry).one()
        assert logged.quantity_remaining == 0
        assert logged.consumed_quantity == 10

    def test_remaining_is_monotonic(self, db, household, make_item):
        item = make_item(quantity=7)
        results = [ConsumptionService.record_consumption(db, item.id, household.id, 3) for _ in range(4)]
        assert results == [4, 1, 0, 0]

    @pytest.mark.parametrize("amount", [0, -2])
    def test_rejects_non_positive_amount(self, db, household, make_item, amount):
        item = make_item(quantity=5)

        with pytest.raises(InvalidArgument):
            ConsumptionService.record_consumption(db, item.id, household.id, amount)

        assert item.quantity == 5
        assert db.query(ConsumptionEntry).count() == 0

    def test_item_of_other_household_is_not_found(self, db, household, make_item):
        other = Household(name="Other")
        db.add(other)
        db.flush()
        item = make_item(household_id=other.id)

        with pytest.raises(NotFound):
            ConsumptionService.record_consumption(db, item.id, household.id, 1)

    def test_without_household_is_not_found(self, db, make_item):
        item = make_item()
        with pytest.raises(NotFound):
            ConsumptionService.record_consumption(db, item.id, None, 1)

    def test_history_is_removed_with_item(self, db, household, make_item):
        item = make_item(quantity=5)
        ConsumptionService.record_consumption(db, item.id, household.id, 1)
        ConsumptionService.record_consumption(db, item.id, household.id, 1)

        ItemService.delete_item(db, item.id, household.id)

        assert db.query(ConsumptionEntry).count() == 0


class TestConsumptionForecast:

    def test_forecast_from_recorded_history(self, db, household, make_item):
        item = make_item(quantity=15)
        ConsumptionService.record_consumption(db, item.id, household.id, 2, recorded_at=T0)
        ConsumptionService.record_consumption(db, item.id, household.id, 3, recorded_at=T0 + timedelta(days=5))

        forecast = ConsumptionService.get_consumption_forecast(db, item.id, household.id)

        assert forecast.initial_quantity == 15
        assert [h.quantity_remaining for h in forecast.history] == [13, 10]
        assert forecast.daily_rate == pytest.approx(1.0)
        assert forecast.reorder_point == 7
        assert forecast.days_until_empty == 10


# ============================================================================
# Low stock
# ============================================================================

class TestLowStock:

    def consume(self, db, household, item, *steps):
        for days, amount in steps:
            ConsumptionService.record_consumption(
                db, item.id, household.id, amount, recorded_at=T0 + timedelta(days=days)
            )

    def test_without_household(self, db):
        assert ConsumptionService.get_low_stock(db, None, 50, 0) == ([], 0)

    def test_selects_items_at_or_below_reorder_point(self, db, household, make_item):
        pantry = Location(household_id=household.id, name="Pantry")
        db.add(pantry)
        db.flush()

        running_out = make_item(name="Coffee", quantity=20, location_id=pantry.id)
        plenty = make_item(name="Rice", quantity=1000)
        untracked = make_item(name="Salt", quantity=1)

        # Coffee: 15 consumed over 2 days, 7.5/day, reorder at 53, 5 left
        self.consume(db, household, running_out, (0, 5), (2, 10))
        # Rice: 4 consumed over 2 days, reorder at 14, 996 left
        self.consume(db, household, plenty, (0, 2), (2, 2))

        items, total = ConsumptionService.get_low_stock(db, household.id, 50, 0)

        assert total == 1
        assert [i.name for i in items] == ["Coffee"]
        low = items[0]
        assert low.location_name == "Pantry"
        assert low.quantity == 5
        assert low.reorder_point == 53
        assert low.days_until_empty == 0
        assert untracked.id not in [i.id for i in items]

    def test_sorted_by_days_until_empty(self, db, household, make_item):
        slow = make_item(name="Slow", quantity=10)
        fast = make_item(name="Fast", quantity=10)

        # Slow: 1/day, 6 left, 6 days. Fast: 4/day, 6 left, 1 day.
        self.consume(db, household, slow, (0, 2), (4, 2))
        self.consume(db, household, fast, (0, 2), (1, 2))

        items, total = ConsumptionService.get_low_stock(db, household.id, 50, 0)

        assert total == 2
        assert [i.name for i in items] == ["Fast", "Slow"]
        assert [i.days_until_empty for i in items] == [1, 6]

    def test_pagination(self, db, household, make_item):
        for n in range(3):
            item = make_item(name=f"Item {n}", quantity=10)
            self.consume(db, household, item, (0, 2), (1, 2))

        items, total = ConsumptionService.get_low_stock(db, household.id, 2, 2)

        assert total == 3
        assert len(items) == 1

    def test_history_is_loaded_in_one_query(self, db, household, make_item):
        for n in range(4):
            item = make_item(name=f"Item {n}", quantity=10)
            self.consume(db, household, item, (0, 2), (1, 2))

        statements = []

        def record(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        engine = db.get_bind()
        event.listen(engine, "before_cursor_execute", record)
        try:
            items, total = ConsumptionService.get_low_stock(db, household.id, 50, 0)
        finally:
            event.remove(engine, "before_cursor_execute", record)

        assert total == 4
        history_reads = [s for s in statements if "FROM consumption_history" in s]
        assert len(history_reads) == 1
