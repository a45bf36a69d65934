"""
Household resolution tests.

Covers automatic provisioning on write paths and the lookup-only read path.
"""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from whereisit.core.constants import DEFAULT_HOUSEHOLD_NAME
from whereisit.core.exceptions import ProvisioningFailed
from whereisit.models import Household, User
from whereisit.services.household_scope import ensure_user_household, get_user_household_id


class TestGetUserHouseholdId:

    def test_unknown_user(self, db):
        assert get_user_household_id(db, "nobody") is None

    def test_user_without_household(self, db, make_user):
        make_user("u1")
        assert get_user_household_id(db, "u1") is None

    def test_bound_user(self, db, make_user):
        household = Household(name="Casa")
        db.add(household)
        db.flush()
        make_user("u1", household_id=household.id)

        assert get_user_household_id(db, "u1") == household.id

    def test_lookup_never_creates(self, db):
        get_user_household_id(db, "u1")
        assert db.query(Household).count() == 0
        assert db.query(User).count() == 0


class TestEnsureUserHousehold:

    def test_existing_household_is_returned(self, db, make_user):
        household = Household(name="Casa")
        db.add(household)
        db.flush()
        make_user("u1", household_id=household.id)

        assert ensure_user_household(db, "u1") == household.id
        assert db.query(Household).count() == 1

    def test_provisions_for_existing_user(self, db, make_user):
        user = make_user("u1", email="u1@example.com")

        household_id = ensure_user_household(db, "u1")

        household = db.get(Household, household_id)
        assert household.name == DEFAULT_HOUSEHOLD_NAME
        assert household.owner_id is None
        assert user.household_id == household_id

    def test_provisions_and_creates_missing_user(self, db):
        household_id = ensure_user_household(db, "fresh")

        user = db.get(User, "fresh")
        assert user is not None
        assert user.household_id == household_id

    def test_second_call_is_stable(self, db):
        first = ensure_user_household(db, "u1")
        second = ensure_user_household(db, "u1")

        assert first == second
        assert db.query(Household).count() == 1

    def test_insert_failure_raises_provisioning_failed(self, db, make_user, monkeypatch):
        make_user("u1")

        def failing_flush(*args, **kwargs):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db, "flush", failing_flush)

        with pytest.raises(ProvisioningFailed):
            ensure_user_household(db, "u1")
