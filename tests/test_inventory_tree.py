"""
Inventory tree tests.

build_inventory_tree is exercised on unsaved ORM objects; the service is
checked once against the database.
"""

from datetime import datetime, timezone

from whereisit.core.constants import UNASSIGNED_ID, UNASSIGNED_NAME
from whereisit.models import Container, Household, Item, Location
from whereisit.services.inventory_service import InventoryService, build_inventory_tree

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def location(id, name):
    return Location(id=id, household_id=1, name=name)


def container(id, name, location_id):
    return Container(id=id, household_id=1, name=name, location_id=location_id)


def item(id, name, location_id=None, container_id=None):
    return Item(
        id=id,
        household_id=1,
        name=name,
        location_id=location_id,
        container_id=container_id,
        quantity=1,
        tags=[],
        is_favorite=False,
        created_at=NOW,
        updated_at=NOW,
    )


def ids(entries):
    return [entry.id for entry in entries]


class TestBuildInventoryTree:

    def test_empty(self):
        tree = build_inventory_tree([], [], [])
        assert tree.locations == []
        assert tree.unassigned_items == []

    def test_nesting(self):
        tree = build_inventory_tree(
            [location(1, "Kitchen"), location(2, "Garage")],
            [container(10, "Drawer", 1), container(20, "Toolbox", 2)],
            [
                item(100, "Spoon", location_id=1, container_id=10),
                item(101, "Pan", location_id=1),
                item(102, "Hammer", location_id=2, container_id=20),
            ]
        )

        kitchen, garage = tree.locations
        assert kitchen.name == "Kitchen"
        assert ids(kitchen.containers) == [10]
        assert ids(kitchen.containers[0].items) == [100]
        assert ids(kitchen.items) == [101]
        assert ids(garage.containers[0].items) == [102]
        assert garage.items == []

    def test_container_wins_over_location(self):
        # Item points at location 1 but sits in a container of location 2
        tree = build_inventory_tree(
            [location(1, "Kitchen"), location(2, "Garage")],
            [container(20, "Box", 2)],
            [item(100, "Tape", location_id=1, container_id=20)]
        )

        kitchen, garage = tree.locations
        assert kitchen.items == []
        assert ids(garage.containers[0].items) == [100]

    def test_unassigned_bucket(self):
        tree = build_inventory_tree(
            [location(1, "Kitchen")],
            [],
            [item(100, "Loose"), item(101, "Pan", location_id=1)]
        )

        assert ids(tree.locations) == [1, UNASSIGNED_ID]
        unassigned = tree.locations[-1]
        assert unassigned.name == UNASSIGNED_NAME
        assert ids(unassigned.containers) == [UNASSIGNED_ID]
        assert ids(unassigned.containers[0].items) == [100]
        assert ids(tree.unassigned_items) == [100]

    def test_no_unassigned_bucket_when_everything_is_placed(self):
        tree = build_inventory_tree(
            [location(1, "Kitchen")],
            [],
            [item(100, "Pan", location_id=1)]
        )
        assert ids(tree.locations) == [1]

    def test_containers_without_location_go_under_unassigned(self):
        tree = build_inventory_tree(
            [location(1, "Kitchen")],
            [container(10, "Orphan box", None), container(11, "Lost box", 99)],
            [item(100, "Battery", container_id=10), item(101, "Loose")]
        )

        kitchen, unassigned = tree.locations
        assert kitchen.containers == []
        assert unassigned.id == UNASSIGNED_ID
        assert ids(unassigned.containers) == [UNASSIGNED_ID, 10, 11]
        assert ids(unassigned.containers[1].items) == [100]
        assert ids(tree.unassigned_items) == [101]

    def test_unassigned_location_for_unlocated_containers_only(self):
        tree = build_inventory_tree([], [container(10, "Box", None)], [item(100, "Battery", container_id=10)])

        assert ids(tree.locations) == [UNASSIGNED_ID]
        assert ids(tree.locations[0].containers) == [10]
        assert tree.unassigned_items == []

    def test_item_in_unknown_container_falls_back(self):
        tree = build_inventory_tree(
            [location(1, "Kitchen")],
            [],
            [item(100, "Tape", location_id=1, container_id=55), item(101, "Glue", container_id=56)]
        )

        assert ids(tree.locations[0].items) == [100]
        assert ids(tree.unassigned_items) == [101]

    def test_every_item_appears_once(self):
        items = [
            item(100, "A", location_id=1, container_id=10),
            item(101, "B", location_id=1),
            item(102, "C"),
            item(103, "D", location_id=2),
            item(104, "E", container_id=11),
        ]
        tree = build_inventory_tree(
            [location(1, "Kitchen"), location(2, "Garage")],
            [container(10, "Drawer", 1), container(11, "Box", None)],
            items
        )

        seen = []
        for loc in tree.locations:
            seen.extend(ids(loc.items))
            for box in loc.containers:
                seen.extend(ids(box.items))
        assert sorted(seen) == [100, 101, 102, 103, 104]

    def test_input_order_is_kept(self):
        tree = build_inventory_tree(
            [location(2, "B"), location(1, "A")],
            [],
            [item(101, "x", location_id=2), item(100, "y", location_id=2)]
        )
        assert ids(tree.locations) == [2, 1]
        assert ids(tree.locations[0].items) == [101, 100]


class TestInventoryService:

    def test_without_household(self, db):
        tree = InventoryService.get_inventory_tree(db, None)
        assert tree.locations == []

    def test_only_own_household(self, db):
        mine = Household(name="Mine")
        theirs = Household(name="Theirs")
        db.add_all([mine, theirs])
        db.flush()

        kitchen = Location(household_id=mine.id, name="Kitchen")
        attic = Location(household_id=theirs.id, name="Attic")
        db.add_all([kitchen, attic])
        db.flush()
        db.add_all([
            Item(household_id=mine.id, name="Pan", location_id=kitchen.id),
            Item(household_id=theirs.id, name="Trunk", location_id=attic.id),
        ])
        db.flush()

        tree = InventoryService.get_inventory_tree(db, mine.id)

        assert [loc.name for loc in tree.locations] == ["Kitchen"]
        assert [i.name for i in tree.locations[0].items] == ["Pan"]
