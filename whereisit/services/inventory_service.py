"""
Inventory Hierarchy

Turns the flat location, container and item lists of a household into the
nested tree shown on the home screen:

    location
      container
        item
      item (in the location, no container)
    Unassigned (id -1)
      Unassigned container (id -1)
        item (no location, no container)
      container (no location)
        item

build_inventory_tree is pure and works on anything exposing the ORM
attributes; get_inventory_tree loads the three collections first.
"""

from typing import Iterable, Optional

from sqlalchemy.orm import Session

from whereisit.core.constants import UNASSIGNED_ID, UNASSIGNED_NAME
from whereisit.models.container import Container
from whereisit.models.item import Item
from whereisit.models.location import Location
from whereisit.schemas.inventory import InventoryTree, TreeContainer, TreeLocation
from whereisit.schemas.item import ItemResponse


def build_inventory_tree(
    locations: Iterable[Location],
    containers: Iterable[Container],
    items: Iterable[Item]
) -> InventoryTree:
    """
    Nest items under containers and containers under locations.

    Placement of each item, first match wins:
    1. container_id of a known container: that container's items
    2. location_id of a known location: the location's direct items
    3. otherwise: the synthetic Unassigned location/container

    Containers without a known location hang off the Unassigned location,
    after its synthetic container. Every input item appears exactly once.
    Input order is kept at every level. The Unassigned location comes last
    and only when it holds something.
    """
    tree_locations: dict[int, TreeLocation] = {}
    for location in locations:
        tree_locations[location.id] = TreeLocation(id=location.id, name=location.name)

    tree_containers: dict[int, TreeContainer] = {}
    for container in containers:
        tree_containers[container.id] = TreeContainer(
            id=container.id,
            name=container.name,
            location_id=container.location_id,
            photo_url=container.photo_url,
        )

    unassigned_items: list[ItemResponse] = []
    for item in items:
        entry = ItemResponse.model_validate(item)
        container = tree_containers.get(item.container_id) if item.container_id is not None else None
        location = tree_locations.get(item.location_id) if item.location_id is not None else None
        if container is not None:
            container.items.append(entry)
        elif location is not None:
            location.items.append(entry)
        else:
            unassigned_items.append(entry)

    unlocated_containers: list[TreeContainer] = []
    for container in tree_containers.values():
        location = tree_locations.get(container.location_id) if container.location_id is not None else None
        if location is not None:
            location.containers.append(container)
        else:
            unlocated_containers.append(container)

    result = list(tree_locations.values())
    if unassigned_items or unlocated_containers:
        unassigned = TreeLocation(id=UNASSIGNED_ID, name=UNASSIGNED_NAME)
        if unassigned_items:
            unassigned.containers.append(TreeContainer(
                id=UNASSIGNED_ID,
                name=UNASSIGNED_NAME,
                location_id=UNASSIGNED_ID,
                items=list(unassigned_items),
            ))
        unassigned.containers.extend(unlocated_containers)
        result.append(unassigned)

    return InventoryTree(locations=result, unassigned_items=unassigned_items)


class InventoryService:

    @staticmethod
    def get_inventory_tree(db: Session, household_id: Optional[int]) -> InventoryTree:
        """Load the household's inventory and nest it. Empty tree without a household."""
        if household_id is None:
            return InventoryTree()

        locations = db.query(Location).filter(
            Location.household_id == household_id
        ).order_by(Location.name.asc(), Location.id.asc()).all()

        containers = db.query(Container).filter(
            Container.household_id == household_id
        ).order_by(Container.name.asc(), Container.id.asc()).all()

        items = db.query(Item).filter(
            Item.household_id == household_id
        ).order_by(Item.created_at.desc(), Item.id.desc()).all()

        return build_inventory_tree(locations, containers, items)
