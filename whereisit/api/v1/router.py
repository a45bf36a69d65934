"""
API v1 Main Router
Aggregates all v1 API endpoints into a single router.

Structure:
- /household/*   - Household, members and invitations
- /locations/*   - Locations, plus their containers and items
- /containers/*  - Containers, plus their items
- /inventory/*   - Nested inventory tree
- /items/*       - Items, consumption and bulk operations
- /shopping/*    - Shared shopping list

Every endpoint requires a bearer token.
"""

from fastapi import APIRouter

from whereisit.api.v1 import households, locations, containers, inventory, items, shopping


# Create main v1 router
# This router will be included in main.py with prefix /api/v1
api_router = APIRouter()

api_router.include_router(households.router, tags=["Household"])
api_router.include_router(locations.router, tags=["Locations"])
api_router.include_router(containers.router, tags=["Containers"])
api_router.include_router(inventory.router, tags=["Inventory"])
api_router.include_router(items.router, tags=["Items"])
api_router.include_router(shopping.router, tags=["Shopping"])
