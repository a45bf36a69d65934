"""
Application Constants
Defines constant values used throughout the application.

This module contains all application-wide constants including:
- Household defaults
- Invitation code settings
- Consumption forecast parameters
- Pagination limits
"""

# Household provisioning
DEFAULT_HOUSEHOLD_NAME = "My Household"  # Name of auto-created households

# Invitation statuses
INVITATION_PENDING = "pending"
INVITATION_ACCEPTED = "accepted"
INVITATION_CANCELLED = "cancelled"

VALID_INVITATION_STATUSES = [INVITATION_PENDING, INVITATION_ACCEPTED, INVITATION_CANCELLED]

# Invite Code Settings
# No I, O, 0 or 1: codes are typed by hand
INVITE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITE_CODE_LENGTH = 6  # Length of household invite codes
INVITE_CODE_MAX_ATTEMPTS = 5  # Collisions tolerated before giving up

# Inventory tree
UNASSIGNED_ID = -1  # Sentinel id of the synthetic "Unassigned" location/container
UNASSIGNED_NAME = "Unassigned"

# Consumption forecast
REORDER_LEAD_TIME_DAYS = 7  # Reorder when about a week of supply remains
MIN_HISTORY_FOR_FORECAST = 2  # Entries needed before a rate is estimated

# Items
EXPIRING_WINDOW_DAYS = 7  # "Expiring" means on or before today + 7 days
CONFIRMATION_STALE_DAYS = 7  # Items not confirmed for a week need a check

# Pagination
DEFAULT_PAGE_SIZE = 50  # Default number of items per page
MAX_PAGE_SIZE = 100  # Maximum items per page
