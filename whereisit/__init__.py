"""
WhereIsIt API
Shared household inventory: locations, containers, items, consumption
tracking and a shared shopping list.
"""

__version__ = "1.0.0"
