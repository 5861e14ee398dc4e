"""
Inventory & restriction decision engine for the revenue-management grid.
"""

__version__ = "0.1.0"
