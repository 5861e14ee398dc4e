"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    CompetitorPosition,
    EventImpact,
    InventoryLevel,
    RestrictionCategory,
    RestrictionStatus,
    SeasonalTrend,
    TargetMatchMode,
    Urgency,
)
from .inventory_status import (
    InventoryStatus,
    MarketSnapshot,
    StatusFactors,
)
from .restriction import (
    CLOSEOUT_TYPE_IDS,
    BulkRestriction,
    DateRange,
    RestrictionTargets,
    RestrictionType,
    TargetScope,
)

__all__ = [
    # Enums
    "CompetitorPosition",
    "EventImpact",
    "InventoryLevel",
    "RestrictionCategory",
    "RestrictionStatus",
    "SeasonalTrend",
    "TargetMatchMode",
    "Urgency",

    # Inventory status
    "InventoryStatus",
    "MarketSnapshot",
    "StatusFactors",

    # Restrictions
    "CLOSEOUT_TYPE_IDS",
    "BulkRestriction",
    "DateRange",
    "RestrictionTargets",
    "RestrictionType",
    "TargetScope",
]
