"""
Domain Models - Enums
Pure domain vocabulary with no infrastructure dependencies
"""

from enum import Enum


class InventoryLevel(str, Enum):
    """Inventory pressure classification"""
    CRITICAL = "critical"
    LOW = "low"
    OPTIMAL = "optimal"
    OVERSUPPLY = "oversupply"


class Urgency(str, Enum):
    """How soon a revenue manager should act"""
    IMMEDIATE = "immediate"
    MONITOR = "monitor"
    ROUTINE = "routine"


class CompetitorPosition(str, Enum):
    ADVANTAGE = "advantage"
    PARITY = "parity"
    DISADVANTAGE = "disadvantage"


class EventImpact(str, Enum):
    NONE = "none"
    POSITIVE = "positive"
    NEGATIVE = "negative"


class SeasonalTrend(str, Enum):
    PEAK = "peak"
    SHOULDER = "shoulder"
    VALLEY = "valley"


class RestrictionCategory(str, Enum):
    """Restriction type grouping"""
    AVAILABILITY = "availability"
    LENGTH_OF_STAY = "length_of_stay"
    BOOKING = "booking"
    RATE = "rate"
    GUEST = "guest"


class RestrictionStatus(str, Enum):
    """Bulk restriction lifecycle: scheduled -> active -> expired"""
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    EXPIRED = "expired"


class TargetMatchMode(str, Enum):
    """How a target dimension selects cell values"""
    ALL = "all"
    LISTED = "listed"
