"""
DOMAIN MODELS — THRESHOLDS

Tunable limits for the classifier and for operator restriction input.
Defaults reproduce the dashboard's documented behaviour.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassifierThresholds:
    """Inventory status classifier cut-offs - Immutable"""
    sellout_inventory: int = 5
    high_demand_rate: float = 0.8
    good_pace_rate: float = 0.6
    slow_pace_rate: float = 0.3
    last_minute_days: int = 3
    booking_window_days: int = 14
    default_capacity: int = 100

    def __post_init__(self):
        if not (self.high_demand_rate > self.good_pace_rate > self.slow_pace_rate):
            raise ValueError("Demand rate thresholds must be strictly descending")
        if self.last_minute_days > self.booking_window_days:
            raise ValueError("last_minute_days cannot exceed booking_window_days")
        if self.default_capacity < 1:
            raise ValueError("default_capacity must be at least 1")


@dataclass(frozen=True)
class RestrictionLimits:
    """Operator input limits for new bulk restrictions - Immutable"""
    max_range_days: int = 365
    max_nights: int = 30
    max_booking_window_days: int = 365
