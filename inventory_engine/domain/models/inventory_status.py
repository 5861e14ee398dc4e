"""
DOMAIN MODELS — INVENTORY STATUS

Immutable structures produced by the inventory status classifier.
This layer contains NO cache or service logic.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .entities import (
    CompetitorPosition,
    EventImpact,
    InventoryLevel,
    SeasonalTrend,
    Urgency,
)


@dataclass(frozen=True)
class StatusFactors:
    """Machine-checkable breakdown behind a classification"""
    demand_pace: float
    competitor_position: CompetitorPosition
    event_impact: EventImpact
    seasonal_trend: SeasonalTrend


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Synthetic market figures for one (room, date, inventory) seed.
    """
    current_demand: int
    predicted_demand: int
    last_year_pace: int
    competitor_avg_availability: int
    event_impact: EventImpact


@dataclass(frozen=True)
class InventoryStatus:
    """Classification of one grid cell's inventory - Immutable"""
    level: InventoryLevel
    urgency: Urgency
    confidence: int
    factors: StatusFactors
    reasoning: Tuple[str, ...] = field(default_factory=tuple)
    display_text: str = ""
    color_token: str = ""
    action_required: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            raise ValueError("Confidence must be between 0 and 100")
