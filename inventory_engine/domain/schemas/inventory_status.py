from typing import List, Optional

from pydantic import BaseModel

from inventory_engine.domain.models import InventoryStatus


class StatusFactorsPayload(BaseModel):
    demand_pace: float
    competitor_position: str
    event_impact: str
    seasonal_trend: str


class InventoryStatusTooltip(BaseModel):
    """Badge / tooltip payload for one inventory cell"""
    level: str
    urgency: str
    confidence: int
    factors: StatusFactorsPayload
    reasoning: List[str]
    display_text: str
    color_token: str
    action_required: Optional[str] = None

    @classmethod
    def from_status(cls, status: InventoryStatus) -> "InventoryStatusTooltip":
        return cls(
            level=status.level.value,
            urgency=status.urgency.value,
            confidence=status.confidence,
            factors=StatusFactorsPayload(
                demand_pace=round(status.factors.demand_pace, 2),
                competitor_position=status.factors.competitor_position.value,
                event_impact=status.factors.event_impact.value,
                seasonal_trend=status.factors.seasonal_trend.value,
            ),
            reasoning=list(status.reasoning),
            display_text=status.display_text,
            color_token=status.color_token,
            action_required=status.action_required,
        )
