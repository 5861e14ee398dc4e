from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator


class BulkRestrictionRequest(BaseModel):
    """Operator input for a new bulk restriction"""
    restriction_type_id: str = Field(min_length=1)
    start_date: date
    end_date: date
    value: Optional[Union[int, str]] = None
    room_types: List[str] = Field(default_factory=list)
    rate_plans: List[str] = Field(default_factory=list)
    channels: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_date_order(self) -> "BulkRestrictionRequest":
        if self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class RestrictionTooltipEntry(BaseModel):
    name: str
    code: str
    description: str
    value: Optional[Union[int, float, str]] = None
    notes: Optional[str] = None


class RestrictionTooltip(BaseModel):
    type: str = "restrictions"
    restrictions: List[RestrictionTooltipEntry]
    count: int
