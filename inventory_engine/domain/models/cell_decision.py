"""
DOMAIN MODELS — CELL DECISION

What the view layer needs to render one (room type, rate plan, date) cell.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .inventory_status import InventoryStatus
from .restriction import BulkRestriction


@dataclass(frozen=True)
class CellDecision:
    room_type_name: str
    rateplan_type: str
    date_str: str
    inventory_status: InventoryStatus
    applicable_restrictions: Tuple[BulkRestriction, ...]
    winning_restriction: Optional[BulkRestriction]
    closeout_applied: bool
    restriction_classes: str

    @property
    def is_sellable(self) -> bool:
        return not self.closeout_applied

    @property
    def restriction_count(self) -> int:
        return len(self.applicable_restrictions)
