"""
CELL DECISION ENGINE (ENGINE-3) - ORCHESTRATOR
Compose inventory status and restriction resolution per grid cell

RESPONSIBILITIES:
- Orchestrate the status engine and the restriction resolver
- Evict stale status entries when inventory is written

RULES:
❌ No rendering
❌ No state mutation beyond the status cache
✅ Same inputs, same decision
"""

from pathlib import Path
from typing import Optional

from inventory_engine.config import settings
from inventory_engine.domain.models import InventoryStatus
from inventory_engine.domain.models.cell_decision import CellDecision
from inventory_engine.domain.services.config_engine import ConfigEngine
from inventory_engine.domain.services.inventory_status_engine import InventoryStatusEngine
from inventory_engine.domain.services.restriction_catalog import RestrictionCatalog
from inventory_engine.domain.services.restriction_resolver import (
    RestrictionResolver,
    pick_highest_priority,
)
from inventory_engine.infrastructure.cache.status_cache import StatusCache
from inventory_engine.utils.time import Clock


class CellDecisionEngine:
    """
    Cell Decision Engine
    One call per visible cell
    """

    def __init__(
        self,
        status_engine: InventoryStatusEngine,
        resolver: RestrictionResolver,
    ):
        self.status_engine = status_engine
        self.resolver = resolver

    @classmethod
    def from_config(
        cls,
        config_dir: Optional[Path] = None,
        catalog: Optional[RestrictionCatalog] = None,
        clock: Optional[Clock] = None,
    ) -> "CellDecisionEngine":
        """Wire the engines from YAML config and environment settings."""
        config_engine = ConfigEngine(Path(config_dir or settings.CONFIG_DIR))
        config_engine.load_all()

        if catalog is None:
            catalog = RestrictionCatalog(limits=config_engine.restriction_limits, clock=clock)

        status_engine = InventoryStatusEngine(
            cache=StatusCache(settings.STATUS_CACHE_MAX_ENTRIES),
            thresholds=config_engine.thresholds,
            clock=clock,
        )
        return cls(status_engine=status_engine, resolver=RestrictionResolver(catalog))

    def evaluate_cell(
        self,
        room_type_name: str,
        rateplan_type: str,
        date_str: str,
        inventory: int,
        room_type_capacity: Optional[int] = None,
    ) -> CellDecision:
        status = self.status_engine.calculate_status(
            inventory, room_type_name, date_str, room_type_capacity
        )
        applicable = self.resolver.get_applicable_restrictions(
            room_type_name, rateplan_type, date_str
        )

        winner = pick_highest_priority(applicable)

        return CellDecision(
            room_type_name=room_type_name,
            rateplan_type=rateplan_type,
            date_str=date_str,
            inventory_status=status,
            applicable_restrictions=tuple(applicable),
            winning_restriction=winner,
            closeout_applied=any(r.is_closeout for r in applicable),
            restriction_classes=RestrictionResolver.classes_for(winner),
        )

    def update_inventory(
        self,
        room_type_name: str,
        date_str: str,
        old_inventory: int,
        new_inventory: int,
        room_type_capacity: Optional[int] = None,
    ) -> InventoryStatus:
        """Inventory write path: evict the stale entry, return the fresh status."""
        self.status_engine.on_inventory_changed(room_type_name, date_str, old_inventory)
        return self.status_engine.calculate_status(
            new_inventory, room_type_name, date_str, room_type_capacity
        )
