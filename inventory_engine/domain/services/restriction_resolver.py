"""
RESTRICTION RESOLVER (ENGINE-2)
Decide which bulk restrictions apply to a grid cell

RESPONSIBILITIES:
- Filter active restrictions by date range and target scope
- Pick the single highest-priority restriction
- Detect sale-blocking closeouts
- Derive the cell style token and tooltip payload

RULES:
❌ No status transitions (lifecycle belongs to the catalog)
❌ No exceptions on the render path
✅ Empty list / None when nothing applies
✅ Deterministic ordering (catalog insertion order)
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from inventory_engine.domain.models import BulkRestriction
from inventory_engine.domain.schemas.restriction import (
    RestrictionTooltip,
    RestrictionTooltipEntry,
)
from inventory_engine.domain.services.restriction_catalog import RestrictionCatalog
from inventory_engine.utils.time import parse_iso_date

logger = logging.getLogger(__name__)

CLOSEOUT_CELL_CLASSES = (
    "closeout-cell bg-red-100 dark:bg-red-900/30 border-red-300 "
    "dark:border-red-700 text-red-900 dark:text-red-100"
)


def pick_highest_priority(
    restrictions: Iterable[BulkRestriction],
) -> Optional[BulkRestriction]:
    """Highest priority wins; the first one encountered wins a tie."""
    highest: Optional[BulkRestriction] = None
    for restriction in restrictions:
        if highest is None or restriction.priority > highest.priority:
            highest = restriction
    return highest


def restriction_cell_classes(color: str) -> str:
    return (
        f"restriction-cell border-{color}-300 dark:border-{color}-700 "
        f"bg-{color}-50 dark:bg-{color}-900/20"
    )


class RestrictionResolver:
    """
    Restriction Resolver
    Read-only view over a restriction catalog
    """

    def __init__(self, catalog: Union[RestrictionCatalog, Iterable[BulkRestriction]]):
        if not isinstance(catalog, RestrictionCatalog):
            catalog = tuple(catalog)
        self._catalog = catalog

    def _restrictions(self) -> Iterable[BulkRestriction]:
        if isinstance(self._catalog, RestrictionCatalog):
            return self._catalog.snapshot()
        return self._catalog

    def get_applicable_restrictions(
        self,
        room_type_name: str,
        rateplan_type: str,
        date_str: str,
    ) -> List[BulkRestriction]:
        """
        Active restrictions covering the cell, in catalog order.

        An unparsable date matches nothing.
        """
        cell_date = parse_iso_date(date_str)
        if cell_date is None:
            logger.warning("Unparsable cell date %r, no restrictions applied", date_str)
            return []

        return [
            restriction
            for restriction in self._restrictions()
            if restriction.is_active
            and restriction.date_range.contains(cell_date)
            and restriction.targets.matches_cell(room_type_name, rateplan_type)
        ]

    def get_highest_priority_restriction(
        self,
        room_type_name: str,
        rateplan_type: str,
        date_str: str,
    ) -> Optional[BulkRestriction]:
        return pick_highest_priority(
            self.get_applicable_restrictions(room_type_name, rateplan_type, date_str)
        )

    def is_closeout_applied(
        self,
        room_type_name: str,
        rateplan_type: str,
        date_str: str,
    ) -> bool:
        """Any applicable closeout blocks sale, whatever its priority."""
        return any(
            restriction.is_closeout
            for restriction in self.get_applicable_restrictions(
                room_type_name, rateplan_type, date_str
            )
        )

    def get_cell_restriction_classes(
        self,
        room_type_name: str,
        rateplan_type: str,
        date_str: str,
    ) -> str:
        highest = self.get_highest_priority_restriction(
            room_type_name, rateplan_type, date_str
        )
        return self.classes_for(highest)

    @staticmethod
    def classes_for(restriction: Optional[BulkRestriction]) -> str:
        if restriction is None:
            return ""
        if restriction.is_closeout:
            return CLOSEOUT_CELL_CLASSES
        return restriction_cell_classes(restriction.restriction_type.color)

    def get_restriction_tooltip_data(
        self,
        room_type_name: str,
        rateplan_type: str,
        date_str: str,
    ) -> Optional[RestrictionTooltip]:
        restrictions = self.get_applicable_restrictions(
            room_type_name, rateplan_type, date_str
        )
        return self.tooltip_for(restrictions)

    @staticmethod
    def tooltip_for(restrictions: List[BulkRestriction]) -> Optional[RestrictionTooltip]:
        if not restrictions:
            return None
        return RestrictionTooltip(
            restrictions=[
                RestrictionTooltipEntry(
                    name=r.restriction_type.name,
                    code=r.restriction_type.code,
                    description=r.restriction_type.description,
                    value=r.value,
                    notes=r.notes,
                )
                for r in restrictions
            ],
            count=len(restrictions),
        )
