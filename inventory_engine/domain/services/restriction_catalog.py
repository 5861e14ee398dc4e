"""
RESTRICTION CATALOG
Owns the ordered list of bulk restrictions read by the resolver

RESPONSIBILITIES:
- Validate operator input and create restrictions
- Add / remove restrictions (copy-on-write)
- Apply the scheduled -> active -> expired lifecycle by date

RULES:
❌ Resolver never mutates the catalog
✅ Readers get an immutable snapshot, never a lock
✅ Expired restrictions never become active again
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Iterator, List, Optional, Tuple

from inventory_engine.domain.models import (
    BulkRestriction,
    DateRange,
    RestrictionStatus,
    RestrictionTargets,
)
from inventory_engine.domain.models.thresholds import RestrictionLimits
from inventory_engine.domain.schemas.restriction import BulkRestrictionRequest
from inventory_engine.domain.services.config_engine import RestrictionTypeCatalog
from inventory_engine.utils.time import Clock, today_local

logger = logging.getLogger(__name__)


def derive_status(restriction: BulkRestriction, today: date) -> RestrictionStatus:
    """Lifecycle status for ``today``; it only moves forward and expired is terminal."""
    if restriction.status == RestrictionStatus.EXPIRED:
        return RestrictionStatus.EXPIRED
    if restriction.date_range.end < today:
        return RestrictionStatus.EXPIRED
    if restriction.status == RestrictionStatus.ACTIVE:
        return RestrictionStatus.ACTIVE
    if restriction.date_range.start > today:
        return RestrictionStatus.SCHEDULED
    return RestrictionStatus.ACTIVE


class RestrictionCatalog:
    """
    Bulk restriction store.

    Writers build a new tuple under a lock and swap it in; readers take
    the current tuple as-is.
    """

    def __init__(
        self,
        restrictions: Iterable[BulkRestriction] = (),
        limits: Optional[RestrictionLimits] = None,
        clock: Optional[Clock] = None,
    ):
        self._restrictions: Tuple[BulkRestriction, ...] = ()
        self._lock = threading.Lock()
        self.limits = limits or RestrictionLimits()
        self._clock = clock or today_local
        for restriction in restrictions:
            self.add(restriction)

    def snapshot(self) -> Tuple[BulkRestriction, ...]:
        return self._restrictions

    def __iter__(self) -> Iterator[BulkRestriction]:
        return iter(self._restrictions)

    def __len__(self) -> int:
        return len(self._restrictions)

    def get(self, restriction_id: str) -> Optional[BulkRestriction]:
        for restriction in self._restrictions:
            if restriction.id == restriction_id:
                return restriction
        return None

    def add(self, restriction: BulkRestriction) -> BulkRestriction:
        with self._lock:
            if any(r.id == restriction.id for r in self._restrictions):
                raise ValueError(f"Restriction already exists: {restriction.id}")
            self._restrictions = self._restrictions + (restriction,)
        logger.info(
            "Added restriction %s (%s) %s..%s",
            restriction.id,
            restriction.restriction_type.id,
            restriction.date_range.start,
            restriction.date_range.end,
        )
        return restriction

    def remove(self, restriction_id: str) -> bool:
        with self._lock:
            remaining = tuple(r for r in self._restrictions if r.id != restriction_id)
            removed = len(remaining) != len(self._restrictions)
            self._restrictions = remaining
        if removed:
            logger.info("Removed restriction %s", restriction_id)
        return removed

    def create(
        self,
        request: BulkRestrictionRequest,
        restriction_types: RestrictionTypeCatalog,
        created_by: str,
    ) -> BulkRestriction:
        """
        Validate operator input and add the resulting restriction.

        Raises:
            ValueError: listing every problem found in the request
        """
        today = self._clock()
        errors = self.validate_request(request, restriction_types, today)
        if errors:
            raise ValueError("; ".join(errors))

        restriction_type = restriction_types.get(request.restriction_type_id)
        value = request.value
        if restriction_type.needs_value:
            value = int(value)

        restriction = BulkRestriction(
            id=uuid.uuid4().hex,
            restriction_type=restriction_type,
            date_range=DateRange(request.start_date, request.end_date),
            targets=RestrictionTargets.of(
                request.room_types, request.rate_plans, request.channels
            ),
            status=RestrictionStatus.SCHEDULED,
            value=value,
            created_by=created_by,
            created_at=datetime.now(),
            notes=request.notes,
        )
        restriction = replace(restriction, status=derive_status(restriction, today))
        return self.add(restriction)

    def validate_request(
        self,
        request: BulkRestrictionRequest,
        restriction_types: RestrictionTypeCatalog,
        today: date,
    ) -> List[str]:
        errors: List[str] = []

        restriction_type = restriction_types.find(request.restriction_type_id)
        if restriction_type is None:
            errors.append(f"Unknown restriction type: {request.restriction_type_id}")

        if request.start_date < today:
            errors.append("Start date cannot be in the past")

        span = (request.end_date - request.start_date).days
        if span > self.limits.max_range_days:
            errors.append(f"Date range cannot exceed {self.limits.max_range_days} days")

        if restriction_type is not None and restriction_type.needs_value:
            try:
                amount = int(request.value)
            except (TypeError, ValueError):
                amount = 0
            if amount <= 0:
                errors.append(f"Please enter a valid {restriction_type.name.lower()} value")
            else:
                if restriction_type.id == "booking_window":
                    limit, unit = self.limits.max_booking_window_days, "days"
                else:
                    limit, unit = self.limits.max_nights, "nights"
                if amount > limit:
                    errors.append(f"{restriction_type.name} cannot exceed {limit} {unit}")

        return errors

    def refresh_statuses(self, today: Optional[date] = None) -> int:
        """
        Move restrictions along their lifecycle for ``today``.

        Returns:
            Number of restrictions whose status changed
        """
        today = today or self._clock()
        changed = 0
        with self._lock:
            updated = []
            for restriction in self._restrictions:
                status = derive_status(restriction, today)
                if status != restriction.status:
                    changed += 1
                    restriction = replace(restriction, status=status)
                updated.append(restriction)
            self._restrictions = tuple(updated)
        if changed:
            logger.info("Refreshed %d restriction statuses for %s", changed, today)
        return changed
