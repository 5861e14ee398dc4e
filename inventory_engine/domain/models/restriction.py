"""
DOMAIN MODELS — BULK RESTRICTIONS

Immutable structures for restriction types and operator-defined
bulk restrictions. Pure domain logic only; no service imports.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import FrozenSet, Iterable, Optional, Union

from .entities import RestrictionCategory, RestrictionStatus, TargetMatchMode

# Restriction kinds that fully block sale of a cell
CLOSEOUT_TYPE_IDS: FrozenSet[str] = frozenset({"closeout", "ctd", "no_arrival"})

RestrictionValue = Union[int, float, str]


@dataclass(frozen=True)
class RestrictionType:
    """Static restriction catalog entry - Immutable"""
    id: str
    code: str
    name: str
    category: RestrictionCategory
    priority: int
    color: str
    description: str = ""
    icon: str = ""
    needs_value: bool = False

    def __post_init__(self):
        if not self.id:
            raise ValueError("Restriction type id cannot be empty")

    @property
    def is_closeout(self) -> bool:
        return self.id in CLOSEOUT_TYPE_IDS


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range"""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(
                f"Date range start {self.start} must not be after end {self.end}"
            )

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class TargetScope:
    """
    One target dimension of a restriction.

    ALL matches every value of the dimension; LISTED matches only the
    listed values. Built from operator input where an empty selection
    means "all".
    """
    mode: TargetMatchMode = TargetMatchMode.ALL
    values: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, values: Optional[Iterable[str]] = None) -> "TargetScope":
        selected = frozenset(v for v in (values or ()) if v)
        if not selected:
            return cls(TargetMatchMode.ALL, frozenset())
        return cls(TargetMatchMode.LISTED, selected)

    @property
    def is_wildcard(self) -> bool:
        return self.mode == TargetMatchMode.ALL

    def matches(self, value: str) -> bool:
        if self.mode == TargetMatchMode.ALL:
            return True
        return value in self.values


@dataclass(frozen=True)
class RestrictionTargets:
    """Room types, rate plans and channels a restriction is scoped to"""
    room_types: TargetScope = field(default_factory=TargetScope)
    rate_plans: TargetScope = field(default_factory=TargetScope)
    channels: TargetScope = field(default_factory=TargetScope)

    @classmethod
    def of(
        cls,
        room_types: Optional[Iterable[str]] = None,
        rate_plans: Optional[Iterable[str]] = None,
        channels: Optional[Iterable[str]] = None,
    ) -> "RestrictionTargets":
        return cls(
            room_types=TargetScope.of(room_types),
            rate_plans=TargetScope.of(rate_plans),
            channels=TargetScope.of(channels),
        )

    def matches_cell(self, room_type_name: str, rateplan_type: str) -> bool:
        """Cells carry no channel context, so channels are not evaluated"""
        return self.room_types.matches(room_type_name) and self.rate_plans.matches(
            rateplan_type
        )


@dataclass(frozen=True)
class BulkRestriction:
    """Operator-defined restriction over a date range - Immutable"""
    id: str
    restriction_type: RestrictionType
    date_range: DateRange
    targets: RestrictionTargets = field(default_factory=RestrictionTargets)
    status: RestrictionStatus = RestrictionStatus.ACTIVE
    value: Optional[RestrictionValue] = None
    created_by: str = "system"
    created_at: Optional[datetime] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Bulk restriction id cannot be empty")

    @property
    def priority(self) -> int:
        return self.restriction_type.priority

    @property
    def is_active(self) -> bool:
        return self.status == RestrictionStatus.ACTIVE

    @property
    def is_closeout(self) -> bool:
        return self.restriction_type.is_closeout
