from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import pytest

from inventory_engine.domain.models import (
    BulkRestriction,
    DateRange,
    RestrictionStatus,
    RestrictionTargets,
)
from inventory_engine.domain.services.config_engine import ConfigEngine
from inventory_engine.domain.services.inventory_status_engine import InventoryStatusEngine
from inventory_engine.infrastructure.cache.status_cache import StatusCache
from inventory_engine.utils.time import fixed_clock

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

# A Thursday; keeps days-out arithmetic stable across runs
TODAY = date(2024, 2, 1)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def clock():
    return fixed_clock(TODAY)


@pytest.fixture(scope="session")
def config_engine() -> ConfigEngine:
    engine = ConfigEngine(CONFIG_DIR)
    engine.load_all()
    return engine


@pytest.fixture(scope="session")
def restriction_types(config_engine):
    return config_engine.restriction_types


@pytest.fixture()
def status_cache() -> StatusCache:
    return StatusCache(max_entries=100)


@pytest.fixture()
def status_engine(status_cache, clock, config_engine) -> InventoryStatusEngine:
    return InventoryStatusEngine(
        cache=status_cache,
        thresholds=config_engine.thresholds,
        clock=clock,
    )


@pytest.fixture()
def make_restriction(restriction_types):
    """Factory for bulk restrictions backed by the configured type catalog."""
    counter = {"n": 0}

    def _make(
        type_id: str,
        start: str = "2024-02-01",
        end: str = "2024-02-28",
        room_types: Optional[Iterable[str]] = None,
        rate_plans: Optional[Iterable[str]] = None,
        channels: Optional[Iterable[str]] = None,
        status: RestrictionStatus = RestrictionStatus.ACTIVE,
        value=None,
        restriction_id: Optional[str] = None,
    ) -> BulkRestriction:
        counter["n"] += 1
        return BulkRestriction(
            id=restriction_id or f"r{counter['n']}",
            restriction_type=restriction_types.get(type_id),
            date_range=DateRange(date.fromisoformat(start), date.fromisoformat(end)),
            targets=RestrictionTargets.of(room_types, rate_plans, channels),
            status=status,
            value=value,
            created_by="tester",
        )

    return _make
