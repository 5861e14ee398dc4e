from datetime import date

import pytest
from pydantic import ValidationError

from inventory_engine.domain.models import RestrictionStatus
from inventory_engine.domain.models.thresholds import RestrictionLimits
from inventory_engine.domain.schemas.restriction import BulkRestrictionRequest
from inventory_engine.domain.services.restriction_catalog import (
    RestrictionCatalog,
    derive_status,
)
from inventory_engine.domain.services.restriction_resolver import RestrictionResolver


@pytest.fixture
def catalog(clock):
    return RestrictionCatalog(limits=RestrictionLimits(), clock=clock)


def _request(**overrides):
    data = {
        "restriction_type_id": "minlos",
        "start_date": "2024-02-10",
        "end_date": "2024-02-12",
        "value": 2,
        "room_types": ["Suite"],
    }
    data.update(overrides)
    return BulkRestrictionRequest(**data)


class TestCreate:

    def test_create_adds_restriction(self, catalog, restriction_types):
        created = catalog.create(_request(), restriction_types, created_by="rm@hotel")

        assert len(catalog) == 1
        assert catalog.get(created.id) is created
        assert created.restriction_type.id == "minlos"
        assert created.value == 2
        assert created.created_by == "rm@hotel"
        assert created.targets.room_types.values == frozenset({"Suite"})
        assert created.targets.rate_plans.is_wildcard

    def test_future_restriction_is_scheduled(self, catalog, restriction_types):
        created = catalog.create(_request(), restriction_types, created_by="rm")
        assert created.status == RestrictionStatus.SCHEDULED

    def test_restriction_starting_today_is_active(self, catalog, restriction_types, today):
        created = catalog.create(
            _request(start_date=today.isoformat()), restriction_types, created_by="rm"
        )
        assert created.status == RestrictionStatus.ACTIVE

    def test_value_string_coerced_for_valued_types(self, catalog, restriction_types):
        created = catalog.create(_request(value="3"), restriction_types, created_by="rm")
        assert created.value == 3

    def test_end_before_start_rejected_by_schema(self):
        with pytest.raises(ValidationError, match="End date must be after start date"):
            _request(start_date="2024-02-12", end_date="2024-02-10")

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"restriction_type_id": "rate_parity"}, "Unknown restriction type"),
            ({"start_date": "2024-01-15"}, "Start date cannot be in the past"),
            ({"end_date": "2025-03-01"}, "cannot exceed 365 days"),
            ({"value": None}, "valid minimum length of stay value"),
            ({"value": 0}, "valid minimum length of stay value"),
            ({"value": 31}, "cannot exceed 30 nights"),
            (
                {"restriction_type_id": "booking_window", "value": 400},
                "cannot exceed 365 days",
            ),
        ],
    )
    def test_invalid_requests_rejected(self, catalog, restriction_types, overrides, message):
        with pytest.raises(ValueError, match=message):
            catalog.create(_request(**overrides), restriction_types, created_by="rm")
        assert len(catalog) == 0

    def test_all_errors_reported_together(self, catalog, restriction_types, today):
        errors = catalog.validate_request(
            _request(start_date="2024-01-15", value=99), restriction_types, today
        )
        assert len(errors) == 2

    def test_closeout_needs_no_value(self, catalog, restriction_types):
        created = catalog.create(
            _request(restriction_type_id="closeout", value=None, room_types=[]),
            restriction_types,
            created_by="rm",
        )
        assert created.value is None
        assert created.targets.room_types.is_wildcard


class TestCopyOnWrite:

    def test_snapshot_unchanged_by_later_writes(self, catalog, make_restriction):
        catalog.add(make_restriction("closeout", restriction_id="a"))
        before = catalog.snapshot()
        catalog.add(make_restriction("minlos", value=2, restriction_id="b"))

        assert [r.id for r in before] == ["a"]
        assert [r.id for r in catalog.snapshot()] == ["a", "b"]

    def test_duplicate_id_rejected(self, catalog, make_restriction):
        catalog.add(make_restriction("closeout", restriction_id="a"))
        with pytest.raises(ValueError, match="already exists"):
            catalog.add(make_restriction("ctd", restriction_id="a"))

    def test_remove(self, catalog, make_restriction):
        catalog.add(make_restriction("closeout", restriction_id="a"))
        assert catalog.remove("a") is True
        assert catalog.remove("a") is False
        assert len(catalog) == 0


class TestLifecycle:

    @pytest.mark.parametrize(
        "today,expected",
        [
            (date(2024, 2, 9), RestrictionStatus.SCHEDULED),
            (date(2024, 2, 10), RestrictionStatus.ACTIVE),
            (date(2024, 2, 12), RestrictionStatus.ACTIVE),
            (date(2024, 2, 13), RestrictionStatus.EXPIRED),
        ],
    )
    def test_derive_status(self, make_restriction, today, expected):
        restriction = make_restriction(
            "minlos", "2024-02-10", "2024-02-12", status=RestrictionStatus.SCHEDULED
        )
        assert derive_status(restriction, today) == expected

    def test_expired_never_reactivates(self, make_restriction):
        restriction = make_restriction(
            "minlos", "2024-02-10", "2024-02-12", status=RestrictionStatus.EXPIRED
        )
        assert derive_status(restriction, date(2024, 2, 11)) == RestrictionStatus.EXPIRED

    def test_refresh_statuses_moves_restrictions_along(self, catalog, make_restriction):
        catalog.add(make_restriction(
            "minlos", "2024-02-10", "2024-02-12", status=RestrictionStatus.SCHEDULED, restriction_id="a"
        ))

        assert catalog.refresh_statuses(date(2024, 2, 10)) == 1
        assert catalog.get("a").status == RestrictionStatus.ACTIVE

        assert catalog.refresh_statuses(date(2024, 2, 11)) == 0

        assert catalog.refresh_statuses(date(2024, 2, 13)) == 1
        assert catalog.get("a").status == RestrictionStatus.EXPIRED

    def test_active_restriction_never_returns_to_scheduled(self, make_restriction):
        restriction = make_restriction(
            "closeout", "2024-02-10", "2024-02-12", status=RestrictionStatus.ACTIVE
        )
        assert derive_status(restriction, date(2024, 2, 1)) == RestrictionStatus.ACTIVE
        assert derive_status(restriction, date(2024, 2, 13)) == RestrictionStatus.EXPIRED

    def test_refresh_keeps_early_activated_closeout_blocking(self, catalog, make_restriction):
        catalog.add(make_restriction(
            "closeout", "2024-02-10", "2024-02-12", status=RestrictionStatus.ACTIVE, restriction_id="c"
        ))

        assert catalog.refresh_statuses(date(2024, 2, 1)) == 0
        assert catalog.get("c").status == RestrictionStatus.ACTIVE
        assert RestrictionResolver(catalog).is_closeout_applied("Suite", "BAR", "2024-02-11") is True
