import pytest

from inventory_engine.domain.models import RestrictionCategory
from inventory_engine.domain.services.config_engine import ConfigEngine


def _write_config(tmp_path, types_yaml, classifier_yaml="classifier: {}\n"):
    (tmp_path / "restriction_types.yml").write_text(types_yaml)
    (tmp_path / "classifier.yml").write_text(classifier_yaml)
    return ConfigEngine(tmp_path)


def test_shipped_catalog_loads(config_engine):
    catalog = config_engine.restriction_types
    assert catalog.ids == [
        "closeout", "ctd", "no_arrival", "minlos", "maxlos", "booking_window", "full_pattern",
    ]
    assert catalog.get("closeout").priority == 10
    assert catalog.get("minlos").category == RestrictionCategory.LENGTH_OF_STAY
    assert catalog.get("minlos").needs_value is True
    assert [t.id for t in catalog.by_priority()][:3] == ["closeout", "ctd", "no_arrival"]


def test_shipped_thresholds_match_defaults(config_engine):
    t = config_engine.thresholds
    assert (t.sellout_inventory, t.high_demand_rate, t.good_pace_rate, t.slow_pace_rate) == (5, 0.8, 0.6, 0.3)
    assert (t.last_minute_days, t.booking_window_days, t.default_capacity) == (3, 14, 100)
    assert config_engine.restriction_limits.max_nights == 30


def test_unknown_type_lookup_raises(config_engine):
    with pytest.raises(ValueError, match="Restriction type not found"):
        config_engine.restriction_types.get("nope")
    assert config_engine.restriction_types.find("nope") is None


def test_missing_file_fails_fast(tmp_path):
    engine = ConfigEngine(tmp_path)
    with pytest.raises(FileNotFoundError):
        engine.load_all()


def test_duplicate_ids_rejected(tmp_path):
    engine = _write_config(
        tmp_path,
        "restriction_types:\n"
        "  - {id: closeout, code: CTA, name: Close Out, category: availability, priority: 10, color: red}\n"
        "  - {id: closeout, code: CTA, name: Close Out, category: availability, priority: 9, color: red}\n",
    )
    with pytest.raises(ValueError, match="Duplicate"):
        engine.load_all()


def test_invalid_category_rejected(tmp_path):
    engine = _write_config(
        tmp_path,
        "restriction_types:\n"
        "  - {id: x, code: X, name: X, category: weather, priority: 1, color: red}\n",
    )
    with pytest.raises(ValueError, match="Invalid category"):
        engine.load_all()


def test_inconsistent_thresholds_rejected(tmp_path):
    engine = _write_config(
        tmp_path,
        "restriction_types:\n"
        "  - {id: x, code: X, name: X, category: rate, priority: 1, color: red}\n",
        "classifier:\n  high_demand_rate: 0.5\n",
    )
    with pytest.raises(ValueError, match="strictly descending"):
        engine.load_all()


def test_access_before_load_raises(tmp_path):
    with pytest.raises(RuntimeError, match="load_all"):
        ConfigEngine(tmp_path).thresholds
